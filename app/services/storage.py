import os
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config.settings import Settings
from app.models.exceptions import InvalidMarkerIdError, StorageUploadError, StorageURLError
from app.models.schema import StoredDocument
from app.utils.logger import Log

REMOTE_KEY_PREFIX = "plans"
LOCAL_FILE_NAME = "final.pdf"


def remote_key(marker_id: str) -> str:
    return f"{REMOTE_KEY_PREFIX}/{marker_id}.pdf"


class S3Storage:
    """Upserts stamped PDFs into an S3-compatible bucket."""

    def __init__(self, settings: Settings, client=None) -> None:
        self.settings = settings
        self.bucket = settings.storage_bucket
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self.settings.storage_endpoint_url,
                aws_access_key_id=self.settings.storage_access_key,
                aws_secret_access_key=self.settings.storage_secret_key,
                region_name=self.settings.storage_region,
            )
        return self._client

    def has_credentials(self) -> bool:
        return self._client is not None or bool(self.settings.storage_access_key)

    def save(self, marker_id: str, data: bytes) -> StoredDocument:
        key = remote_key(marker_id)
        if not self.has_credentials():
            raise StorageUploadError("storage credentials are not configured")
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType="application/pdf",
            )
        except (BotoCoreError, ClientError, ValueError) as e:
            raise StorageUploadError(f"upload of {key} failed: {e}") from e
        Log.info(f"ㄴ Uploaded {len(data)} bytes to {self.bucket}/{key}")
        return StoredDocument(key=key, location=self.public_url(key), remote=True)

    def public_url(self, key: str) -> str:
        settings = self.settings
        path = quote(key, safe="/")
        if settings.storage_public_url:
            return f"{settings.storage_public_url.rstrip('/')}/{path}"
        if settings.storage_endpoint_url:
            return f"{settings.storage_endpoint_url.rstrip('/')}/{self.bucket}/{path}"
        if settings.storage_region:
            return f"https://{self.bucket}.s3.{settings.storage_region}.amazonaws.com/{path}"
        raise StorageURLError(f"no public URL available for {key}")


class LocalStorage:
    """Writes stamped PDFs to <output_dir>/<marker_id>/final.pdf."""

    def __init__(self, output_dir: str) -> None:
        self.root = Path(output_dir).resolve()

    def target_path(self, marker_id: str) -> Path:
        path = (self.root / marker_id / LOCAL_FILE_NAME).resolve()
        if path.parent.parent != self.root:
            raise InvalidMarkerIdError(f"marker ID {marker_id!r} escapes the output directory")
        return path

    def save(self, marker_id: str, data: bytes) -> StoredDocument:
        path = self.target_path(marker_id)
        os.makedirs(path.parent, exist_ok=True)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise StorageUploadError(f"could not write {path}: {e}") from e
        Log.info(f"ㄴ Wrote {len(data)} bytes to {path}")
        relative = path.relative_to(self.root).as_posix()
        return StoredDocument(key=relative, location=f"/output/{quote(relative)}", remote=False)


def build_storage(settings: Settings, client: Optional[object] = None):
    if settings.storage_mode == "local":
        return LocalStorage(settings.output_dir)
    if settings.storage_mode == "remote":
        return S3Storage(settings, client=client)
    raise ValueError(f"unknown storage mode: {settings.storage_mode}")
