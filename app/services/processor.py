from typing import Optional

from app.config.settings import Settings
from app.models.exceptions import MissingUploadError
from app.models.schema import ProcessResult
from app.services.stamper import stamp_first_page
from app.utils.logger import Log
from app.utils.marker import resolve_marker_id
from app.utils.qrcode import build_qr_payload, generate_qr_png


class DocumentProcessor:
    """Runs one upload through ID resolution, QR rendering, stamping and storage."""

    def __init__(self, settings: Settings, storage) -> None:
        self.settings = settings
        self.storage = storage

    def process(self, pdf_bytes: Optional[bytes], marker_id: Optional[str] = None) -> ProcessResult:
        if pdf_bytes is None:
            raise MissingUploadError("no PDF file was uploaded")

        marker_id = resolve_marker_id(marker_id, strict=self.settings.marker_id_strict)
        Log.info(f"Processing start: {marker_id} ({len(pdf_bytes)} bytes)")
        try:
            # 1. QR code
            qr_payload = build_qr_payload(self.settings.qr_base_url, marker_id)
            qr_png = generate_qr_png(qr_payload)
            Log.info(f"ㄴ QR payload: {qr_payload}")

            # 2. Stamp the first page
            stamped = stamp_first_page(pdf_bytes, marker_id, qr_png, self.settings.layout)
            Log.info(f"ㄴ Stamped page 1 of {stamped.page_count}, {len(stamped.pdf_bytes)} bytes")

            # 3. Persist
            stored = self.storage.save(marker_id, stamped.pdf_bytes)
        except Exception as e:
            Log.error(f"ㄴ [ERROR] Failed to process marker_id={marker_id}: {e}")
            raise

        Log.info(f"Processing done: {marker_id} -> {stored.location}")
        return ProcessResult(
            marker_id=marker_id,
            qr_payload=qr_payload,
            page_count=stamped.page_count,
            stored=stored,
        )

