import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from app.models.schema import StampLayout


class Settings(BaseModel):
    """Process-wide configuration, built once at startup and passed down."""

    port: int = 3000
    log_level: str = "INFO"

    storage_mode: str = "remote"
    storage_endpoint_url: Optional[str] = None
    storage_access_key: Optional[str] = None
    storage_secret_key: Optional[str] = None
    storage_region: Optional[str] = None
    storage_bucket: str = "pdfs"
    storage_public_url: Optional[str] = None
    output_dir: str = "output"

    qr_base_url: str = "https://yourapp.com"
    marker_id_strict: bool = False
    cors_origins: List[str] = ["*"]

    layout: StampLayout = StampLayout()


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings() -> Settings:
    load_dotenv()

    raw = {
        "port": _env("PORT"),
        "log_level": _env("LOG_LEVEL"),
        "storage_mode": _env("STORAGE_MODE"),
        "storage_endpoint_url": _env("STORAGE_ENDPOINT_URL"),
        "storage_access_key": _env("STORAGE_ACCESS_KEY"),
        "storage_secret_key": _env("STORAGE_SECRET_KEY"),
        "storage_region": _env("STORAGE_REGION"),
        "storage_bucket": _env("STORAGE_BUCKET"),
        "storage_public_url": _env("STORAGE_PUBLIC_URL"),
        "output_dir": _env("OUTPUT_DIR"),
        "qr_base_url": _env("QR_BASE_URL"),
        "marker_id_strict": _env("MARKER_ID_STRICT"),
    }
    origins = _env("CORS_ORIGINS")
    if origins:
        raw["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

    layout = {
        "qr_size": _env("QR_SIZE"),
        "qr_margin": _env("QR_MARGIN"),
        "label_x": _env("LABEL_X"),
        "label_y": _env("LABEL_Y"),
        "font_size": _env("LABEL_FONT_SIZE"),
    }
    raw["layout"] = {k: v for k, v in layout.items() if v is not None}

    return Settings(**{k: v for k, v in raw.items() if v is not None})
