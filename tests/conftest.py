import io
from pathlib import Path

import pytest
from pypdf import PdfWriter
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.config.settings import Settings


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page letter PDF with a line of text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Floor plan")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Three-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for n in range(1, 4):
        c.drawString(72, 720, f"Page {n} content")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def blank_pdf_bytes() -> bytes:
    """Valid PDF with one blank page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def zero_page_pdf_bytes() -> bytes:
    """Structurally valid PDF whose page tree is empty."""
    buf = io.BytesIO()
    PdfWriter().write(buf)
    return buf.getvalue()


@pytest.fixture()
def local_settings(tmp_path: Path) -> Settings:
    return Settings(storage_mode="local", output_dir=str(tmp_path / "output"))


@pytest.fixture()
def remote_settings() -> Settings:
    return Settings(
        storage_mode="remote",
        storage_endpoint_url="https://storage.example.com/storage/v1/s3",
        storage_access_key="test-key",
        storage_secret_key="test-secret",
        storage_public_url="https://cdn.example.com/pdfs",
    )
