from io import BytesIO

from pypdf import PdfReader, PdfWriter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from app.models.exceptions import DocumentParseError, RenderError
from app.models.schema import StampedDocument, StampLayout


def load_document(pdf_bytes: bytes) -> PdfReader:
    if not pdf_bytes:
        raise DocumentParseError("uploaded file is empty")
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        page_count = len(reader.pages)
    except Exception as e:
        raise DocumentParseError(f"could not parse PDF: {e}") from e
    if page_count == 0:
        raise DocumentParseError("PDF has no pages")
    return reader


def build_overlay(width: float, height: float, marker_id: str, qr_png: bytes, layout: StampLayout) -> bytes:
    """Render a single transparent page holding the QR image and the ID label."""
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=(width, height))

    size = layout.qr_size
    c.drawImage(
        ImageReader(BytesIO(qr_png)),
        width - size - layout.qr_margin,
        layout.qr_margin,
        width=size,
        height=size,
    )

    c.setFillColorRGB(0, 0, 0)
    c.setFont(layout.font_name, layout.font_size)
    c.drawString(layout.label_x, layout.label_y, f"{layout.label_prefix}{marker_id}")

    c.save()
    return buf.getvalue()


def stamp_first_page(
    pdf_bytes: bytes,
    marker_id: str,
    qr_png: bytes,
    layout: StampLayout = StampLayout(),
) -> StampedDocument:
    reader = load_document(pdf_bytes)
    try:
        writer = PdfWriter(clone_from=reader)
    except Exception as e:
        raise DocumentParseError(f"could not copy PDF pages: {e}") from e

    first_page = writer.pages[0]
    width = float(first_page.mediabox.width)
    height = float(first_page.mediabox.height)

    try:
        overlay = build_overlay(width, height, marker_id, qr_png, layout)
        first_page.merge_page(PdfReader(BytesIO(overlay)).pages[0])
    except Exception as e:
        raise RenderError(f"could not stamp first page: {e}") from e

    out = BytesIO()
    try:
        writer.write(out)
    except Exception as e:
        raise RenderError(f"could not serialize stamped PDF: {e}") from e

    return StampedDocument(
        marker_id=marker_id,
        pdf_bytes=out.getvalue(),
        page_count=len(writer.pages),
    )
