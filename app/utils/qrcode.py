from io import BytesIO

import qrcode

from app.models.exceptions import RenderError


def build_qr_payload(base_url: str, marker_id: str) -> str:
    return f"{base_url.rstrip('/')}/m/{marker_id}"


def generate_qr_png(data: str) -> bytes:
    """
    Generate a QR code PNG from the given data string.

    Args:
        data (str): The data to encode in the QR code.

    Returns:
        bytes: PNG-encoded QR code, black on white.
    """
    try:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img_pil = qr.make_image(fill_color="black", back_color="white").convert("RGB")
        img_bytes = BytesIO()
        img_pil.save(img_bytes, format="PNG")
    except Exception as e:
        raise RenderError(f"QR code generation failed: {e}") from e
    return img_bytes.getvalue()
