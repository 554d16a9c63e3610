from __future__ import annotations

import io

import qrcode


def user_qr_png(user_id: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """PNG of a QR code whose payload is the raw user id."""

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(str(user_id))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
