"""
core/pickup.py – Pickup verification material for an order.

Every order gets a 6-digit numeric token staff can type in, and a QR code
(PNG data URL) encoding {order_id, numeric_token, student_id}.
"""
import base64
import io
import json
import secrets

import qrcode
from qrcode.constants import ERROR_CORRECT_L

TOKEN_MIN = 100_000
TOKEN_MAX = 999_999


def generate_numeric_token() -> str:
    return str(TOKEN_MIN + secrets.randbelow(TOKEN_MAX - TOKEN_MIN + 1))


def qr_payload(order_id: str, numeric_token: str, student_id: str) -> str:
    return json.dumps(
        {"order_id": order_id, "numeric_token": numeric_token, "student_id": student_id},
        separators=(",", ":"),
    )


def render_qr_data_url(payload: str) -> str:
    """Encode payload as a QR image, return it as a data:image/png;base64 URL."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_L,
        box_size=8,
        border=2,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
