import base64
import io
import json

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M

from visitdesk.core.config import get_settings
from visitdesk.db.models import Visitor

settings = get_settings()

DATA_URI_PREFIX = "data:image/png;base64,"


def build_visitor_qr_payload(visitor: Visitor) -> str:
    """JSON carried by the visitor's badge; security scans it back into a visitor id."""
    return json.dumps(
        {
            "visitorId": visitor.visitor_id,
            "name": visitor.name,
            "email": visitor.email,
            "phone": visitor.phone,
        }
    )


def render_qr_data_uri(payload: str, width: int | None = None, margin: int | None = None) -> str:
    width = width or settings.QR_IMAGE_WIDTH
    margin = settings.QR_IMAGE_MARGIN if margin is None else margin

    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=1, border=margin)
    qr.add_data(payload)
    qr.make(fit=True)

    image = qr.make_image(fill_color="black", back_color="white").get_image()
    image = image.convert("L").resize((width, width), Image.Resampling.NEAREST)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return DATA_URI_PREFIX + base64.b64encode(buffer.getvalue()).decode("ascii")


def decode_qr_payload(raw: str) -> str:
    """Accept either a scanned badge payload or a typed visitor id and return the visitor id."""
    value = (raw or "").strip()
    if value.startswith("{"):
        try:
            data = json.loads(value)
        except json.JSONDecodeError:
            return value
        if isinstance(data, dict) and data.get("visitorId"):
            return str(data["visitorId"]).strip()
    return value
