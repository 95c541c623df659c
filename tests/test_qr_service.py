import base64
import io
import json

from PIL import Image

from visitdesk.db.models import Visitor
from visitdesk.services.qr_service import (
    DATA_URI_PREFIX,
    build_visitor_qr_payload,
    decode_qr_payload,
    render_qr_data_uri,
)


def _decode_image(data_uri: str) -> Image.Image:
    assert data_uri.startswith(DATA_URI_PREFIX)
    return Image.open(io.BytesIO(base64.b64decode(data_uri[len(DATA_URI_PREFIX):])))


def test_render_uses_configured_width():
    image = _decode_image(render_qr_data_uri('{"visitorId": "VIS1"}'))
    assert image.format == "PNG"
    assert image.size == (300, 300)


def test_render_honours_explicit_width():
    image = _decode_image(render_qr_data_uri("hello", width=120, margin=0))
    assert image.size == (120, 120)


def test_payload_carries_identifying_fields():
    visitor = Visitor(visitor_id="VIS123ABC", name="Jane Doe", email="jane@example.com", phone="555-0100")
    payload = json.loads(build_visitor_qr_payload(visitor))
    assert payload == {
        "visitorId": "VIS123ABC",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
    }


def test_decode_accepts_scanned_payload_and_typed_id():
    scanned = json.dumps({"visitorId": "VIS123ABC", "name": "Jane Doe"})
    assert decode_qr_payload(scanned) == "VIS123ABC"
    assert decode_qr_payload("  VIS123ABC ") == "VIS123ABC"
    assert decode_qr_payload("{not json") == "{not json"
    assert decode_qr_payload("") == ""
