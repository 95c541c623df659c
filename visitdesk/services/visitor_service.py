import secrets
import string
import time

from sqlalchemy.orm import Session

from visitdesk.core.config import get_settings
from visitdesk.core.exceptions import AppException
from visitdesk.db.models import Visitor
from visitdesk.services.qr_service import decode_qr_payload

settings = get_settings()

SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_visitor_id(now_ms: int | None = None) -> str:
    """VIS + epoch milliseconds + random uppercase alphanumeric suffix.

    Uniqueness is probabilistic; the unique index on visitors.visitor_id is
    the only collision guard and a clash is reported, not retried.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(settings.VISITOR_ID_SUFFIX_LENGTH))
    return f"{settings.VISITOR_ID_PREFIX}{now_ms}{suffix}"


def lookup_visitor(db: Session, raw_visitor_id: str) -> Visitor | None:
    visitor_id = decode_qr_payload(raw_visitor_id)
    if not visitor_id:
        raise AppException("Please enter a visitor ID to look up.", status_code=400)
    return db.query(Visitor).filter(Visitor.visitor_id == visitor_id).one_or_none()


def list_visitors(db: Session, limit: int | None = None) -> list[Visitor]:
    query = db.query(Visitor).order_by(Visitor.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def serialize_visitor(row: Visitor, include_qr: bool = False) -> dict:
    data = {
        "id": row.id,
        "visitorId": row.visitor_id,
        "name": row.name,
        "email": row.email,
        "phone": row.phone,
        "company": row.company,
        "emailVerified": bool(row.email_verified),
        "createdAt": row.created_at.isoformat() if row.created_at else None,
    }
    if include_qr:
        data["qrCode"] = row.qr_code
    return data
