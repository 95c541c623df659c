from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from visitdesk.api.deps import require_roles
from visitdesk.core.config import get_settings
from visitdesk.db.models import User
from visitdesk.db.session import get_db
from visitdesk.schemas.visitor import CheckInCreate
from visitdesk.services.check_in_service import (
    check_in_visitor,
    check_out,
    list_check_ins,
    serialize_check_in,
)
from visitdesk.services.dashboard_service import build_dashboard_patch
from visitdesk.services.qr_service import decode_qr_payload
from visitdesk.services.visitor_service import lookup_visitor, serialize_visitor
from visitdesk.socket.server import sio

router = APIRouter()
settings = get_settings()


@router.get("/visitors/{visitor_id}")
def visitor_lookup(
    visitor_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("security", "admin")),
):
    visitor = lookup_visitor(db, visitor_id)
    if not visitor:
        return {
            "data": {
                "visitorId": decode_qr_payload(visitor_id),
                "status": "not_found",
                "message": "No visitor found with this ID.",
            }
        }
    return {"data": {"visitorId": visitor.visitor_id, "status": "found", "visitor": serialize_visitor(visitor)}}


@router.post("/check-ins")
async def create_check_in(
    payload: CheckInCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_roles("security", "admin")),
):
    row = check_in_visitor(db, payload.visitorId, actor)
    await sio.emit(
        "dashboard.patch",
        build_dashboard_patch("check_in.created", checkInId=row.id, appointmentId=row.appointment_id),
        namespace=settings.DASHBOARD_NAMESPACE,
    )
    return {"data": serialize_check_in(row)}


@router.post("/check-ins/{check_in_id}/check-out")
async def check_out_visitor(
    check_in_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_roles("security", "admin")),
):
    row = check_out(db, check_in_id, actor)
    await sio.emit(
        "dashboard.patch",
        build_dashboard_patch("check_in.closed", checkInId=row.id),
        namespace=settings.DASHBOARD_NAMESPACE,
    )
    return {"data": serialize_check_in(row)}


@router.get("/check-ins/recent")
def recent_check_ins(
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("security", "admin")),
):
    rows = list_check_ins(db, limit=settings.RECENT_CHECK_INS_LIMIT)
    return {"data": [serialize_check_in(row) for row in rows]}
