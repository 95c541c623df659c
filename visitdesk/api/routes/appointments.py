from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from visitdesk.api.deps import require_roles
from visitdesk.core.config import get_settings
from visitdesk.core.exceptions import AppException
from visitdesk.db.models import AppointmentStatus, User
from visitdesk.db.session import get_db
from visitdesk.services.appointment_service import (
    approve_appointment,
    decline_appointment,
    list_appointments,
    serialize_appointment,
)
from visitdesk.services.dashboard_service import build_dashboard_patch
from visitdesk.socket.server import sio

router = APIRouter()
settings = get_settings()


@router.get("")
def appointments(
    status: str | None = Query(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin", "employee")),
):
    try:
        status_filter = AppointmentStatus(status) if status else None
    except ValueError as exc:
        raise AppException("Invalid appointment status", status_code=400) from exc
    return {"data": [serialize_appointment(row) for row in list_appointments(db, status_filter)]}


@router.post("/{appointment_id}/approve")
async def approve(
    appointment_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_roles("admin", "employee")),
):
    row = approve_appointment(db, appointment_id, actor)
    await sio.emit(
        "dashboard.patch",
        build_dashboard_patch("appointment.approved", appointmentId=row.id),
        namespace=settings.DASHBOARD_NAMESPACE,
    )
    return {"data": serialize_appointment(row, embed=False)}


@router.post("/{appointment_id}/decline")
async def decline(
    appointment_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_roles("admin", "employee")),
):
    row = decline_appointment(db, appointment_id, actor)
    await sio.emit(
        "dashboard.patch",
        build_dashboard_patch("appointment.declined", appointmentId=row.id),
        namespace=settings.DASHBOARD_NAMESPACE,
    )
    return {"data": serialize_appointment(row, embed=False)}
