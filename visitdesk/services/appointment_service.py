import logging
from datetime import datetime

from sqlalchemy.orm import Session, joinedload

from visitdesk.core.exceptions import AppException
from visitdesk.db.models import Appointment, AppointmentStatus, User, UserRole
from visitdesk.services.employee_service import serialize_employee
from visitdesk.services.visitor_service import serialize_visitor

logger = logging.getLogger(__name__)

DECIDING_ROLES = {UserRole.admin, UserRole.employee}


def list_appointments(db: Session, status: AppointmentStatus | None = None) -> list[Appointment]:
    query = (
        db.query(Appointment)
        .options(joinedload(Appointment.visitor), joinedload(Appointment.employee))
        .order_by(Appointment.created_at.desc())
    )
    if status:
        query = query.filter(Appointment.status == status)
    return query.all()


def get_appointment(db: Session, appointment_id: str) -> Appointment:
    appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    if not appointment:
        raise AppException("Appointment not found", status_code=404)
    return appointment


def _ensure_can_decide(actor: User, appointment: Appointment) -> None:
    if actor.role not in DECIDING_ROLES:
        raise AppException("Insufficient permissions", status_code=403)
    # An employee account linked to an Employee only decides that employee's visits.
    if actor.role == UserRole.employee and actor.employee_id and actor.employee_id != appointment.employee_id:
        raise AppException("Appointment belongs to another employee", status_code=403)


def _decide(db: Session, appointment_id: str, actor: User, values: dict) -> Appointment:
    appointment = get_appointment(db, appointment_id)
    _ensure_can_decide(actor, appointment)

    updated = (
        db.query(Appointment)
        .filter(Appointment.id == appointment_id, Appointment.status == AppointmentStatus.pending)
        .update(values, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        raise AppException(f"Appointment is already {appointment.status.value}", status_code=409)
    db.commit()
    db.refresh(appointment)
    logger.info(
        "appointment.%s appointment_id=%s actor_id=%s",
        appointment.status.value,
        appointment.id,
        actor.id,
    )
    return appointment


def approve_appointment(db: Session, appointment_id: str, actor: User) -> Appointment:
    return _decide(
        db,
        appointment_id,
        actor,
        {
            Appointment.status: AppointmentStatus.approved,
            Appointment.approved_at: datetime.utcnow(),
            Appointment.calendar_blocked: True,
        },
    )


def decline_appointment(db: Session, appointment_id: str, actor: User) -> Appointment:
    return _decide(db, appointment_id, actor, {Appointment.status: AppointmentStatus.declined})


def serialize_appointment(row: Appointment, embed: bool = True) -> dict:
    data = {
        "id": row.id,
        "visitorId": row.visitor_id,
        "employeeId": row.employee_id,
        "purpose": row.purpose,
        "visitDate": row.visit_date.isoformat(),
        "visitTime": row.visit_time.strftime("%H:%M"),
        "status": row.status.value,
        "approvedAt": row.approved_at.isoformat() if row.approved_at else None,
        "calendarBlocked": bool(row.calendar_blocked),
        "createdAt": row.created_at.isoformat() if row.created_at else None,
    }
    if embed:
        data["visitor"] = serialize_visitor(row.visitor) if row.visitor else None
        data["employee"] = serialize_employee(row.employee) if row.employee else None
    return data
