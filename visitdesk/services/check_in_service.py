import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from visitdesk.core.exceptions import AppException
from visitdesk.db.models import Appointment, AppointmentStatus, CheckIn, User, Visitor
from visitdesk.services.appointment_service import serialize_appointment
from visitdesk.services.visitor_service import lookup_visitor, serialize_visitor

logger = logging.getLogger(__name__)


def find_open_check_in(db: Session, visitor: Visitor) -> CheckIn | None:
    return (
        db.query(CheckIn)
        .filter(CheckIn.visitor_id == visitor.id, CheckIn.checked_out_at.is_(None))
        .first()
    )


def select_appointment_for_check_in(db: Session, visitor: Visitor) -> Appointment | None:
    """Earliest approved visit that has not been checked in yet."""
    return (
        db.query(Appointment)
        .outerjoin(CheckIn, CheckIn.appointment_id == Appointment.id)
        .filter(
            Appointment.visitor_id == visitor.id,
            Appointment.status == AppointmentStatus.approved,
            CheckIn.id.is_(None),
        )
        .order_by(Appointment.visit_date.asc(), Appointment.visit_time.asc(), Appointment.created_at.asc())
        .first()
    )


def check_in_visitor(db: Session, raw_visitor_id: str, actor: User) -> CheckIn:
    visitor = lookup_visitor(db, raw_visitor_id)
    if not visitor:
        raise AppException("No visitor found with this ID.", status_code=404)

    if find_open_check_in(db, visitor):
        raise AppException(f"{visitor.name} is already checked in.", status_code=409)

    appointment = select_appointment_for_check_in(db, visitor)
    if not appointment:
        raise AppException("This visitor doesn't have an approved appointment.", status_code=409)

    row = CheckIn(
        visitor_id=visitor.id,
        appointment_id=appointment.id,
        checked_in_at=datetime.utcnow(),
        security_user_id=actor.id,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race with another desk for the same visitor or appointment.
        db.rollback()
        raise AppException(f"{visitor.name} is already checked in.", status_code=409) from exc
    db.refresh(row)
    logger.info(
        "check_in.created check_in_id=%s visitor_id=%s appointment_id=%s actor_id=%s",
        row.id,
        visitor.visitor_id,
        appointment.id,
        actor.id,
    )
    return row


def check_out(db: Session, check_in_id: str, actor: User) -> CheckIn:
    row = db.query(CheckIn).filter(CheckIn.id == check_in_id).first()
    if not row:
        raise AppException("Check-in not found", status_code=404)

    updated = (
        db.query(CheckIn)
        .filter(CheckIn.id == check_in_id, CheckIn.checked_out_at.is_(None))
        .update({CheckIn.checked_out_at: datetime.utcnow()}, synchronize_session=False)
    )
    db.commit()
    db.refresh(row)
    if updated:
        logger.info("check_in.closed check_in_id=%s actor_id=%s", row.id, actor.id)
    else:
        logger.info("check_in.already_closed check_in_id=%s actor_id=%s", row.id, actor.id)
    return row


def list_check_ins(db: Session, limit: int | None = None, active_only: bool = False) -> list[CheckIn]:
    query = (
        db.query(CheckIn)
        .options(joinedload(CheckIn.visitor), joinedload(CheckIn.appointment))
        .order_by(CheckIn.created_at.desc())
    )
    if active_only:
        query = query.filter(CheckIn.checked_out_at.is_(None))
    if limit:
        query = query.limit(limit)
    return query.all()


def serialize_check_in(row: CheckIn) -> dict:
    return {
        "id": row.id,
        "visitorId": row.visitor_id,
        "appointmentId": row.appointment_id,
        "securityUserId": row.security_user_id,
        "checkedInAt": row.checked_in_at.isoformat() if row.checked_in_at else None,
        "checkedOutAt": row.checked_out_at.isoformat() if row.checked_out_at else None,
        "state": "active" if row.is_open else "completed",
        "visitor": serialize_visitor(row.visitor) if row.visitor else None,
        "appointment": serialize_appointment(row.appointment, embed=False) if row.appointment else None,
    }
