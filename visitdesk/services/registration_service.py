import logging
from datetime import date, time
from time import perf_counter

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from visitdesk.core.exceptions import AppException
from visitdesk.db.models import Appointment, AppointmentStatus, Visitor
from visitdesk.services.employee_service import get_employee
from visitdesk.services.qr_service import build_visitor_qr_payload, render_qr_data_uri
from visitdesk.services.visitor_service import generate_visitor_id

logger = logging.getLogger(__name__)


def pre_register(
    db: Session,
    name: str,
    email: str,
    phone: str,
    employee_id: str,
    purpose: str,
    visit_date: date,
    visit_time: time,
    company: str | None = None,
) -> tuple[Visitor, Appointment]:
    """Create the visitor, the pending appointment and the QR badge in one transaction.

    Nothing is committed until every step has succeeded, so a failed QR render
    or appointment insert never leaves a visitor row behind.
    """
    started = perf_counter()
    phase = "resolve_employee"
    try:
        employee = get_employee(db, employee_id)

        phase = "create_visitor"
        visitor = Visitor(
            visitor_id=generate_visitor_id(),
            name=name.strip(),
            email=email.strip(),
            phone=phone.strip(),
            company=(company or "").strip() or None,
            email_verified=False,
        )
        db.add(visitor)
        db.flush()

        phase = "create_appointment"
        appointment = Appointment(
            visitor_id=visitor.id,
            employee_id=employee.id,
            purpose=purpose.strip(),
            visit_date=visit_date,
            visit_time=visit_time,
            status=AppointmentStatus.pending,
            approved_at=None,
            calendar_blocked=False,
        )
        db.add(appointment)
        db.flush()

        phase = "render_qr"
        visitor.qr_code = render_qr_data_uri(build_visitor_qr_payload(visitor))

        phase = "commit"
        db.commit()
    except AppException:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        logger.warning("registration rejected by store phase=%s error=%s", phase, exc.orig)
        raise AppException("Registration conflicts with an existing record", status_code=409) from exc
    except Exception:
        db.rollback()
        logger.exception(
            "registration failed in %.1fms phase=%s employee_id=%s",
            (perf_counter() - started) * 1000,
            phase,
            employee_id,
        )
        raise

    db.refresh(visitor)
    db.refresh(appointment)
    logger.info(
        "registration completed in %.1fms visitor_id=%s appointment_id=%s",
        (perf_counter() - started) * 1000,
        visitor.visitor_id,
        appointment.id,
    )
    return visitor, appointment
