from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from visitdesk.core.config import get_settings
from visitdesk.db.session import get_db
from visitdesk.schemas.visitor import RegistrationCreate, RegistrationResponse
from visitdesk.services.dashboard_service import build_dashboard_patch
from visitdesk.services.employee_service import list_employees, serialize_employee
from visitdesk.services.registration_service import pre_register
from visitdesk.socket.server import sio

router = APIRouter()
settings = get_settings()


@router.get("/employees")
def registration_employees(db: Session = Depends(get_db)):
    return {"data": [serialize_employee(row) for row in list_employees(db)]}


@router.post("")
async def register_visit(payload: RegistrationCreate, db: Session = Depends(get_db)):
    visitor, appointment = pre_register(
        db=db,
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        company=payload.company,
        employee_id=payload.employeeId,
        purpose=payload.purpose,
        visit_date=payload.visitDate,
        visit_time=payload.visitTime,
    )

    await sio.emit(
        "dashboard.patch",
        build_dashboard_patch("appointment.created", appointmentId=appointment.id, visitorId=visitor.visitor_id),
        namespace=settings.DASHBOARD_NAMESPACE,
    )

    data = RegistrationResponse(
        visitorId=visitor.visitor_id,
        qrCode=visitor.qr_code or "",
        appointmentId=appointment.id,
        status=appointment.status.value,
    )
    return {"data": data.model_dump()}
