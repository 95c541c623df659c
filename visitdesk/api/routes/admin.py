from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from visitdesk.api.deps import require_roles
from visitdesk.db.models import User
from visitdesk.db.session import get_db
from visitdesk.schemas.auth import StaffUserCreate
from visitdesk.schemas.employee import EmployeeCreate
from visitdesk.services.auth_service import create_staff_user, serialize_user
from visitdesk.services.check_in_service import list_check_ins, serialize_check_in
from visitdesk.services.dashboard_service import get_admin_overview
from visitdesk.services.employee_service import create_employee, list_employees, serialize_employee
from visitdesk.services.visitor_service import list_visitors, serialize_visitor

router = APIRouter()


@router.get("/overview")
def admin_overview(
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    return {"data": get_admin_overview(db)}


@router.get("/visitors")
def admin_list_visitors(
    limit: int = Query(default=200, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    return {"data": [serialize_visitor(row, include_qr=True) for row in list_visitors(db, limit=limit)]}


@router.get("/employees")
def admin_list_employees(
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    return {"data": [serialize_employee(row) for row in list_employees(db)]}


@router.post("/employees")
def admin_create_employee(
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    row = create_employee(db, payload.name, payload.email, payload.department)
    return {"data": serialize_employee(row)}


@router.get("/check-ins")
def admin_list_check_ins(
    active: bool = Query(default=False),
    limit: int = Query(default=200, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    rows = list_check_ins(db, limit=limit, active_only=active)
    return {"data": [serialize_check_in(row) for row in rows]}


@router.post("/users")
def admin_create_user(
    payload: StaffUserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    user = create_staff_user(
        db=db,
        full_name=payload.fullName,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        employee_id=payload.employeeId,
    )
    return {"data": serialize_user(user)}
