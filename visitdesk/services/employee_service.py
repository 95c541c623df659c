from sqlalchemy.orm import Session

from visitdesk.core.exceptions import AppException
from visitdesk.db.models import Employee


def list_employees(db: Session) -> list[Employee]:
    return db.query(Employee).order_by(Employee.name.asc()).all()


def get_employee(db: Session, employee_id: str) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise AppException("Employee not found", status_code=404)
    return employee


def create_employee(db: Session, name: str, email: str, department: str | None = None) -> Employee:
    employee = Employee(
        name=name.strip(),
        email=email.strip().lower(),
        department=(department or "").strip() or None,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def serialize_employee(row: Employee) -> dict:
    return {
        "id": row.id,
        "name": row.name,
        "email": row.email,
        "department": row.department,
    }
