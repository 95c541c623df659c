from datetime import date, time

import pytest

from visitdesk.core.exceptions import AppException
from visitdesk.db.models import Appointment, AppointmentStatus, Employee, Visitor
from visitdesk.services import registration_service
from visitdesk.services.registration_service import pre_register


def _register(db, employee_id: str):
    return pre_register(
        db,
        name="Jane Doe",
        email="jane@example.com",
        phone="555-0100",
        employee_id=employee_id,
        purpose="Interview",
        visit_date=date(2025, 1, 10),
        visit_time=time(10, 0),
    )


def test_pre_register_creates_pending_appointment(db, employee):
    visitor, appointment = _register(db, employee.id)

    assert visitor.visitor_id.startswith("VIS")
    assert visitor.email_verified is False
    assert visitor.company is None
    assert visitor.qr_code.startswith("data:image/png;base64,")
    assert appointment.status == AppointmentStatus.pending
    assert appointment.approved_at is None
    assert appointment.calendar_blocked is False
    assert appointment.visitor_id == visitor.id
    assert appointment.employee_id == employee.id


def test_unknown_employee_writes_nothing(db):
    with pytest.raises(AppException) as exc:
        _register(db, "missing-employee")

    assert exc.value.status_code == 404
    assert db.query(Visitor).count() == 0
    assert db.query(Appointment).count() == 0


def test_failed_qr_render_rolls_back_visitor_and_appointment(db, employee, monkeypatch):
    def broken_render(_payload):
        raise RuntimeError("renderer unavailable")

    monkeypatch.setattr(registration_service, "render_qr_data_uri", broken_render)

    with pytest.raises(RuntimeError):
        _register(db, employee.id)

    assert db.query(Visitor).count() == 0
    assert db.query(Appointment).count() == 0


def test_duplicate_visitor_id_is_rejected_without_retry(db, employee, monkeypatch):
    monkeypatch.setattr(registration_service, "generate_visitor_id", lambda: "VIS1FIXED")
    _register(db, employee.id)

    with pytest.raises(AppException) as exc:
        _register(db, employee.id)

    assert exc.value.status_code == 409
    assert db.query(Visitor).count() == 1
    assert db.query(Appointment).count() == 1


def test_register_endpoint_returns_badge(client, db, employee):
    response = client.post(
        "/api/v1/registrations",
        json={
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "555-0100",
            "company": "Acme",
            "employeeId": employee.id,
            "purpose": "Interview",
            "visitDate": "2025-01-10",
            "visitTime": "10:00",
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["qrCode"].startswith("data:image/png;base64,")
    visitor = db.query(Visitor).filter(Visitor.visitor_id == data["visitorId"]).one()
    assert visitor.company == "Acme"


def test_register_endpoint_rejects_missing_fields(client, db, employee):
    response = client.post(
        "/api/v1/registrations",
        json={"name": "Jane Doe", "email": "jane@example.com", "employeeId": employee.id},
    )

    assert response.status_code == 422
    assert db.query(Visitor).count() == 0


def test_registration_employee_picker_is_sorted(client, db, employee):
    db.add(Employee(name="Alice", email="alice@example.com"))
    db.commit()

    response = client.get("/api/v1/registrations/employees")

    assert response.status_code == 200
    assert [row["name"] for row in response.json()["data"]] == ["Alice", "Bob"]
