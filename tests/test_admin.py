from conftest import auth_headers

from visitdesk.db.models import AppointmentStatus
from visitdesk.services import dashboard_service
from visitdesk.socket.manager import SocketState


def test_overview_counts(client, admin, make_appointment):
    make_appointment()
    make_appointment()
    make_appointment(status=AppointmentStatus.declined)

    data = client.get("/api/v1/admin/overview", headers=auth_headers(admin)).json()["data"]

    assert data["metrics"]["totalVisitors"] == 3
    assert data["metrics"]["pendingApprovals"] == 2
    assert data["metrics"]["activeCheckIns"] == 0
    assert data["appointmentsByStatus"]["declined"] == 1
    assert data["appointmentsByStatus"]["completed"] == 0


def test_overview_is_admin_only(client, guard):
    assert client.get("/api/v1/admin/overview", headers=auth_headers(guard)).status_code == 403


def test_add_employee(client, admin, employee):
    created = client.post(
        "/api/v1/admin/employees",
        json={"name": "Alice", "email": "Alice@Example.com", "department": " "},
        headers=auth_headers(admin),
    )

    assert created.status_code == 200
    assert created.json()["data"]["email"] == "alice@example.com"
    assert created.json()["data"]["department"] is None

    names = [row["name"] for row in client.get("/api/v1/admin/employees", headers=auth_headers(admin)).json()["data"]]
    assert names == ["Alice", "Bob"]


def test_visitor_list_includes_badge(client, admin, make_appointment):
    make_appointment()

    rows = client.get("/api/v1/admin/visitors", headers=auth_headers(admin)).json()["data"]

    assert len(rows) == 1
    assert rows[0]["emailVerified"] is False
    assert "qrCode" in rows[0]


def test_overview_reports_connected_dashboard_staff(client, admin, guard, monkeypatch):
    state = SocketState()
    state.bind(admin.id, "sid-a")
    state.bind(guard.id, "sid-b")
    state.bind(guard.id, "sid-c")
    monkeypatch.setattr(dashboard_service, "socket_state", state)

    data = client.get("/api/v1/admin/overview", headers=auth_headers(admin)).json()["data"]

    assert data["metrics"]["connectedStaff"] == 2
