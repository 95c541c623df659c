from conftest import auth_headers

from visitdesk.db.models import Appointment, CheckIn, Visitor


def test_full_visit_from_registration_to_check_out(client, db, admin, guard, employee):
    registered = client.post(
        "/api/v1/registrations",
        json={
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "555-0100",
            "employeeId": employee.id,
            "purpose": "Interview",
            "visitDate": "2025-01-10",
            "visitTime": "10:00",
        },
    ).json()["data"]
    visitor_id = registered["visitorId"]
    assert db.query(Visitor).count() == 1
    assert registered["status"] == "pending"

    approved = client.post(
        f"/api/v1/appointments/{registered['appointmentId']}/approve",
        headers=auth_headers(admin),
    )
    assert approved.json()["data"]["status"] == "approved"

    found = client.get(f"/api/v1/security/visitors/{visitor_id}", headers=auth_headers(guard)).json()["data"]
    assert found["visitor"]["name"] == "Jane Doe"

    checked_in = client.post(
        "/api/v1/security/check-ins",
        json={"visitorId": visitor_id},
        headers=auth_headers(guard),
    ).json()["data"]
    assert checked_in["state"] == "active"

    active = client.get("/api/v1/admin/check-ins", params={"active": True}, headers=auth_headers(admin))
    assert [row["id"] for row in active.json()["data"]] == [checked_in["id"]]

    closed = client.post(
        f"/api/v1/security/check-ins/{checked_in['id']}/check-out",
        headers=auth_headers(guard),
    ).json()["data"]
    assert closed["id"] == checked_in["id"]
    assert closed["state"] == "completed"
    assert db.query(CheckIn).count() == 1
    assert db.query(Appointment).count() == 1

    overview = client.get("/api/v1/admin/overview", headers=auth_headers(admin)).json()["data"]
    assert overview["metrics"] == {
        "totalVisitors": 1,
        "pendingApprovals": 0,
        "activeCheckIns": 0,
        "employees": 1,
    }
