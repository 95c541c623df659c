from sqlalchemy.orm import Session

from visitdesk.db.models import Appointment, AppointmentStatus, CheckIn, Employee, Visitor
from visitdesk.socket.manager import socket_state


def get_admin_overview(db: Session) -> dict:
    return {
        "metrics": {
            "totalVisitors": db.query(Visitor).count(),
            "pendingApprovals": db.query(Appointment).filter(Appointment.status == AppointmentStatus.pending).count(),
            "activeCheckIns": db.query(CheckIn).filter(CheckIn.checked_out_at.is_(None)).count(),
            "employees": db.query(Employee).count(),
            "connectedStaff": socket_state.connected_users(),
        },
        "appointmentsByStatus": {
            status.value: db.query(Appointment).filter(Appointment.status == status).count()
            for status in AppointmentStatus
        },
    }


def build_dashboard_patch(event: str, **ids: str | None) -> dict:
    """Payload pushed to open admin and security screens after a lifecycle change."""
    return {"data": {"event": event, **{key: value for key, value in ids.items() if value}}}
