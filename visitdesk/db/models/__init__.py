from visitdesk.db.models.appointment import Appointment, AppointmentStatus
from visitdesk.db.models.check_in import CheckIn
from visitdesk.db.models.employee import Employee
from visitdesk.db.models.user import User, UserRole
from visitdesk.db.models.visitor import Visitor

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "CheckIn",
    "Employee",
    "User",
    "UserRole",
    "Visitor",
]
