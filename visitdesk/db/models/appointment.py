import uuid
from datetime import date, datetime, time
from enum import Enum

from sqlalchemy import Boolean, Date, DateTime, Enum as SqlEnum, ForeignKey, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from visitdesk.db.base import Base


class AppointmentStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    declined = "declined"
    # Part of the stored enum; no operation assigns it.
    completed = "completed"


class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    visitor_id: Mapped[str] = mapped_column(String(36), ForeignKey("visitors.id"), nullable=False, index=True)
    employee_id: Mapped[str] = mapped_column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    purpose: Mapped[str] = mapped_column(Text, nullable=False)
    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    visit_time: Mapped[time] = mapped_column(Time, nullable=False)
    status: Mapped[AppointmentStatus] = mapped_column(
        SqlEnum(AppointmentStatus, name="appointment_status"),
        nullable=False,
        default=AppointmentStatus.pending,
        index=True,
    )
    approved_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    calendar_blocked: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    visitor = relationship("Visitor", back_populates="appointments")
    employee = relationship("Employee", back_populates="appointments")
    check_in = relationship("CheckIn", back_populates="appointment", uselist=False)
