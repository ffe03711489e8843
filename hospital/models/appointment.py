"""Appointment model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, text
from hospital.database import Base

STATUS_SCHEDULED = "Scheduled"
STATUS_COMPLETED = "Completed"
STATUS_CANCELLED = "Cancelled"
APPOINTMENT_STATUSES = (STATUS_SCHEDULED, STATUS_COMPLETED, STATUS_CANCELLED)


class Appointment(Base):
    """Represents a booked visit with a doctor at one exact date and time."""
    __tablename__ = "appointments"
    __table_args__ = (
        # Only live bookings hold their time; cancelled or completed rows free it again.
        Index(
            "uq_appointments_doctor_slot",
            "doctor_id",
            "date_time",
            unique=True,
            sqlite_where=text("status = 'Scheduled'"),
            postgresql_where=text("status = 'Scheduled'"),
        ),
        Index("idx_appointments_patient_time", "patient_id", "date_time"),
    )

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    date_time = Column(DateTime, nullable=False)
    status = Column(String, default=STATUS_SCHEDULED, nullable=False)
    reason = Column(String(500))
    location = Column(String(200))
