"""Doctor schedule model definitions."""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Index, Integer, String, Time
from hospital.database import Base


class DoctorSchedule(Base):
    """Working hours and lunch break of one doctor on one date."""
    __tablename__ = "doctor_schedules"
    __table_args__ = (
        Index("uq_doctor_schedules_doctor_date", "doctor_id", "date", unique=True),
    )

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    lunch_start_time = Column(Time, nullable=False)
    lunch_end_time = Column(Time, nullable=False)
    location = Column(String)
    is_available = Column(Boolean, default=True)
    # Bounds used while generating the day; not enforced afterwards.
    min_work_time = Column(Time)
    max_work_time = Column(Time)
