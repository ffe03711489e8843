"""Record store backing the scheduling engine.

Wraps one SQLAlchemy session. The database constraints are the authority
for uniqueness: one schedule per doctor and date, one live appointment per
doctor and exact time.
"""

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hospital.models.appointment import STATUS_SCHEDULED, Appointment
from hospital.models.doctor import Doctor, Patient
from hospital.models.schedule import DoctorSchedule
from hospital.scheduling.errors import UniqueConstraintViolation

logger = logging.getLogger(__name__)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class SchedulingStore:
    """Reads and writes schedules and appointments through ``db``."""

    def __init__(self, db: Session):
        self.db = db

    def get_doctor(self, doctor_id: int) -> Doctor | None:
        return self.db.get(Doctor, doctor_id)

    def get_patient(self, patient_id: int) -> Patient | None:
        return self.db.get(Patient, patient_id)

    def get_schedule(self, doctor_id: int, day: date) -> DoctorSchedule | None:
        return self.db.query(DoctorSchedule).filter(
            DoctorSchedule.doctor_id == doctor_id,
            DoctorSchedule.date == day,
        ).first()

    def put_schedule(self, schedule: DoctorSchedule) -> DoctorSchedule:
        """Insert ``schedule`` unless one already exists for its doctor and date.

        Returns whichever row ends up stored, so a writer that loses a race
        gets the winner's schedule back.
        """
        try:
            self.db.add(schedule)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.get_schedule(schedule.doctor_id, schedule.date)
            if existing is None:
                raise
            logger.warning(
                'Schedule for doctor %s on %s was created concurrently; using the stored one.',
                schedule.doctor_id,
                schedule.date,
            )
            return existing

        self.db.refresh(schedule)
        return schedule

    def list_booked_times(self, doctor_id: int, day: date) -> list[time]:
        day_start, day_end = day_bounds(day)
        rows = self.db.query(Appointment.date_time).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.status == STATUS_SCHEDULED,
            Appointment.date_time >= day_start,
            Appointment.date_time < day_end,
        ).order_by(Appointment.date_time.asc()).all()
        return [booked_at.time() for (booked_at,) in rows]

    def has_booking_at(self, doctor_id: int, booked_at: datetime) -> bool:
        return self.db.query(Appointment.id).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.status == STATUS_SCHEDULED,
            Appointment.date_time == booked_at,
        ).first() is not None

    def create_appointment(self, appointment: Appointment) -> Appointment:
        try:
            self.db.add(appointment)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(
                'Booking for doctor %s at %s lost a race to a concurrent booking.',
                appointment.doctor_id,
                appointment.date_time,
            )
            raise UniqueConstraintViolation() from exc

        self.db.refresh(appointment)
        return appointment

    def get_appointment(self, appointment_id: int) -> Appointment | None:
        return self.db.get(Appointment, appointment_id)

    def list_appointments(
        self,
        doctor_id: int | None = None,
        patient_id: int | None = None,
        day: date | None = None,
    ) -> list[Appointment]:
        query = self.db.query(Appointment)
        if doctor_id is not None:
            query = query.filter(Appointment.doctor_id == doctor_id)
        if patient_id is not None:
            query = query.filter(Appointment.patient_id == patient_id)
        if day is not None:
            day_start, day_end = day_bounds(day)
            query = query.filter(Appointment.date_time >= day_start, Appointment.date_time < day_end)
        return query.order_by(Appointment.date_time.asc()).all()

    def save(self, record) -> None:
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
