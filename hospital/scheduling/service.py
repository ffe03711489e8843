"""Operations the web layer calls into.

Each function takes its collaborators explicitly: a ``SchedulingStore`` for
records, a ``random.Random`` for generation, an ``AuthContext`` for identity
and ``today`` for the clock.
"""

import logging
import random
from datetime import date, datetime, time

from hospital.auth.context import AuthContext, authorize_booking
from hospital.core import config
from hospital.models.appointment import STATUS_CANCELLED, STATUS_COMPLETED, STATUS_SCHEDULED, Appointment
from hospital.models.doctor import Doctor, Patient
from hospital.models.schedule import DoctorSchedule
from hospital.scheduling.activity_planner import describe_activities, plan_daily_activities
from hospital.scheduling.booking_validator import validate_booking
from hospital.scheduling.errors import (
    AppointmentNotFoundError,
    DoctorNotFoundError,
    InvalidStatusTransitionError,
    PatientNotFoundError,
    PermissionDeniedError,
)
from hospital.scheduling.schedule_generator import build_doctor_schedule
from hospital.scheduling.slot_calculator import calculate_available_slots
from hospital.scheduling.store import SchedulingStore

logger = logging.getLogger(__name__)

__all__ = [
    'make_rng',
    'get_or_create_schedule',
    'get_available_slots',
    'get_daily_activities',
    'validate_booking',
    'book_appointment',
    'complete_appointment',
    'cancel_appointment',
]


def make_rng(*key, seed: int | None = None) -> random.Random:
    """Build the generator for one request.

    With a seed configured, the stream depends only on the seed and ``key``
    (e.g. doctor id and date), so each doctor-day replays independently.
    """
    if seed is None:
        seed = config.SCHEDULE_RANDOM_SEED
    if seed is None:
        return random.Random()
    return random.Random(':'.join(str(part) for part in (seed, *key)))


def require_doctor(store: SchedulingStore, doctor_id: int) -> Doctor:
    doctor = store.get_doctor(doctor_id)
    if doctor is None:
        raise DoctorNotFoundError()
    return doctor


def require_patient(store: SchedulingStore, patient_id: int) -> Patient:
    patient = store.get_patient(patient_id)
    if patient is None:
        raise PatientNotFoundError()
    return patient


def get_or_create_schedule(
    store: SchedulingStore,
    doctor_id: int,
    day: date,
    rng: random.Random,
) -> DoctorSchedule:
    """Return the stored schedule for the day, generating it on first access."""
    schedule = store.get_schedule(doctor_id, day)
    if schedule is not None:
        return schedule

    require_doctor(store, doctor_id)
    schedule = store.put_schedule(build_doctor_schedule(doctor_id, day, rng))
    logger.info(
        'Generated schedule for doctor %s on %s: %s-%s, lunch %s-%s',
        doctor_id,
        day,
        schedule.start_time,
        schedule.end_time,
        schedule.lunch_start_time,
        schedule.lunch_end_time,
    )
    return schedule


def get_available_slots(
    store: SchedulingStore,
    doctor_id: int,
    day: date,
    rng: random.Random,
) -> list[time]:
    schedule = get_or_create_schedule(store, doctor_id, day, rng)
    return calculate_available_slots(schedule, store.list_booked_times(doctor_id, day))


def get_daily_activities(schedule, rng: random.Random) -> list[str]:
    return describe_activities(plan_daily_activities(schedule, rng))


def book_appointment(
    store: SchedulingStore,
    auth: AuthContext,
    doctor_id: int,
    patient_id: int,
    day: date,
    slot_time: time,
    reason: str | None = None,
    location: str | None = None,
    today: date | None = None,
) -> Appointment:
    authorize_booking(auth, doctor_id, patient_id)
    require_doctor(store, doctor_id)
    require_patient(store, patient_id)
    schedule = validate_booking(store, doctor_id, day, slot_time, today=today)

    appointment = store.create_appointment(
        Appointment(
            doctor_id=doctor_id,
            patient_id=patient_id,
            date_time=datetime.combine(day, slot_time),
            status=STATUS_SCHEDULED,
            reason=reason,
            location=location or schedule.location,
        )
    )
    logger.info(
        'Booked appointment %s for patient %s with doctor %s at %s',
        appointment.id,
        patient_id,
        doctor_id,
        appointment.date_time,
    )
    return appointment


def _get_appointment(store: SchedulingStore, appointment_id: int) -> Appointment:
    appointment = store.get_appointment(appointment_id)
    if appointment is None:
        raise AppointmentNotFoundError()
    return appointment


def complete_appointment(store: SchedulingStore, auth: AuthContext, appointment_id: int) -> Appointment:
    appointment = _get_appointment(store, appointment_id)
    if not auth.is_doctor_self(appointment.doctor_id):
        raise PermissionDeniedError('Only the assigned doctor can complete this appointment.')
    if appointment.status != STATUS_SCHEDULED:
        raise InvalidStatusTransitionError()

    appointment.status = STATUS_COMPLETED
    store.save(appointment)
    return appointment


def cancel_appointment(store: SchedulingStore, auth: AuthContext, appointment_id: int) -> Appointment:
    appointment = _get_appointment(store, appointment_id)
    if not (auth.is_admin or auth.is_patient_self(appointment.patient_id)):
        raise PermissionDeniedError('You cannot cancel this appointment.')
    if appointment.status != STATUS_SCHEDULED:
        raise InvalidStatusTransitionError()

    appointment.status = STATUS_CANCELLED
    store.save(appointment)
    return appointment
