from datetime import date, datetime, time

from hospital.models.schedule import DoctorSchedule
from hospital.scheduling.errors import (
    NoScheduleError,
    OutsideWorkingHoursError,
    PastDateError,
    SlotTakenError,
)
from hospital.scheduling.store import SchedulingStore
from hospital.scheduling.time_window import TimeWindow


def validate_booking(
    store: SchedulingStore,
    doctor_id: int,
    day: date,
    slot_time: time,
    today: date | None = None,
) -> DoctorSchedule:
    """Check that ``doctor_id`` can take a booking at ``day`` and ``slot_time``.

    Checks run in a fixed order and the first failure is raised. Nothing is
    written; on success the governing schedule is returned.
    """
    today = today or date.today()
    if day < today:
        raise PastDateError()

    schedule = store.get_schedule(doctor_id, day)
    if schedule is None:
        raise NoScheduleError()

    if not TimeWindow(schedule.start_time, schedule.end_time).contains(slot_time):
        raise OutsideWorkingHoursError(
            'The requested time is outside working hours '
            f'({schedule.start_time.strftime("%H:%M")}-{schedule.end_time.strftime("%H:%M")}).'
        )

    if store.has_booking_at(doctor_id, datetime.combine(day, slot_time)):
        raise SlotTakenError()

    return schedule
