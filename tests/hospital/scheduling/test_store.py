import random
from datetime import date, datetime, time

import pytest

from hospital.models.appointment import STATUS_CANCELLED, STATUS_SCHEDULED, Appointment
from hospital.models.schedule import DoctorSchedule
from hospital.scheduling.errors import UniqueConstraintViolation
from hospital.scheduling.schedule_generator import build_doctor_schedule

DAY = date(2026, 3, 3)


def _appointment(at: datetime, status: str = STATUS_SCHEDULED, doctor_id: int = 1) -> Appointment:
    return Appointment(doctor_id=doctor_id, patient_id=1, date_time=at, status=status)


def test_put_schedule_stores_new_row(store) -> None:
    schedule = store.put_schedule(build_doctor_schedule(1, DAY, random.Random(1)))

    assert schedule.id is not None
    assert store.get_schedule(1, DAY).id == schedule.id


def test_put_schedule_returns_existing_row_when_key_taken(store) -> None:
    first = store.put_schedule(build_doctor_schedule(1, DAY, random.Random(1)))

    second = store.put_schedule(build_doctor_schedule(1, DAY, random.Random(2)))

    assert second.id == first.id
    assert second.start_time == first.start_time
    assert store.db.query(DoctorSchedule).count() == 1


def test_get_schedule_is_keyed_by_doctor_and_date(store) -> None:
    store.put_schedule(build_doctor_schedule(1, DAY, random.Random(1)))

    assert store.get_schedule(2, DAY) is None
    assert store.get_schedule(1, date(2026, 3, 4)) is None


def test_list_booked_times_returns_live_bookings_for_that_day(store) -> None:
    store.db.add_all([
        _appointment(datetime(2026, 3, 3, 10, 30)),
        _appointment(datetime(2026, 3, 3, 9, 0)),
        _appointment(datetime(2026, 3, 3, 11, 0), status=STATUS_CANCELLED),
        _appointment(datetime(2026, 3, 4, 9, 0)),
        _appointment(datetime(2026, 3, 3, 12, 0), doctor_id=2),
    ])
    store.db.commit()

    assert store.list_booked_times(1, DAY) == [time(9, 0), time(10, 30)]


def test_create_appointment_rejects_double_booking(store) -> None:
    store.create_appointment(_appointment(datetime(2026, 3, 3, 9, 0)))

    with pytest.raises(UniqueConstraintViolation):
        store.create_appointment(_appointment(datetime(2026, 3, 3, 9, 0)))

    assert store.db.query(Appointment).count() == 1


def test_cancelled_booking_frees_its_time(store) -> None:
    store.create_appointment(_appointment(datetime(2026, 3, 3, 9, 0), status=STATUS_CANCELLED))

    rebooked = store.create_appointment(_appointment(datetime(2026, 3, 3, 9, 0)))

    assert rebooked.id is not None
    assert store.has_booking_at(1, datetime(2026, 3, 3, 9, 0))


def test_list_appointments_filters_by_owner_and_day(store) -> None:
    store.db.add_all([
        _appointment(datetime(2026, 3, 3, 10, 0)),
        _appointment(datetime(2026, 3, 4, 10, 0)),
        _appointment(datetime(2026, 3, 3, 11, 0), doctor_id=2),
    ])
    store.db.commit()

    assert len(store.list_appointments()) == 3
    assert len(store.list_appointments(doctor_id=1)) == 2
    assert len(store.list_appointments(doctor_id=1, day=DAY)) == 1
    assert len(store.list_appointments(patient_id=2)) == 0


def test_get_patient_returns_seeded_row_or_none(store) -> None:
    assert store.get_patient(1).name == 'Rebecca Adler'
    assert store.get_patient(999) is None
