from datetime import date, datetime, time, timedelta

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from hospital.auth.context import ROLE_ADMIN, ROLE_DOCTOR, ROLE_PATIENT, AuthContext
from hospital.models.appointment import STATUS_CANCELLED, STATUS_COMPLETED, STATUS_SCHEDULED, Appointment
from hospital.models.schedule import DoctorSchedule
from hospital.routes.appointment_routes import (
    CreateAppointmentRequest,
    cancel_appointment,
    complete_appointment,
    create_appointment,
    list_appointments,
)

FUTURE_DAY = date.today() + timedelta(days=7)
ADMIN = AuthContext(role=ROLE_ADMIN, email='admin@hospital.org')
DOCTOR = AuthContext(role=ROLE_DOCTOR, email='house@hospital.org', doctor_id=1)
PATIENT = AuthContext(role=ROLE_PATIENT, email='adler@example.org', patient_id=1)
OTHER_PATIENT = AuthContext(role=ROLE_PATIENT, email='merrell@example.org', patient_id=2)


@pytest.fixture(autouse=True)
def database_ready(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('hospital.routes.appointment_routes.ensure_database_ready', lambda: None)


@pytest.fixture
def fixed_schedule(db_session):
    schedule = DoctorSchedule(
        doctor_id=1,
        date=FUTURE_DAY,
        start_time=time(9, 0),
        end_time=time(13, 0),
        lunch_start_time=time(11, 0),
        lunch_end_time=time(11, 30),
        location='General Clinic',
    )
    db_session.add(schedule)
    db_session.commit()
    return schedule


def _request(**overrides) -> CreateAppointmentRequest:
    fields = {'doctor_id': 1, 'patient_id': 1, 'date': FUTURE_DAY, 'time': time(10, 0)}
    fields.update(overrides)
    return CreateAppointmentRequest(**fields)


def test_create_appointment_request_normalizes_fields() -> None:
    request = _request(time=time(10, 0, 42), reason='  Follow-up  ', location='   ')

    assert request.time == time(10, 0)
    assert request.reason == 'Follow-up'
    assert request.location is None


def test_create_appointment_request_rejects_long_reason() -> None:
    with pytest.raises(ValidationError):
        _request(reason='x' * 501)


def test_create_appointment_books_slot(store, fixed_schedule) -> None:
    response = create_appointment(data=_request(reason='Headache'), store=store, auth=PATIENT)

    assert response.status == STATUS_SCHEDULED
    assert response.date_time == datetime.combine(FUTURE_DAY, time(10, 0))
    assert response.location == 'General Clinic'
    assert response.reason == 'Headache'


def test_create_appointment_rejects_taken_slot(store, fixed_schedule) -> None:
    create_appointment(data=_request(), store=store, auth=PATIENT)

    with pytest.raises(HTTPException) as exception_info:
        create_appointment(data=_request(patient_id=2), store=store, auth=OTHER_PATIENT)

    assert exception_info.value.status_code == 409


def test_create_appointment_maps_race_to_conflict(store, fixed_schedule, monkeypatch: pytest.MonkeyPatch) -> None:
    store.db.add(
        Appointment(
            doctor_id=1,
            patient_id=2,
            date_time=datetime.combine(FUTURE_DAY, time(10, 0)),
            status=STATUS_SCHEDULED,
        )
    )
    store.db.commit()
    # Simulate the competing booking landing between the check and the insert.
    monkeypatch.setattr(store, 'has_booking_at', lambda doctor_id, booked_at: False)

    with pytest.raises(HTTPException) as exception_info:
        create_appointment(data=_request(), store=store, auth=PATIENT)

    assert exception_info.value.status_code == 409
    assert exception_info.value.detail == 'This slot was just taken. Please choose another time.'


def test_create_appointment_rejects_past_date(store) -> None:
    with pytest.raises(HTTPException) as exception_info:
        create_appointment(data=_request(date=date.today() - timedelta(days=1)), store=store, auth=ADMIN)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Appointments cannot be booked on a past date.'


def test_create_appointment_rejects_booking_for_other_patient(store, fixed_schedule) -> None:
    with pytest.raises(HTTPException) as exception_info:
        create_appointment(data=_request(patient_id=2), store=store, auth=PATIENT)

    assert exception_info.value.status_code == 403


def test_list_appointments_is_scoped_by_role(store, fixed_schedule) -> None:
    create_appointment(data=_request(), store=store, auth=PATIENT)
    create_appointment(data=_request(patient_id=2, time=time(10, 30)), store=store, auth=OTHER_PATIENT)

    assert len(list_appointments(day=None, store=store, auth=ADMIN)) == 2
    assert len(list_appointments(day=FUTURE_DAY, store=store, auth=DOCTOR)) == 2
    assert [item.patient_id for item in list_appointments(day=None, store=store, auth=PATIENT)] == [1]
    assert list_appointments(day=None, store=store, auth=AuthContext(role=ROLE_PATIENT)) == []


def test_complete_and_cancel_transitions(store, fixed_schedule) -> None:
    first = create_appointment(data=_request(), store=store, auth=PATIENT)
    second = create_appointment(data=_request(time=time(10, 30)), store=store, auth=PATIENT)

    assert complete_appointment(appointment_id=first.id, store=store, auth=DOCTOR).status == STATUS_COMPLETED
    assert cancel_appointment(appointment_id=second.id, store=store, auth=PATIENT).status == STATUS_CANCELLED

    with pytest.raises(HTTPException) as exception_info:
        cancel_appointment(appointment_id=first.id, store=store, auth=PATIENT)
    assert exception_info.value.status_code == 400


def test_cancel_missing_appointment(store) -> None:
    with pytest.raises(HTTPException) as exception_info:
        cancel_appointment(appointment_id=999, store=store, auth=ADMIN)

    assert exception_info.value.status_code == 404


def test_booking_flow_over_http(client, auth_headers) -> None:
    patient = auth_headers('adler@example.org')

    slots = client.get('/doctors/1/slots', params={'date': FUTURE_DAY.isoformat()}, headers=patient).json()
    chosen = slots[1]['time']

    created = client.post(
        '/appointments',
        json={'doctor_id': 1, 'patient_id': 1, 'date': FUTURE_DAY.isoformat(), 'time': chosen},
        headers=patient,
    )
    assert created.status_code == 201

    again = client.post(
        '/appointments',
        json={'doctor_id': 1, 'patient_id': 2, 'date': FUTURE_DAY.isoformat(), 'time': chosen},
        headers=auth_headers('merrell@example.org'),
    )
    assert again.status_code == 409

    remaining = client.get('/doctors/1/slots', params={'date': FUTURE_DAY.isoformat()}, headers=patient).json()
    assert chosen not in [slot['time'] for slot in remaining]

    completed = client.post(
        f"/appointments/{created.json()['id']}/complete",
        headers=auth_headers('house@hospital.org'),
    )
    assert completed.status_code == 200
    assert completed.json()['status'] == STATUS_COMPLETED


def test_create_appointment_for_unknown_patient_returns_404(store, fixed_schedule) -> None:
    with pytest.raises(HTTPException) as exception_info:
        create_appointment(data=_request(patient_id=999), store=store, auth=ADMIN)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'Patient not found.'
