from datetime import date, datetime, time

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError

from hospital.auth.context import AuthContext
from hospital.auth.dependencies import get_auth_context
from hospital.models.appointment import Appointment
from hospital.routes.common import database_unavailable, ensure_database_ready, get_store, to_http_exception
from hospital.scheduling import service
from hospital.scheduling.errors import SchedulingError
from hospital.scheduling.store import SchedulingStore

router = APIRouter(tags=['appointments'])

MAX_REASON_LENGTH = 500
MAX_LOCATION_LENGTH = 200


def _normalize_optional_text(value: str | None, max_length: int, field_name: str) -> str | None:
    if value is None:
        return None

    normalized = value.strip()
    if not normalized:
        return None

    if len(normalized) > max_length:
        raise ValueError(f'{field_name} must be {max_length} characters or fewer.')

    return normalized


class CreateAppointmentRequest(BaseModel):
    doctor_id: int
    patient_id: int
    date: date
    time: time
    reason: str | None = None
    location: str | None = None

    @field_validator('time')
    @classmethod
    def truncate_seconds(cls, value: time) -> time:
        return value.replace(second=0, microsecond=0)

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, value: str | None) -> str | None:
        return _normalize_optional_text(value, MAX_REASON_LENGTH, 'Reason')

    @field_validator('location')
    @classmethod
    def validate_location(cls, value: str | None) -> str | None:
        return _normalize_optional_text(value, MAX_LOCATION_LENGTH, 'Location')


class AppointmentResponse(BaseModel):
    id: int
    doctor_id: int
    patient_id: int
    date_time: datetime
    status: str
    reason: str | None = None
    location: str | None = None

    class Config:
        from_attributes = True


def to_appointment_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse.model_validate(appointment)


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: CreateAppointmentRequest,
    store: SchedulingStore = Depends(get_store),
    auth: AuthContext = Depends(get_auth_context),
):
    ensure_database_ready()

    try:
        appointment = service.book_appointment(
            store,
            auth,
            doctor_id=data.doctor_id,
            patient_id=data.patient_id,
            day=data.date,
            slot_time=data.time,
            reason=data.reason,
            location=data.location,
        )
        return to_appointment_response(appointment)
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        store.db.rollback()
        raise database_unavailable() from exc


@router.get('', response_model=list[AppointmentResponse])
def list_appointments(
    day: date | None = Query(default=None, alias='date'),
    store: SchedulingStore = Depends(get_store),
    auth: AuthContext = Depends(get_auth_context),
):
    ensure_database_ready()

    try:
        if auth.is_admin:
            appointments = store.list_appointments(day=day)
        elif auth.is_doctor and auth.doctor_id is not None:
            appointments = store.list_appointments(doctor_id=auth.doctor_id, day=day)
        elif auth.is_patient and auth.patient_id is not None:
            appointments = store.list_appointments(patient_id=auth.patient_id, day=day)
        else:
            appointments = []

        return [to_appointment_response(appointment) for appointment in appointments]
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.post('/{appointment_id}/complete', response_model=AppointmentResponse)
def complete_appointment(
    appointment_id: int,
    store: SchedulingStore = Depends(get_store),
    auth: AuthContext = Depends(get_auth_context),
):
    ensure_database_ready()

    try:
        return to_appointment_response(service.complete_appointment(store, auth, appointment_id))
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        store.db.rollback()
        raise database_unavailable() from exc


@router.post('/{appointment_id}/cancel', response_model=AppointmentResponse)
def cancel_appointment(
    appointment_id: int,
    store: SchedulingStore = Depends(get_store),
    auth: AuthContext = Depends(get_auth_context),
):
    ensure_database_ready()

    try:
        return to_appointment_response(service.cancel_appointment(store, auth, appointment_id))
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        store.db.rollback()
        raise database_unavailable() from exc
