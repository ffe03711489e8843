from datetime import date, time

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from hospital.auth.context import AuthContext, authorize_schedule_view
from hospital.auth.dependencies import get_auth_context
from hospital.routes.appointment_routes import AppointmentResponse, to_appointment_response
from hospital.routes.common import database_unavailable, ensure_database_ready, get_store, to_http_exception
from hospital.scheduling import service
from hospital.scheduling.activity_planner import format_clock_label
from hospital.scheduling.errors import SchedulingError
from hospital.scheduling.store import SchedulingStore

router = APIRouter(tags=['doctors'])


class SlotResponse(BaseModel):
    time: time
    label: str


class DoctorScheduleResponse(BaseModel):
    doctor_id: int
    date: date
    start_time: time
    end_time: time
    lunch_start_time: time
    lunch_end_time: time
    location: str | None = None
    activities: list[str]
    appointments: list[AppointmentResponse]


class BookingCheckResponse(BaseModel):
    ok: bool
    detail: str


def _resolve_day(day: date | None) -> date:
    return day or date.today()


@router.get('/{doctor_id}/slots', response_model=list[SlotResponse])
def list_available_slots(
    doctor_id: int,
    day: date | None = Query(default=None, alias='date'),
    store: SchedulingStore = Depends(get_store),
    auth: AuthContext = Depends(get_auth_context),
):
    del auth
    ensure_database_ready()
    selected_day = _resolve_day(day)

    try:
        slots = service.get_available_slots(
            store,
            doctor_id,
            selected_day,
            service.make_rng(doctor_id, selected_day),
        )
        return [SlotResponse(time=slot_time, label=format_clock_label(slot_time)) for slot_time in slots]
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        store.db.rollback()
        raise database_unavailable() from exc


@router.get('/{doctor_id}/schedule', response_model=DoctorScheduleResponse)
def get_doctor_schedule(
    doctor_id: int,
    day: date | None = Query(default=None, alias='date'),
    store: SchedulingStore = Depends(get_store),
    auth: AuthContext = Depends(get_auth_context),
):
    ensure_database_ready()
    selected_day = _resolve_day(day)

    try:
        authorize_schedule_view(auth, doctor_id)
        schedule = service.get_or_create_schedule(
            store,
            doctor_id,
            selected_day,
            service.make_rng(doctor_id, selected_day),
        )
        activities = service.get_daily_activities(
            schedule,
            service.make_rng(doctor_id, selected_day, 'activities'),
        )
        appointments = store.list_appointments(doctor_id=doctor_id, day=selected_day)

        return DoctorScheduleResponse(
            doctor_id=doctor_id,
            date=selected_day,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            lunch_start_time=schedule.lunch_start_time,
            lunch_end_time=schedule.lunch_end_time,
            location=schedule.location,
            activities=activities,
            appointments=[to_appointment_response(appointment) for appointment in appointments],
        )
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        store.db.rollback()
        raise database_unavailable() from exc


@router.get('/{doctor_id}/booking-check', response_model=BookingCheckResponse)
def check_booking(
    doctor_id: int,
    day: date = Query(..., alias='date'),
    slot_time: time = Query(..., alias='time'),
    store: SchedulingStore = Depends(get_store),
    auth: AuthContext = Depends(get_auth_context),
):
    del auth
    ensure_database_ready()

    try:
        service.validate_booking(store, doctor_id, day, slot_time.replace(second=0, microsecond=0))
        return BookingCheckResponse(ok=True, detail='The requested time can be booked.')
    except SchedulingError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
