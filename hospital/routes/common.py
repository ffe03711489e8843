from fastapi import Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hospital.database import ensure_appointment_schema, ensure_schedule_schema, get_db
from hospital.scheduling.errors import (
    AppointmentNotFoundError,
    DoctorNotFoundError,
    InvalidStatusTransitionError,
    InvalidWindowError,
    NoScheduleError,
    OutsideWorkingHoursError,
    PastDateError,
    PatientNotFoundError,
    PermissionDeniedError,
    SchedulingError,
    SlotTakenError,
    UniqueConstraintViolation,
)
from hospital.scheduling.store import SchedulingStore

DATABASE_UNAVAILABLE_DETAIL = 'Database unavailable. Verify DATABASE_URL and database credentials.'

ERROR_STATUS_CODES = {
    PastDateError: status.HTTP_400_BAD_REQUEST,
    NoScheduleError: status.HTTP_400_BAD_REQUEST,
    OutsideWorkingHoursError: status.HTTP_400_BAD_REQUEST,
    InvalidStatusTransitionError: status.HTTP_400_BAD_REQUEST,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    DoctorNotFoundError: status.HTTP_404_NOT_FOUND,
    PatientNotFoundError: status.HTTP_404_NOT_FOUND,
    AppointmentNotFoundError: status.HTTP_404_NOT_FOUND,
    SlotTakenError: status.HTTP_409_CONFLICT,
    UniqueConstraintViolation: status.HTTP_409_CONFLICT,
    InvalidWindowError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def ensure_database_ready() -> None:
    try:
        ensure_schedule_schema()
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DATABASE_UNAVAILABLE_DETAIL,
        ) from exc


def get_store(db: Session = Depends(get_db)) -> SchedulingStore:
    return SchedulingStore(db)


def to_http_exception(exc: SchedulingError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=status_code, detail=exc.message)


def database_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=DATABASE_UNAVAILABLE_DETAIL,
    )
