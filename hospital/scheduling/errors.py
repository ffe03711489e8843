"""Error kinds raised by the scheduling engine."""


class SchedulingError(Exception):
    """Base exception for scheduling and booking operations."""

    default_message = 'Scheduling request failed.'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidWindowError(SchedulingError):
    """Raised when a time window ends before it starts."""

    default_message = 'Time window ends before it starts.'


class PastDateError(SchedulingError):
    """Raised when a booking targets a date before today."""

    default_message = 'Appointments cannot be booked on a past date.'


class NoScheduleError(SchedulingError):
    """Raised when the doctor has no schedule for the requested date."""

    default_message = 'The doctor has no schedule for this date.'


class OutsideWorkingHoursError(SchedulingError):
    """Raised when the requested time falls outside the doctor's working window."""

    default_message = "The requested time is outside the doctor's working hours."


class SlotTakenError(SchedulingError):
    """Raised when the doctor already has a booking at the exact requested time."""

    default_message = 'The selected doctor is not available at this exact time.'


class UniqueConstraintViolation(SchedulingError):
    """Raised when the database rejects a booking that raced another one."""

    default_message = 'This slot was just taken. Please choose another time.'


class DoctorNotFoundError(SchedulingError):
    default_message = 'Doctor not found.'


class PatientNotFoundError(SchedulingError):
    default_message = 'Patient not found.'


class AppointmentNotFoundError(SchedulingError):
    default_message = 'Appointment not found.'


class InvalidStatusTransitionError(SchedulingError):
    """Raised when an appointment cannot move to the requested status."""

    default_message = 'Only scheduled appointments can change status.'


class PermissionDeniedError(SchedulingError):
    default_message = 'You are not authorized to perform this action.'


__all__ = [
    'SchedulingError',
    'InvalidWindowError',
    'PastDateError',
    'NoScheduleError',
    'OutsideWorkingHoursError',
    'SlotTakenError',
    'UniqueConstraintViolation',
    'DoctorNotFoundError',
    'PatientNotFoundError',
    'AppointmentNotFoundError',
    'InvalidStatusTransitionError',
    'PermissionDeniedError',
]
