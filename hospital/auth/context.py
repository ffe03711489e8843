"""Caller identity passed explicitly into booking operations."""

from dataclasses import dataclass

from hospital.scheduling.errors import PermissionDeniedError

ROLE_ADMIN = 'Admin'
ROLE_DOCTOR = 'Doctor'
ROLE_PATIENT = 'Patient'
ROLES = (ROLE_ADMIN, ROLE_DOCTOR, ROLE_PATIENT)


@dataclass(frozen=True)
class AuthContext:
    role: str
    email: str = ''
    doctor_id: int | None = None
    patient_id: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_doctor(self) -> bool:
        return self.role == ROLE_DOCTOR

    @property
    def is_patient(self) -> bool:
        return self.role == ROLE_PATIENT

    def is_doctor_self(self, doctor_id: int) -> bool:
        return self.is_doctor and self.doctor_id is not None and self.doctor_id == doctor_id

    def is_patient_self(self, patient_id: int) -> bool:
        return self.is_patient and self.patient_id is not None and self.patient_id == patient_id


def authorize_booking(auth: AuthContext, doctor_id: int, patient_id: int) -> None:
    """Admins book for anyone; doctors for themselves; patients for themselves."""
    if auth.is_admin:
        return
    if auth.is_doctor_self(doctor_id):
        return
    if auth.is_patient_self(patient_id):
        return
    raise PermissionDeniedError('You can only book appointments for yourself.')


def authorize_schedule_view(auth: AuthContext, doctor_id: int) -> None:
    if auth.is_admin or auth.is_doctor_self(doctor_id):
        return
    raise PermissionDeniedError("Only the doctor or an admin can view this schedule.")
