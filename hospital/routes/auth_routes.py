from fastapi import APIRouter, Depends

from hospital.auth.context import AuthContext
from hospital.auth.dependencies import get_auth_context

router = APIRouter(tags=["auth"])


@router.get("/me")
def me(auth: AuthContext = Depends(get_auth_context)):
    return {
        "email": auth.email,
        "role": auth.role,
        "doctor_id": auth.doctor_id,
        "patient_id": auth.patient_id,
    }
