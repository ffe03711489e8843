from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from hospital.auth import jwt_handler
from hospital.auth.context import ROLES, AuthContext
from hospital.database import get_db
from hospital.models.user import User

security = HTTPBearer()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    token = credentials.credentials
    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt_handler.InvalidTokenError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    email = payload.get("sub")
    if not email:
        raise HTTPException(status_code=401, detail="Invalid token subject")

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def get_auth_context(current_user: User = Depends(get_current_user)) -> AuthContext:
    if current_user.role not in ROLES:
        raise HTTPException(status_code=403, detail="Unknown role")
    return AuthContext(
        role=current_user.role,
        email=current_user.email,
        doctor_id=current_user.doctor_id,
        patient_id=current_user.patient_id,
    )
