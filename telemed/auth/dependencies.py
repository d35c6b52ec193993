from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from telemed.auth.jwt_handler import doctor_email_from_token
from telemed.core.errors import UnauthorizedError
from telemed.database import get_db
from telemed.models.doctor import Doctor
from telemed.services.appointment_store import DoctorStore

security = HTTPBearer()


def get_current_doctor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Doctor:
    email = doctor_email_from_token(credentials.credentials)

    doctor = DoctorStore(db).get_by_email(email)
    if doctor is None:
        raise UnauthorizedError("Doctor not found")
    return doctor
