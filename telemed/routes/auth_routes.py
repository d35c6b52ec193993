from fastapi import APIRouter, Depends

from telemed.auth.dependencies import get_current_doctor
from telemed.models.doctor import Doctor

router = APIRouter(tags=["auth"])


@router.get("/me", summary="Get the authenticated doctor")
def me(current_doctor: Doctor = Depends(get_current_doctor)):
    return {"id": current_doctor.id, "email": current_doctor.email, "role": current_doctor.role}
