import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from telemed.auth.dependencies import get_current_doctor
from telemed.core import config
from telemed.core.errors import ServiceUnavailableError
from telemed.database import get_db
from telemed.models.doctor import Doctor
from telemed.schemas.appointment import (
    AppointmentDetailsResponse,
    AppointmentResponse,
    CreateAppointmentRequest,
    PaginationOptions,
    UpdateLinkRequest,
)
from telemed.services.appointments import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=['appointments'], dependencies=[Depends(get_current_doctor)])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    return AppointmentService.for_session(db)


def database_unavailable(service: AppointmentService, exc: SQLAlchemyError) -> ServiceUnavailableError:
    service.store.rollback()
    logger.exception('Database error: %s', exc)
    return ServiceUnavailableError()


@router.get(
    '',
    response_model=list[AppointmentDetailsResponse],
    summary='List appointments for a day window',
)
def list_appointments(
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=config.DEFAULT_PAGE_LIMIT, ge=1, le=config.MAX_PAGE_LIMIT),
    filter: str = Query(default='today'),
    show_all: bool = Query(default=False),
    current_doctor: Doctor = Depends(get_current_doctor),
    service: AppointmentService = Depends(get_appointment_service),
):
    pagination = PaginationOptions(offset=offset, limit=limit, filter=filter, show_all=show_all)
    try:
        return service.list_all(current_doctor.id, pagination)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc


@router.get(
    '/future',
    response_model=list[AppointmentDetailsResponse],
    summary='List upcoming appointments for the current doctor',
)
def list_future_appointments(
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=config.DEFAULT_PAGE_LIMIT, ge=1, le=config.MAX_PAGE_LIMIT),
    current_doctor: Doctor = Depends(get_current_doctor),
    service: AppointmentService = Depends(get_appointment_service),
):
    try:
        return service.list_future_for_doctor(current_doctor.id, offset, limit)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc


@router.get(
    '/active',
    response_model=AppointmentResponse | None,
    summary='Get the appointment in progress for the current doctor',
)
def get_active_appointment(
    current_doctor: Doctor = Depends(get_current_doctor),
    service: AppointmentService = Depends(get_appointment_service),
):
    try:
        return service.get_active_for_doctor(current_doctor.id)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc


@router.get(
    '/doctor/{doctor_id}',
    response_model=list[AppointmentResponse],
    summary='List appointments involving a doctor',
)
def list_doctor_appointments(doctor_id: int, service: AppointmentService = Depends(get_appointment_service)):
    try:
        return service.list_by_doctor(doctor_id)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc


@router.get(
    '/patient/{patient_id}',
    response_model=list[AppointmentResponse],
    summary='List appointments for a patient',
)
def list_patient_appointments(patient_id: int, service: AppointmentService = Depends(get_appointment_service)):
    try:
        return service.list_by_patient(patient_id)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc


@router.get(
    '/{appointment_id}',
    response_model=AppointmentResponse | None,
    summary='Get an appointment by id',
)
def get_appointment(appointment_id: int, service: AppointmentService = Depends(get_appointment_service)):
    try:
        return service.get_by_id(appointment_id)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc


@router.post(
    '',
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary='Book an appointment',
)
def create_appointment(data: CreateAppointmentRequest, service: AppointmentService = Depends(get_appointment_service)):
    try:
        return service.create(data)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc


@router.delete(
    '/{appointment_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    summary='Delete an appointment',
)
def delete_appointment(appointment_id: int, service: AppointmentService = Depends(get_appointment_service)):
    try:
        service.delete(appointment_id)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc


@router.post(
    '/{appointment_id}/link',
    status_code=status.HTTP_204_NO_CONTENT,
    summary='Replace the video link of an appointment',
)
def update_appointment_link(
    appointment_id: int,
    data: UpdateLinkRequest,
    service: AppointmentService = Depends(get_appointment_service),
):
    try:
        service.update_link(appointment_id, data.link)
    except SQLAlchemyError as exc:
        raise database_unavailable(service, exc) from exc
