from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from telemed.core import config
from telemed.core.timeutils import to_utc


MAX_LINK_LENGTH = 2048


def normalize_link(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError('Link is required.')
    if len(normalized) > MAX_LINK_LENGTH:
        raise ValueError(f'Link must be {MAX_LINK_LENGTH} characters or fewer.')
    return normalized


class CreateAppointmentRequest(BaseModel):
    link: str
    start_time: datetime
    end_time: datetime
    local_doctor_id: int
    remote_doctor_id: int
    patient_id: int

    @field_validator('link')
    @classmethod
    def validate_link(cls, value: str) -> str:
        return normalize_link(value)

    @model_validator(mode='after')
    def validate_time_range(self) -> 'CreateAppointmentRequest':
        if to_utc(self.end_time) <= to_utc(self.start_time):
            raise ValueError('Appointment end time must be after its start time.')
        return self


class UpdateLinkRequest(BaseModel):
    link: str

    @field_validator('link')
    @classmethod
    def validate_link(cls, value: str) -> str:
        return normalize_link(value)


class PaginationOptions(BaseModel):
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=config.DEFAULT_PAGE_LIMIT, ge=1, le=config.MAX_PAGE_LIMIT)
    filter: str = 'today'
    show_all: bool = False


class AppointmentResponse(BaseModel):
    id: int
    link: str
    start_time: datetime
    end_time: datetime
    local_doctor_id: int
    remote_doctor_id: int
    patient_id: int

    class Config:
        from_attributes = True


class PatientSummaryResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    date_of_birth: date | None = None
    gender: str | None = None
    overview: str | None = None

    class Config:
        from_attributes = True


class DoctorNameResponse(BaseModel):
    first_name: str
    last_name: str

    class Config:
        from_attributes = True


class AppointmentDetailsResponse(BaseModel):
    id: int
    link: str
    start_time: datetime
    end_time: datetime
    patient: PatientSummaryResponse | None = None
    local_doctor: DoctorNameResponse | None = None
    remote_doctor: DoctorNameResponse | None = None

    class Config:
        from_attributes = True
