"""Role-based visibility rules for appointment listings."""

from telemed.core.errors import InvalidRequestError
from telemed.models.appointment import Appointment
from telemed.models.doctor import Doctor, DoctorRole


def parse_role(value: str | None) -> DoctorRole:
    try:
        return DoctorRole(value)
    except ValueError as exc:
        raise InvalidRequestError('Invalid role') from exc


def visibility_scope(doctor: Doctor, show_all: bool = False) -> tuple:
    """Return the predicates restricting which appointments ``doctor`` may list.

    Local doctors see the appointments they host, or every appointment when
    ``show_all`` is set. Remote doctors only ever see the appointments they
    join remotely.
    """
    role = parse_role(doctor.role)

    if role is DoctorRole.LOCAL:
        if show_all:
            return ()
        return (Appointment.local_doctor_id == doctor.id,)

    if role is DoctorRole.REMOTE:
        return (Appointment.remote_doctor_id == doctor.id,)

    raise InvalidRequestError('Invalid role')
