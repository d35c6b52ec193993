"""Builders for appointment read queries.

Each builder returns an immutable ``AppointmentQuery`` that the store adapter
runs as a single statement. Nothing here touches the database.
"""

import enum
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from sqlalchemy import or_

from telemed.core.errors import InvalidRequestError
from telemed.core.timeutils import add_days, end_of_day
from telemed.models.appointment import Appointment


class AppointmentFilter(str, enum.Enum):
    TODAY = 'today'
    FUTURE = 'future'
    PAST = 'past'


@dataclass(frozen=True)
class AppointmentQuery:
    predicates: tuple = ()
    order_by: tuple = ()
    offset: int | None = None
    limit: int | None = None
    with_details: bool = False

    def paginate(self, offset: int, limit: int) -> 'AppointmentQuery':
        return replace(self, offset=offset, limit=limit)


def parse_filter(value: str | None) -> AppointmentFilter:
    try:
        return AppointmentFilter(value)
    except ValueError as exc:
        raise InvalidRequestError(f'Invalid filter: {value}') from exc


def involves_doctor(doctor_id: int):
    return or_(
        Appointment.local_doctor_id == doctor_id,
        Appointment.remote_doctor_id == doctor_id,
    )


def by_doctor(doctor_id: int) -> AppointmentQuery:
    return AppointmentQuery(
        predicates=(involves_doctor(doctor_id),),
        order_by=(Appointment.start_time.asc(),),
    )


def by_patient(patient_id: int) -> AppointmentQuery:
    return AppointmentQuery(
        predicates=(Appointment.patient_id == patient_id,),
        order_by=(Appointment.start_time.asc(),),
    )


def active_for_doctor(doctor_id: int, now: datetime) -> AppointmentQuery:
    return AppointmentQuery(
        predicates=(
            Appointment.start_time < now,
            Appointment.end_time > now,
            involves_doctor(doctor_id),
        ),
        order_by=(Appointment.start_time.asc(),),
        limit=1,
    )


def future_for_doctor(doctor_id: int, now: datetime, offset: int, limit: int) -> AppointmentQuery:
    return AppointmentQuery(
        predicates=(
            Appointment.end_time >= now,
            involves_doctor(doctor_id),
        ),
        order_by=(Appointment.start_time.asc(),),
        with_details=True,
    ).paginate(offset, limit)


def overlapping(
    doctor_ids: set[int],
    start_time: datetime,
    end_time: datetime,
    exclude_id: Optional[int] = None,
) -> AppointmentQuery:
    ids = sorted(doctor_ids)
    predicates = (
        Appointment.start_time < end_time,
        Appointment.end_time > start_time,
        or_(
            Appointment.local_doctor_id.in_(ids),
            Appointment.remote_doctor_id.in_(ids),
        ),
    )
    if exclude_id is not None:
        predicates += (Appointment.id != exclude_id,)
    return AppointmentQuery(predicates=predicates, limit=1)


def time_window(appointment_filter: AppointmentFilter, offset: int, today_start: datetime) -> tuple[tuple, tuple]:
    """Return ``(predicates, order_by)`` for a listing filter.

    ``future`` and ``past`` treat ``offset`` as a number of days away from
    today: ``future`` selects the whole day ``offset`` days ahead, ``past``
    selects entries ending between the last instant of the day ``offset + 1``
    days back and the start of today.
    """
    if appointment_filter is AppointmentFilter.TODAY:
        return (
            (
                Appointment.start_time >= today_start,
                Appointment.end_time <= end_of_day(today_start),
            ),
            (Appointment.start_time.asc(),),
        )

    if appointment_filter is AppointmentFilter.FUTURE:
        return (
            (
                Appointment.start_time >= add_days(today_start, offset),
                Appointment.start_time < add_days(today_start, offset + 1),
            ),
            (Appointment.start_time.asc(),),
        )

    if appointment_filter is AppointmentFilter.PAST:
        return (
            (
                Appointment.end_time >= end_of_day(add_days(today_start, -(offset + 1))),
                Appointment.end_time < today_start,
            ),
            (Appointment.end_time.asc(),),
        )

    raise InvalidRequestError(f'Invalid filter: {appointment_filter}')


def list_all(
    scope: tuple,
    appointment_filter: AppointmentFilter,
    offset: int,
    limit: int,
    today_start: datetime,
) -> AppointmentQuery:
    window, order_by = time_window(appointment_filter, offset, today_start)

    # offset is a page index here, on top of the day selection above
    return AppointmentQuery(
        predicates=scope + window,
        order_by=order_by,
        with_details=True,
    ).paginate(offset * limit, limit)
