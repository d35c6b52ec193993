import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from telemed.core.errors import ConflictError, NotFoundError
from telemed.core.timeutils import start_of_day, to_utc, utc_now
from telemed.models.appointment import Appointment
from telemed.schemas.appointment import CreateAppointmentRequest, PaginationOptions
from telemed.services import appointment_query
from telemed.services.access import visibility_scope
from telemed.services.appointment_store import AppointmentStore, DoctorStore

logger = logging.getLogger(__name__)

CONFLICT_DETAIL = 'An appointment with this time interval already exists.'


class AppointmentService:
    """Appointment reads and writes for a single request.

    The stores and the clock are injected so that callers decide which
    session and which notion of "now" the operations run against.
    """

    def __init__(
        self,
        store: AppointmentStore,
        doctors: DoctorStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.doctors = doctors
        self.clock = clock

    @classmethod
    def for_session(cls, db: Session, clock: Callable[[], datetime] = utc_now) -> 'AppointmentService':
        return cls(AppointmentStore(db), DoctorStore(db), clock=clock)

    def list_by_doctor(self, doctor_id: int) -> list[Appointment]:
        appointments = self.store.fetch(appointment_query.by_doctor(doctor_id))
        if not appointments:
            raise NotFoundError('Appointments not found')
        return appointments

    def get_by_id(self, appointment_id: int) -> Optional[Appointment]:
        return self.store.get(appointment_id)

    def create(self, data: CreateAppointmentRequest) -> Appointment:
        start_time = to_utc(data.start_time)
        end_time = to_utc(data.end_time)
        doctor_ids = {data.local_doctor_id, data.remote_doctor_id}

        self.store.lock_doctors(doctor_ids)
        self._reject_overlap(doctor_ids, start_time, end_time)

        try:
            appointment = self.store.insert(
                link=data.link,
                start_time=start_time,
                end_time=end_time,
                local_doctor_id=data.local_doctor_id,
                remote_doctor_id=data.remote_doctor_id,
                patient_id=data.patient_id,
            )
            # a writer that committed after the first lookup is visible now
            self._reject_overlap(doctor_ids, start_time, end_time, exclude_id=appointment.id)
            appointment = self.store.commit(appointment)
        except IntegrityError as exc:
            self.store.rollback()
            logger.warning('Rejected appointment %s-%s: %s', start_time.isoformat(), end_time.isoformat(), exc.orig)
            raise ConflictError(CONFLICT_DETAIL) from exc

        logger.info('Created appointment %s', appointment.id)
        return appointment

    def _reject_overlap(
        self,
        doctor_ids: set[int],
        start_time: datetime,
        end_time: datetime,
        exclude_id: Optional[int] = None,
    ) -> None:
        query = appointment_query.overlapping(doctor_ids, start_time, end_time, exclude_id=exclude_id)
        overlap = self.store.fetch_one(query)
        if overlap is None:
            return
        overlap_id = overlap.id
        self.store.rollback()
        logger.warning(
            'Rejected appointment %s-%s: overlaps appointment %s',
            start_time.isoformat(),
            end_time.isoformat(),
            overlap_id,
        )
        raise ConflictError(CONFLICT_DETAIL)

    def delete(self, appointment_id: int) -> None:
        deleted = self.store.delete(appointment_id)
        logger.info('Deleted %s appointment(s) with id %s', deleted, appointment_id)

    def list_by_patient(self, patient_id: int) -> list[Appointment]:
        return self.store.fetch(appointment_query.by_patient(patient_id))

    def get_active_for_doctor(self, doctor_id: int) -> Optional[Appointment]:
        return self.store.fetch_one(appointment_query.active_for_doctor(doctor_id, self.clock()))

    def list_future_for_doctor(self, doctor_id: int, offset: int, limit: int) -> list[Appointment]:
        query = appointment_query.future_for_doctor(doctor_id, self.clock(), offset, limit)
        return self.store.fetch(query)

    def list_all(self, doctor_id: int, pagination: PaginationOptions) -> list[Appointment]:
        doctor = self.doctors.get(doctor_id)
        if doctor is None:
            raise NotFoundError('Doctor not found')

        scope = visibility_scope(doctor, pagination.show_all)
        appointment_filter = appointment_query.parse_filter(pagination.filter)
        query = appointment_query.list_all(
            scope,
            appointment_filter,
            pagination.offset,
            pagination.limit,
            start_of_day(self.clock()),
        )
        return self.store.fetch(query)

    def update_link(self, appointment_id: int, link: str) -> None:
        self.store.update_link(appointment_id, link)
