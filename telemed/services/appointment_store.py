"""Session-backed adapters the appointment service reads and writes through."""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from telemed.models.appointment import Appointment
from telemed.models.doctor import Doctor
from telemed.services.appointment_query import AppointmentQuery


class AppointmentStore:
    def __init__(self, db: Session):
        self.db = db

    def _select(self, query: AppointmentQuery):
        statement = self.db.query(Appointment)
        if query.with_details:
            statement = statement.options(
                joinedload(Appointment.patient),
                joinedload(Appointment.local_doctor),
                joinedload(Appointment.remote_doctor),
            )
        statement = statement.filter(*query.predicates).order_by(*query.order_by)
        if query.offset:
            statement = statement.offset(query.offset)
        if query.limit is not None:
            statement = statement.limit(query.limit)
        return statement

    def fetch(self, query: AppointmentQuery) -> list[Appointment]:
        return self._select(query).all()

    def fetch_one(self, query: AppointmentQuery) -> Optional[Appointment]:
        return self._select(query).first()

    def get(self, appointment_id: int) -> Optional[Appointment]:
        return self.db.get(Appointment, appointment_id)

    def lock_doctors(self, doctor_ids: set[int]) -> list[Doctor]:
        # row locks serialize bookings touching the same doctors; SQLite serializes writers instead
        return (
            self.db.query(Doctor)
            .filter(Doctor.id.in_(sorted(doctor_ids)))
            .order_by(Doctor.id)
            .with_for_update()
            .all()
        )

    def insert(self, **fields) -> Appointment:
        """Stage a new appointment inside the current transaction.

        The row is flushed but not committed; callers finish with ``commit``
        or ``rollback``.
        """
        appointment = Appointment(**fields)
        self.db.add(appointment)
        self.db.flush()
        return appointment

    def commit(self, appointment: Appointment) -> Appointment:
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def update_link(self, appointment_id: int, link: str) -> int:
        updated = (
            self.db.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .update({Appointment.link: link})
        )
        self.db.commit()
        return updated

    def delete(self, appointment_id: int) -> int:
        deleted = (
            self.db.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .delete()
        )
        self.db.commit()
        return deleted

    def rollback(self) -> None:
        self.db.rollback()


class DoctorStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, doctor_id: int) -> Optional[Doctor]:
        return self.db.get(Doctor, doctor_id)

    def get_by_email(self, email: str) -> Optional[Doctor]:
        return self.db.query(Doctor).filter(Doctor.email == email).first()
