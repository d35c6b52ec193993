"""Appointment model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import ExcludeConstraint
from sqlalchemy.orm import relationship

from telemed.database import Base
from telemed.models.doctor import Doctor
from telemed.models.patient import Patient


class Appointment(Base):
    """Represents a scheduled video appointment between two doctors and a patient.

    ``start_time`` and ``end_time`` hold naive UTC instants. On PostgreSQL the
    table also refuses overlapping intervals for the same doctor seat.
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    link = Column(String, nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    local_doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    remote_doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)

    patient = relationship(Patient)
    local_doctor = relationship(Doctor, foreign_keys=[local_doctor_id])
    remote_doctor = relationship(Doctor, foreign_keys=[remote_doctor_id])

    __table_args__ = (
        UniqueConstraint("local_doctor_id", "start_time", name="uq_appointments_local_doctor_start"),
        UniqueConstraint("remote_doctor_id", "start_time", name="uq_appointments_remote_doctor_start"),
        # tsrange defaults to half-open bounds, so back-to-back appointments do not collide
        ExcludeConstraint(
            (local_doctor_id, "="),
            (func.tsrange(start_time, end_time), "&&"),
            name="ex_appointments_local_doctor_overlap",
            using="gist",
        ).ddl_if(dialect="postgresql"),
        ExcludeConstraint(
            (remote_doctor_id, "="),
            (func.tsrange(start_time, end_time), "&&"),
            name="ex_appointments_remote_doctor_overlap",
            using="gist",
        ).ddl_if(dialect="postgresql"),
    )
