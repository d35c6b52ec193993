import os
from datetime import date, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from telemed.database import Base  # noqa: E402
from telemed.models.appointment import Appointment  # noqa: E402
from telemed.models.doctor import Doctor  # noqa: E402
from telemed.models.patient import Patient  # noqa: E402
from telemed.services.appointments import AppointmentService  # noqa: E402

# Wednesday afternoon, UTC
NOW = datetime(2026, 3, 11, 14, 30)


@pytest.fixture
def db():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def make_doctor(db):
    def _make_doctor(email: str, role: str = 'local', first_name: str = 'Edward', last_name: str = 'Jenner') -> Doctor:
        doctor = Doctor(
            first_name=first_name,
            last_name=last_name,
            email=email,
            role=role,
            date_of_birth=date(1985, 4, 11),
            time_zone='Europe/Paris',
            country='France',
            city='Paris',
        )
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
        return doctor

    return _make_doctor


@pytest.fixture
def make_patient(db):
    def _make_patient(first_name: str = 'Ada', last_name: str = 'Lovelace') -> Patient:
        patient = Patient(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date(1990, 12, 10),
            gender='female',
            overview='Follow-up after surgery',
        )
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    return _make_patient


@pytest.fixture
def make_appointment(db):
    def _make_appointment(
        local_doctor: Doctor,
        remote_doctor: Doctor,
        patient: Patient,
        start_time: datetime,
        end_time: datetime,
        link: str = 'https://meet.example.com/room',
    ) -> Appointment:
        appointment = Appointment(
            link=link,
            start_time=start_time,
            end_time=end_time,
            local_doctor_id=local_doctor.id,
            remote_doctor_id=remote_doctor.id,
            patient_id=patient.id,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return _make_appointment


@pytest.fixture
def local_doctor(make_doctor) -> Doctor:
    return make_doctor('local@clinic.example', role='local', first_name='Local', last_name='Host')


@pytest.fixture
def remote_doctor(make_doctor) -> Doctor:
    return make_doctor('remote@clinic.example', role='remote', first_name='Remote', last_name='Consultant')


@pytest.fixture
def patient(make_patient):
    return make_patient()


@pytest.fixture
def service(db) -> AppointmentService:
    return AppointmentService.for_session(db, clock=lambda: NOW)


@pytest.fixture
def now() -> datetime:
    return NOW
