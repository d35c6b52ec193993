"""Doctor model definitions."""

import enum

from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from telemed.database import Base
from telemed.models.speciality import Speciality


class DoctorRole(str, enum.Enum):
    LOCAL = "local"
    REMOTE = "remote"


class Doctor(Base):
    """Represents a doctor taking part in appointments."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, nullable=False)  # local/remote
    date_of_birth = Column(Date)
    time_zone = Column(String)
    country = Column(String)
    city = Column(String)
    speciality_id = Column(Integer, ForeignKey("specialities.id"))

    speciality = relationship(Speciality)
