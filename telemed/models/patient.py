"""Patient model definitions."""

from sqlalchemy import Column, Date, Integer, String, Text

from telemed.database import Base


class Patient(Base):
    """Represents a patient seen during appointments."""
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True)
    date_of_birth = Column(Date)
    gender = Column(String)
    overview = Column(Text)
