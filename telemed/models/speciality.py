"""Speciality model definitions."""

from sqlalchemy import Column, Integer, String

from telemed.database import Base


class Speciality(Base):
    """Represents a medical speciality a doctor practices."""
    __tablename__ = "specialities"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
