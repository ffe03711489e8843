"""Doctor and patient model definitions."""

from sqlalchemy import Column, Integer, String
from hospital.database import Base


class Doctor(Base):
    """Represents a doctor who can be booked."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    specialization = Column(String)


class Patient(Base):
    """Represents a patient who books appointments."""
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
