from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base


class Patient(Base):
    __tablename__ = "patients"

    patient_id = Column(String(50), primary_key=True)
    user_id = Column(String(50), ForeignKey("users.user_id"), unique=True, nullable=False)

    # Personal information
    date_of_birth = Column(DateTime, nullable=True)
    gender = Column(String(20), nullable=True)
    phone = Column(String(20), nullable=True)

    # Medical information
    blood_type = Column(String(10), nullable=True)
    allergy = Column(String(255), nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="patient")
    appointments = relationship("BooksAppointment", back_populates="patient")

    def __repr__(self):
        return f"<Patient(patient_id='{self.patient_id}', user_id='{self.user_id}')>"
