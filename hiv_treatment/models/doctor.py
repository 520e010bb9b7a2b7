from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base


class Doctor(Base):
    __tablename__ = "doctors"

    doctor_id = Column(String(50), primary_key=True)
    user_id = Column(String(50), ForeignKey("users.user_id"), unique=True, nullable=False)

    # Professional information
    specialization = Column(String(100), nullable=True)
    license_number = Column(String(50), nullable=True, unique=True)
    experience_years = Column(Integer, nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="doctor")
    appointments = relationship("BooksAppointment", back_populates="doctor")
    work_schedules = relationship("DoctorWorkSchedule", back_populates="doctor")

    def __repr__(self):
        return f"<Doctor(doctor_id='{self.doctor_id}', specialization='{self.specialization}')>"


class DoctorWorkSchedule(Base):
    """Calendar days on which a doctor takes appointments."""
    __tablename__ = "doctor_work_schedules"

    schedule_id = Column(String(50), primary_key=True)
    doctor_id = Column(String(50), ForeignKey("doctors.doctor_id"), nullable=False, index=True)
    slot_id = Column(String(50), nullable=True)
    date_work = Column(DateTime, nullable=False, index=True)

    doctor = relationship("Doctor", back_populates="work_schedules")

    def __repr__(self):
        return f"<DoctorWorkSchedule(schedule_id='{self.schedule_id}', doctor_id='{self.doctor_id}', date='{self.date_work}')>"
