from sqlalchemy import Column, String, ForeignKey, DateTime, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base


class AppointmentStatus(str, enum.Enum):
    BOOKED = "Thành công"
    CONFIRMED = "Đã xác nhận"
    COMPLETED = "Đã khám"
    CANCELLED = "Đã hủy"


class BooksAppointment(Base):
    __tablename__ = "books_appointments"

    book_id = Column(String(20), primary_key=True)

    # Relationships
    patient_id = Column(String(50), ForeignKey("patients.patient_id"), nullable=False, index=True)
    doctor_id = Column(String(50), ForeignKey("doctors.doctor_id"), nullable=False, index=True)

    # Appointment details
    booking_type = Column(String(100), nullable=True)
    book_date = Column(DateTime, nullable=False, index=True)
    # Stored as the Vietnamese display value, see AppointmentStatus
    status = Column(String(30), nullable=False, default=AppointmentStatus.BOOKED.value)
    note = Column(Text, nullable=True)
    cancelled_reason = Column(String(255), nullable=True)

    # Tracking
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")

    def __repr__(self):
        return f"<BooksAppointment(book_id='{self.book_id}', patient_id='{self.patient_id}', doctor_id='{self.doctor_id}', status='{self.status}')>"
