from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BookAppointmentRequest(BaseModel):
    doctor_id: str = Field(..., min_length=1)
    booking_type: Optional[str] = None
    book_date: datetime
    note: Optional[str] = None


class CancelAppointmentRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=255)


class AppointmentResponse(BaseModel):
    book_id: str
    patient_id: str
    doctor_id: str
    booking_type: Optional[str] = None
    book_date: datetime
    status: str
    note: Optional[str] = None
    cancelled_reason: Optional[str] = None

    class Config:
        from_attributes = True
