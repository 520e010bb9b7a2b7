from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class PrescriptionCreate(BaseModel):
    medical_record_id: Optional[str] = None
    medication_id: Optional[str] = None
    doctor_id: Optional[str] = None
    dosage: Optional[str] = None
    line_of_treatment: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class PrescriptionUpdate(PrescriptionCreate):
    prescription_id: str


class PrescriptionResponse(PrescriptionUpdate):
    class Config:
        from_attributes = True
