from pydantic import BaseModel
from typing import Optional


class TreatmentPlanCreate(BaseModel):
    patient_id: str
    doctor_id: str
    arv_protocol: Optional[str] = None
    treatment_line: Optional[int] = None
    diagnosis: Optional[str] = None
    treatment_result: Optional[str] = None


class TreatmentPlanUpdate(TreatmentPlanCreate):
    treatment_plan_id: str


class TreatmentPlanResponse(TreatmentPlanUpdate):
    class Config:
        from_attributes = True
