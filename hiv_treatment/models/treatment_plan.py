from sqlalchemy import Column, Integer, String, Text

from ..core.database import Base


class TreatmentPlan(Base):
    __tablename__ = "treatment_plans"

    treatment_plan_id = Column(String(50), primary_key=True)
    patient_id = Column(String(50), nullable=False, index=True)
    doctor_id = Column(String(50), nullable=False, index=True)

    # Clinical details
    arv_protocol = Column(Text, nullable=True)
    treatment_line = Column(Integer, nullable=True)
    diagnosis = Column(Text, nullable=True)
    treatment_result = Column(Text, nullable=True)

    def __repr__(self):
        return f"<TreatmentPlan(treatment_plan_id='{self.treatment_plan_id}', patient_id='{self.patient_id}')>"
