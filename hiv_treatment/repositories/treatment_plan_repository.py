from typing import List

from ..models.treatment_plan import TreatmentPlan
from .base import BaseRepository


class TreatmentPlanRepository(BaseRepository[TreatmentPlan]):
    model = TreatmentPlan
    id_column = "treatment_plan_id"

    def get_by_patient(self, patient_id: str) -> List[TreatmentPlan]:
        return self.db.query(TreatmentPlan).filter(
            TreatmentPlan.patient_id == patient_id
        ).order_by(TreatmentPlan.treatment_plan_id).all()
