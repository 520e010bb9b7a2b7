from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..core.results import FailureKind, ServiceResult
from ..core.security import CallerContext
from ..core.sequence import TREATMENT_PLAN_PREFIX, next_id
from ..models.treatment_plan import TreatmentPlan
from ..repositories.treatment_plan_repository import TreatmentPlanRepository
from ..repositories.user_repository import UserRepository
from ..schemas.treatment_plan import TreatmentPlanCreate, TreatmentPlanUpdate

logger = logging.getLogger(__name__)

PLAN_CREATED = "Thêm kế hoạch điều trị thành công"
PLAN_CREATE_FAILED = "Thêm kế hoạch điều trị thất bại"
PLAN_UPDATED = "Cập nhật kế hoạch điều trị thành công"
PLAN_UPDATE_FAILED = "Cập nhật kế hoạch điều trị thất bại"
PLAN_NOT_FOUND = "Không tìm thấy kế hoạch điều trị"
PLAN_FORBIDDEN = "Bạn không có quyền truy cập kế hoạch điều trị này"
NOT_OWN_PLAN = "Bác sĩ chỉ được quản lý kế hoạch điều trị của chính mình"


class TreatmentPlanService:
    def __init__(self, db: Session):
        self.db = db
        self.plans = TreatmentPlanRepository(db)
        self.users = UserRepository(db)

    def add(self, data: TreatmentPlanCreate, caller: CallerContext) -> ServiceResult[TreatmentPlan]:
        if not self._owns(data.doctor_id, caller):
            return ServiceResult.fail(FailureKind.FORBIDDEN, NOT_OWN_PLAN)

        last = self.plans.get_last(TREATMENT_PLAN_PREFIX)
        plan = TreatmentPlan(
            treatment_plan_id=next_id(TREATMENT_PLAN_PREFIX, last.treatment_plan_id if last else None),
            **data.model_dump()
        )
        try:
            plan = self.plans.add(plan)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to add treatment plan: {str(e)}")
            return ServiceResult.fail(FailureKind.WRITE_FAILED, PLAN_CREATE_FAILED)

        logger.info(f"Treatment plan {plan.treatment_plan_id} created for patient {plan.patient_id}")
        return ServiceResult.success(plan, PLAN_CREATED)

    def update(self, data: TreatmentPlanUpdate, caller: CallerContext) -> ServiceResult[TreatmentPlan]:
        """Write every field of the plan; an unknown id creates the plan.

        A doctor may neither take over another doctor's plan nor hand
        their own plan to someone else.
        """
        existing = self.plans.get_by_id(data.treatment_plan_id)
        if existing and not self._owns(existing.doctor_id, caller):
            return ServiceResult.fail(FailureKind.FORBIDDEN, NOT_OWN_PLAN)
        if not self._owns(data.doctor_id, caller):
            return ServiceResult.fail(FailureKind.FORBIDDEN, NOT_OWN_PLAN)

        try:
            plan = self.plans.update(TreatmentPlan(**data.model_dump()))
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update treatment plan {data.treatment_plan_id}: {str(e)}")
            return ServiceResult.fail(FailureKind.WRITE_FAILED, PLAN_UPDATE_FAILED)

        return ServiceResult.success(plan, PLAN_UPDATED)

    def get_all(self) -> List[TreatmentPlan]:
        return self.plans.get_all()

    def get_by_patient(self, patient_id: str) -> List[TreatmentPlan]:
        return self.plans.get_by_patient(patient_id)

    def get_for_caller(self, caller: CallerContext) -> List[TreatmentPlan]:
        """Plans visible to the caller: patients see their own, other roles all."""
        if caller.is_patient:
            patient = self.users.get_patient_by_user_id(caller.user_id)
            return self.plans.get_by_patient(patient.patient_id) if patient else []
        return self.get_all()

    def get_by_id(self, treatment_plan_id: str, caller: CallerContext) -> ServiceResult[TreatmentPlan]:
        plan = self.plans.get_by_id(treatment_plan_id)
        if not plan:
            return ServiceResult.fail(FailureKind.NOT_FOUND, PLAN_NOT_FOUND)

        if caller.is_patient:
            patient = self.users.get_patient_by_user_id(caller.user_id)
            if not patient or patient.patient_id != plan.patient_id:
                return ServiceResult.fail(FailureKind.FORBIDDEN, PLAN_FORBIDDEN)

        return ServiceResult.success(plan)

    def _owns(self, doctor_id: Optional[str], caller: CallerContext) -> bool:
        """Doctors only write plans naming their own doctor record; other writers are unrestricted."""
        if not caller.is_doctor:
            return True
        doctor = self.users.get_doctor_by_user_id(caller.user_id)
        return doctor is not None and doctor.doctor_id == doctor_id
