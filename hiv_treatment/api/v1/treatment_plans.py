from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...core.security import CallerContext, UserRole, CLINICAL_ROLES
from ...api.deps import get_current_caller, require_role
from ...services.treatment_plan_service import TreatmentPlanService
from ...schemas.treatment_plan import (
    TreatmentPlanCreate, TreatmentPlanUpdate, TreatmentPlanResponse
)

router = APIRouter(prefix="/treatment-plans", tags=["Treatment Plans"])


@router.get("", response_model=List[TreatmentPlanResponse])
async def get_treatment_plans(
    caller: CallerContext = Depends(get_current_caller),
    db: Session = Depends(get_db)
):
    """All plans for clinical staff; a patient only sees their own."""
    return TreatmentPlanService(db).get_for_caller(caller)


@router.get("/patient/{patient_id}", response_model=List[TreatmentPlanResponse])
async def get_treatment_plans_by_patient(
    patient_id: str,
    caller: CallerContext = Depends(require_role(*CLINICAL_ROLES)),
    db: Session = Depends(get_db)
):
    return TreatmentPlanService(db).get_by_patient(patient_id)


@router.get("/{treatment_plan_id}", response_model=TreatmentPlanResponse)
async def get_treatment_plan(
    treatment_plan_id: str,
    caller: CallerContext = Depends(get_current_caller),
    db: Session = Depends(get_db)
):
    result = TreatmentPlanService(db).get_by_id(treatment_plan_id, caller)
    result.raise_for_failure()
    return result.data


@router.post("")
async def add_treatment_plan(
    data: TreatmentPlanCreate,
    caller: CallerContext = Depends(require_role(UserRole.ADMIN, UserRole.DOCTOR)),
    db: Session = Depends(get_db)
):
    result = TreatmentPlanService(db).add(data, caller)
    result.raise_for_failure()
    return {"message": result.message}


@router.put("")
async def update_treatment_plan(
    data: TreatmentPlanUpdate,
    caller: CallerContext = Depends(require_role(UserRole.ADMIN, UserRole.DOCTOR)),
    db: Session = Depends(get_db)
):
    result = TreatmentPlanService(db).update(data, caller)
    result.raise_for_failure()
    return {"message": result.message}
