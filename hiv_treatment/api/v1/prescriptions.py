from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...core.security import CallerContext, UserRole, CLINICAL_ROLES
from ...api.deps import get_current_caller, require_role
from ...services.prescription_service import PrescriptionService
from ...schemas.prescription import (
    PrescriptionCreate, PrescriptionUpdate, PrescriptionResponse
)

router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])

PRESCRIBING_ROLES = (UserRole.ADMIN, UserRole.MANAGER, UserRole.DOCTOR)


@router.get("", response_model=List[PrescriptionResponse])
async def get_all_prescriptions(
    caller: CallerContext = Depends(get_current_caller),
    db: Session = Depends(get_db)
):
    if not caller.has_role(*CLINICAL_ROLES):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Bạn không có quyền xem đơn thuốc!"
        )
    return PrescriptionService(db).get_all()


@router.get("/{prescription_id}", response_model=PrescriptionResponse)
async def get_prescription(
    prescription_id: str,
    caller: CallerContext = Depends(require_role(*CLINICAL_ROLES)),
    db: Session = Depends(get_db)
):
    prescription = PrescriptionService(db).get_by_id(prescription_id)
    if not prescription:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Không tìm thấy đơn thuốc"
        )
    return prescription


@router.post("")
async def add_prescription(
    data: PrescriptionCreate,
    caller: CallerContext = Depends(require_role(*PRESCRIBING_ROLES)),
    db: Session = Depends(get_db)
):
    if not PrescriptionService(db).add(data):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Kê đơn thuốc không thành công"
        )
    return {"message": "Kê đơn thuốc thành công"}


@router.put("")
async def update_prescription(
    data: PrescriptionUpdate,
    caller: CallerContext = Depends(require_role(*PRESCRIBING_ROLES)),
    db: Session = Depends(get_db)
):
    if not PrescriptionService(db).update(data):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cập nhật đơn thuốc không thành công"
        )
    return {"message": "Cập nhật đơn thuốc thành công"}
