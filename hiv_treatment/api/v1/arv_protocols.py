from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...core.security import CallerContext, UserRole, CLINICAL_ROLES
from ...api.deps import require_role
from ...services.arv_protocol_service import ARVProtocolService
from ...schemas.arv_protocol import CreateARVProtocol, ARVProtocolSchema

router = APIRouter(prefix="/arv-protocols", tags=["ARV Protocols"])


@router.get("", response_model=List[ARVProtocolSchema])
async def get_all_arv_protocols(
    caller: CallerContext = Depends(require_role(*CLINICAL_ROLES)),
    db: Session = Depends(get_db)
):
    protocols = ARVProtocolService(db).get_all()
    if not protocols:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Không có phác đồ ARV nào."
        )
    return protocols


@router.get("/{arv_id}", response_model=ARVProtocolSchema)
async def get_arv_protocol(
    arv_id: str,
    caller: CallerContext = Depends(require_role(*CLINICAL_ROLES)),
    db: Session = Depends(get_db)
):
    protocol = ARVProtocolService(db).get_by_id(arv_id)
    if not protocol:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Phác đồ ARV không tồn tại."
        )
    return protocol


@router.post("")
async def add_arv_protocol(
    data: CreateARVProtocol,
    caller: CallerContext = Depends(require_role(UserRole.ADMIN, UserRole.MANAGER)),
    db: Session = Depends(get_db)
):
    """Create a protocol; code and name must both be unused."""
    if not ARVProtocolService(db).add(data):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Mã hoặc tên phác đồ ARV đã tồn tại."
        )
    return {"message": "Thêm phác đồ ARV thành công."}


@router.put("")
async def update_arv_protocol(
    data: ARVProtocolSchema,
    caller: CallerContext = Depends(require_role(UserRole.ADMIN, UserRole.DOCTOR)),
    db: Session = Depends(get_db)
):
    if not ARVProtocolService(db).update(data):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Phác đồ ARV không tồn tại hoặc cập nhật không thành công."
        )
    return {"message": "Cập nhật phác đồ ARV thành công."}
