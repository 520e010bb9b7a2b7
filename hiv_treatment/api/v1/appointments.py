from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from ...core.database import get_db
from ...core.security import CallerContext, UserRole
from ...api.deps import require_role
from ...services.booking_service import BookingService
from ...schemas.appointment import (
    BookAppointmentRequest, CancelAppointmentRequest, AppointmentResponse
)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def _reason(payload: Optional[CancelAppointmentRequest]) -> Optional[str]:
    return payload.reason if payload else None


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    request: BookAppointmentRequest,
    caller: CallerContext = Depends(require_role(UserRole.PATIENT)),
    db: Session = Depends(get_db)
):
    """Book an appointment with a doctor on one of their working days."""
    result = BookingService(db).book_appointment(request, caller)
    result.raise_for_failure()
    return result.data


@router.get("/my", response_model=List[AppointmentResponse])
async def get_my_appointments(
    caller: CallerContext = Depends(require_role(UserRole.PATIENT)),
    db: Session = Depends(get_db)
):
    result = BookingService(db).get_my_appointments(caller)
    result.raise_for_failure()
    return result.data


@router.get("/doctor", response_model=List[AppointmentResponse])
async def get_doctor_appointments(
    caller: CallerContext = Depends(require_role(UserRole.DOCTOR)),
    db: Session = Depends(get_db)
):
    """Appointments assigned to the calling doctor."""
    result = BookingService(db).get_doctor_appointments(caller)
    result.raise_for_failure()
    return result.data


@router.get("/doctor/patients", response_model=List[AppointmentResponse])
async def get_appointments_of_my_patients(
    caller: CallerContext = Depends(require_role(UserRole.DOCTOR)),
    db: Session = Depends(get_db)
):
    """All appointments of the patients the calling doctor treats."""
    result = BookingService(db).get_appointments_of_my_patients(caller)
    result.raise_for_failure()
    return result.data


@router.get("", response_model=List[AppointmentResponse])
async def get_all_appointments(
    caller: CallerContext = Depends(require_role(UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF)),
    db: Session = Depends(get_db)
):
    return BookingService(db).get_all_appointments_for_staff()


@router.put("/{book_id}/check-in")
async def check_in(
    book_id: str,
    caller: CallerContext = Depends(require_role(UserRole.PATIENT, UserRole.STAFF)),
    db: Session = Depends(get_db)
):
    result = BookingService(db).patient_check_in(book_id, caller)
    result.raise_for_failure()
    return {"message": result.message}


@router.put("/{book_id}/checkout")
async def checkout(
    book_id: str,
    caller: CallerContext = Depends(require_role(UserRole.DOCTOR)),
    db: Session = Depends(get_db)
):
    result = BookingService(db).doctor_checkout(book_id, caller)
    result.raise_for_failure()
    return {"message": result.message}


@router.put("/{book_id}/cancel")
async def cancel_by_patient(
    book_id: str,
    payload: Optional[CancelAppointmentRequest] = None,
    caller: CallerContext = Depends(require_role(UserRole.PATIENT)),
    db: Session = Depends(get_db)
):
    result = BookingService(db).cancel_by_patient(book_id, _reason(payload), caller)
    result.raise_for_failure()
    return {"message": result.message}


@router.put("/{book_id}/doctor-cancel")
async def cancel_by_doctor(
    book_id: str,
    payload: Optional[CancelAppointmentRequest] = None,
    caller: CallerContext = Depends(require_role(UserRole.DOCTOR)),
    db: Session = Depends(get_db)
):
    result = BookingService(db).cancel_by_doctor(book_id, _reason(payload), caller)
    result.raise_for_failure()
    return {"message": result.message}
