from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from fastapi import HTTPException, status

T = TypeVar("T")


class FailureKind(str, Enum):
    INVALID_DATE = "invalid_date"
    DOCTOR_NOT_WORKING = "doctor_not_working"
    DOCTOR_ALREADY_BOOKED = "doctor_already_booked"
    INVALID_STATUS = "invalid_status"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    WRITE_FAILED = "write_failed"


_STATUS_CODES = {
    FailureKind.INVALID_DATE: status.HTTP_400_BAD_REQUEST,
    FailureKind.DOCTOR_NOT_WORKING: status.HTTP_400_BAD_REQUEST,
    FailureKind.DOCTOR_ALREADY_BOOKED: status.HTTP_400_BAD_REQUEST,
    FailureKind.INVALID_STATUS: status.HTTP_400_BAD_REQUEST,
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    FailureKind.WRITE_FAILED: status.HTTP_400_BAD_REQUEST,
}


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a service operation: either ``data`` or a ``failure``."""
    data: Optional[T] = None
    message: Optional[str] = None
    failure: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, data: Any = None, message: Optional[str] = None) -> "ServiceResult":
        return cls(data=data, message=message)

    @classmethod
    def fail(cls, kind: FailureKind, message: str) -> "ServiceResult":
        return cls(failure=kind, message=message)

    def raise_for_failure(self) -> None:
        """Translate a failed result into the matching HTTP error."""
        if self.failure is not None:
            raise HTTPException(
                status_code=_STATUS_CODES[self.failure],
                detail=self.message
            )
