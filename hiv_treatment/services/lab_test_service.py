from sqlalchemy.orm import Session
from typing import List
import logging

from ..core.results import FailureKind, ServiceResult
from ..core.security import CallerContext
from ..core.sequence import LAB_TEST_PREFIX, next_id
from ..models.lab_test import LabTest
from ..repositories.lab_test_repository import LabTestRepository
from ..repositories.user_repository import UserRepository
from ..schemas.lab_test import LabTestCreate, LabTestUpdate

logger = logging.getLogger(__name__)

LAB_TEST_NOT_FOUND = "Không tìm thấy xét nghiệm."
LAB_TEST_FORBIDDEN = "Bạn không có quyền xem kết quả này."


class LabTestService:
    def __init__(self, db: Session):
        self.lab_tests = LabTestRepository(db)
        self.users = UserRepository(db)

    def get_all(self) -> List[LabTest]:
        return self.lab_tests.get_all()

    def get_by_id(self, lab_test_id: str, caller: CallerContext) -> ServiceResult[LabTest]:
        """Fetch one result; patients only ever see their own."""
        lab_test = self.lab_tests.get_by_id(lab_test_id)
        if not lab_test:
            return ServiceResult.fail(FailureKind.NOT_FOUND, LAB_TEST_NOT_FOUND)

        if caller.is_patient:
            patient = self.users.get_patient_by_user_id(caller.user_id)
            if not patient or lab_test.patient_id != patient.patient_id:
                return ServiceResult.fail(FailureKind.FORBIDDEN, LAB_TEST_FORBIDDEN)

        return ServiceResult.success(lab_test)

    def create(self, data: LabTestCreate) -> LabTest:
        last = self.lab_tests.get_last(LAB_TEST_PREFIX)
        lab_test = LabTest(
            lab_test_id=next_id(LAB_TEST_PREFIX, last.lab_test_id if last else None),
            **data.model_dump()
        )
        lab_test = self.lab_tests.add(lab_test)
        logger.info(f"Lab test {lab_test.lab_test_id} created")
        return lab_test

    def update(self, lab_test_id: str, data: LabTestUpdate) -> bool:
        lab_test = self.lab_tests.get_by_id(lab_test_id)
        if not lab_test:
            return False

        for field, value in data.model_dump().items():
            setattr(lab_test, field, value)
        self.lab_tests.update(lab_test)
        return True

    def delete(self, lab_test_id: str) -> bool:
        lab_test = self.lab_tests.get_by_id(lab_test_id)
        if not lab_test:
            return False
        self.lab_tests.delete(lab_test)
        logger.info(f"Lab test {lab_test_id} deleted")
        return True
