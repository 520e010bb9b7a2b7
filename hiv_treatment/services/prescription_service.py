from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
import logging

from ..core.sequence import PRESCRIPTION_PREFIX, next_id
from ..models.prescription import Prescription
from ..repositories.prescription_repository import PrescriptionRepository
from ..schemas.prescription import PrescriptionCreate, PrescriptionUpdate

logger = logging.getLogger(__name__)


class PrescriptionService:
    def __init__(self, db: Session):
        self.db = db
        self.prescriptions = PrescriptionRepository(db)

    def get_all(self) -> List[Prescription]:
        return self.prescriptions.get_all()

    def get_by_id(self, prescription_id: str) -> Optional[Prescription]:
        return self.prescriptions.get_by_id(prescription_id)

    def add(self, data: PrescriptionCreate) -> bool:
        last = self.prescriptions.get_last(PRESCRIPTION_PREFIX)
        prescription = Prescription(
            prescription_id=next_id(PRESCRIPTION_PREFIX, last.prescription_id if last else None),
            **data.model_dump()
        )
        try:
            self.prescriptions.add(prescription)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to add prescription: {str(e)}")
            return False
        return True

    def update(self, data: PrescriptionUpdate) -> bool:
        prescription = self.prescriptions.get_by_id(data.prescription_id)
        if not prescription:
            return False

        for field, value in data.model_dump(exclude={"prescription_id"}).items():
            setattr(prescription, field, value)
        try:
            self.prescriptions.update(prescription)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update prescription {data.prescription_id}: {str(e)}")
            return False
        return True
