from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from ..core.database import Base


class LabTest(Base):
    __tablename__ = "lab_tests"

    lab_test_id = Column(String(20), primary_key=True)
    request_id = Column(String(50), nullable=True)
    patient_id = Column(String(50), nullable=True, index=True)
    treatment_plan_id = Column(String(50), nullable=True, index=True)

    # Test details
    test_name = Column(String(255), nullable=True)
    test_code = Column(String(50), nullable=True)
    test_type = Column(String(100), nullable=True)
    result_value = Column(String(255), nullable=True)
    cd4_initial = Column(Integer, nullable=True)
    viral_load_initial = Column(Integer, nullable=True)
    status = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<LabTest(lab_test_id='{self.lab_test_id}', patient_id='{self.patient_id}', test='{self.test_code}')>"
