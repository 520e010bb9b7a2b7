from sqlalchemy import Column, String, DateTime

from ..core.database import Base


class Prescription(Base):
    __tablename__ = "prescriptions"

    prescription_id = Column(String(20), primary_key=True)
    medical_record_id = Column(String(50), nullable=True, index=True)
    medication_id = Column(String(50), nullable=True)
    doctor_id = Column(String(50), nullable=True, index=True)

    # Dosage information
    dosage = Column(String(255), nullable=True)
    line_of_treatment = Column(String(100), nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Prescription(prescription_id='{self.prescription_id}', medication_id='{self.medication_id}')>"
