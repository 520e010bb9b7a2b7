from ..models.prescription import Prescription
from .base import BaseRepository


class PrescriptionRepository(BaseRepository[Prescription]):
    model = Prescription
    id_column = "prescription_id"
