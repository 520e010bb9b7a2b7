from ..models.lab_test import LabTest
from .base import BaseRepository


class LabTestRepository(BaseRepository[LabTest]):
    model = LabTest
    id_column = "lab_test_id"
