from unittest.mock import MagicMock

from hiv_treatment.core.results import FailureKind
from hiv_treatment.schemas.treatment_plan import TreatmentPlanCreate, TreatmentPlanUpdate
from hiv_treatment.services.treatment_plan_service import TreatmentPlanService
from .conftest import (
    auth_headers, caller, ADMIN, DOCTOR, OTHER_DOCTOR, STAFF, PATIENT, OTHER_PATIENT
)

plan_data = {
    "patient_id": "P001",
    "doctor_id": "D001",
    "arv_protocol": "TDF-3TC-DTG",
    "treatment_line": 1,
    "diagnosis": "HIV giai đoạn 1",
    "treatment_result": "Đang điều trị"
}


class TestTreatmentPlanService:

    def test_add_generates_sequential_ids(self, db):
        service = TreatmentPlanService(db)

        first = service.add(TreatmentPlanCreate(**plan_data), caller(DOCTOR))
        second = service.add(TreatmentPlanCreate(**plan_data), caller(ADMIN))

        assert first.data.treatment_plan_id == "TP000001"
        assert second.data.treatment_plan_id == "TP000002"

    def test_doctor_cannot_write_for_another_doctor(self, db):
        result = TreatmentPlanService(db).add(TreatmentPlanCreate(**plan_data), caller(OTHER_DOCTOR))
        assert result.failure == FailureKind.FORBIDDEN

    def test_doctor_cannot_take_over_plan(self, db):
        service = TreatmentPlanService(db)
        service.add(TreatmentPlanCreate(**plan_data), caller(DOCTOR))

        takeover = TreatmentPlanUpdate(**dict(plan_data, treatment_plan_id="TP000001", doctor_id="D002"))
        result = service.update(takeover, caller(OTHER_DOCTOR))

        assert result.failure == FailureKind.FORBIDDEN

    def test_add_failure_is_reported(self, db):
        service = TreatmentPlanService(db)
        service.plans = MagicMock()
        service.plans.get_last.return_value = None
        service.plans.add.side_effect = Exception("Database error")

        result = service.add(TreatmentPlanCreate(**plan_data), caller(ADMIN))

        assert result.failure == FailureKind.WRITE_FAILED
        assert result.message == "Thêm kế hoạch điều trị thất bại"

    def test_update_failure_is_reported(self, db):
        service = TreatmentPlanService(db)
        service.plans = MagicMock()
        service.plans.get_by_id.return_value = None
        service.plans.update.side_effect = ValueError("TreatmentPlan must not be None")

        result = service.update(
            TreatmentPlanUpdate(**dict(plan_data, treatment_plan_id="TP000001")), caller(ADMIN)
        )

        assert result.failure == FailureKind.WRITE_FAILED
        assert result.message == "Cập nhật kế hoạch điều trị thất bại"

    def test_update_unknown_id_creates_plan(self, db):
        service = TreatmentPlanService(db)
        result = service.update(
            TreatmentPlanUpdate(**dict(plan_data, treatment_plan_id="TP000050")), caller(ADMIN)
        )

        assert result.ok
        assert [p.treatment_plan_id for p in service.get_all()] == ["TP000050"]

    def test_patient_sees_only_own_plans(self, db):
        service = TreatmentPlanService(db)
        service.add(TreatmentPlanCreate(**plan_data), caller(ADMIN))
        service.add(TreatmentPlanCreate(**dict(plan_data, patient_id="P002")), caller(ADMIN))

        assert [p.patient_id for p in service.get_for_caller(caller(PATIENT))] == ["P001"]
        assert len(service.get_for_caller(caller(STAFF))) == 2
        assert service.get_by_id("TP000002", caller(PATIENT)).failure == FailureKind.FORBIDDEN


class TestTreatmentPlansApi:

    def test_add_treatment_plan(self, client):
        response = client.post("/api/v1/treatment-plans", json=plan_data, headers=auth_headers(DOCTOR))

        assert response.status_code == 200
        assert response.json()["message"] == "Thêm kế hoạch điều trị thành công"

    def test_staff_cannot_add(self, client):
        response = client.post("/api/v1/treatment-plans", json=plan_data, headers=auth_headers(STAFF))
        assert response.status_code == 403

    def test_update_treatment_plan(self, client):
        client.post("/api/v1/treatment-plans", json=plan_data, headers=auth_headers(DOCTOR))

        updated = dict(plan_data, treatment_plan_id="TP000001", treatment_line=2)
        response = client.put("/api/v1/treatment-plans", json=updated, headers=auth_headers(DOCTOR))
        assert response.status_code == 200
        assert response.json()["message"] == "Cập nhật kế hoạch điều trị thành công"

        response = client.get("/api/v1/treatment-plans/TP000001", headers=auth_headers(PATIENT))
        assert response.status_code == 200
        assert response.json()["treatment_line"] == 2

    def test_patient_cannot_read_foreign_plan(self, client):
        client.post("/api/v1/treatment-plans", json=plan_data, headers=auth_headers(ADMIN))

        response = client.get("/api/v1/treatment-plans/TP000001", headers=auth_headers(OTHER_PATIENT))
        assert response.status_code == 403

    def test_unknown_plan_is_404(self, client):
        response = client.get("/api/v1/treatment-plans/TP999999", headers=auth_headers(ADMIN))
        assert response.status_code == 404

    def test_list_by_patient(self, client):
        client.post("/api/v1/treatment-plans", json=plan_data, headers=auth_headers(ADMIN))
        client.post("/api/v1/treatment-plans", json=dict(plan_data, patient_id="P002"), headers=auth_headers(ADMIN))

        response = client.get("/api/v1/treatment-plans/patient/P002", headers=auth_headers(DOCTOR))
        assert [p["patient_id"] for p in response.json()] == ["P002"]

        response = client.get("/api/v1/treatment-plans", headers=auth_headers(PATIENT))
        assert [p["patient_id"] for p in response.json()] == ["P001"]
