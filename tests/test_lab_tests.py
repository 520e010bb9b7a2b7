from .conftest import auth_headers, ADMIN, DOCTOR, STAFF, PATIENT, OTHER_PATIENT

lab_test_data = {
    "request_id": "RQ000001",
    "patient_id": "P001",
    "treatment_plan_id": "TP000001",
    "test_name": "Đếm tế bào CD4",
    "test_code": "CD4",
    "test_type": "Máu",
    "result_value": "520 tế bào/mm3",
    "cd4_initial": 350,
    "viral_load_initial": 12000,
    "status": "Hoàn thành",
    "description": "Xét nghiệm ban đầu"
}


def _create(client, data=None):
    return client.post("/api/v1/lab-tests", json=data or lab_test_data, headers=auth_headers(STAFF))


class TestLabTestsApi:

    def test_create_lab_test(self, client):
        response = _create(client)

        assert response.status_code == 201
        assert response.json()["message"] == "Tạo mới LabTest thành công!"
        assert response.json()["data"]["lab_test_id"] == "LT000001"

    def test_list_lab_tests(self, client):
        _create(client)
        _create(client, dict(lab_test_data, patient_id="P002"))

        response = client.get("/api/v1/lab-tests", headers=auth_headers(DOCTOR))
        assert [t["lab_test_id"] for t in response.json()] == ["LT000001", "LT000002"]

    def test_patient_reads_own_result(self, client):
        _create(client)

        response = client.get("/api/v1/lab-tests/LT000001", headers=auth_headers(PATIENT))
        assert response.status_code == 200
        assert response.json()["cd4_initial"] == 350

    def test_patient_cannot_read_foreign_result(self, client):
        _create(client)

        response = client.get("/api/v1/lab-tests/LT000001", headers=auth_headers(OTHER_PATIENT))
        assert response.status_code == 403
        assert response.json()["detail"] == "Bạn không có quyền xem kết quả này."

    def test_unknown_lab_test(self, client):
        response = client.get("/api/v1/lab-tests/LT404404", headers=auth_headers(ADMIN))

        assert response.status_code == 404
        assert response.json()["detail"] == "Không tìm thấy xét nghiệm."

    def test_update_lab_test(self, client):
        _create(client)

        updated = dict(lab_test_data, result_value="610 tế bào/mm3")
        response = client.put("/api/v1/lab-tests/LT000001", json=updated, headers=auth_headers(DOCTOR))
        assert response.status_code == 200
        assert response.json()["message"] == "Cập nhật LabTest thành công!"

        response = client.get("/api/v1/lab-tests/LT000001", headers=auth_headers(DOCTOR))
        assert response.json()["result_value"] == "610 tế bào/mm3"

    def test_update_unknown_lab_test(self, client):
        response = client.put("/api/v1/lab-tests/LT000404", json=lab_test_data, headers=auth_headers(ADMIN))

        assert response.status_code == 404
        assert response.json()["detail"] == "LabTest không tồn tại hoặc cập nhật không thành công."

    def test_delete_lab_test(self, client):
        _create(client)

        response = client.delete("/api/v1/lab-tests/LT000001", headers=auth_headers(ADMIN))
        assert response.status_code == 200
        assert response.json()["message"] == "Xóa LabTest thành công!"

        response = client.delete("/api/v1/lab-tests/LT000001", headers=auth_headers(ADMIN))
        assert response.status_code == 404
        assert response.json()["detail"] == "LabTest này không tồn tại hoặc đã bị xóa."

    def test_patient_cannot_create(self, client):
        response = client.post("/api/v1/lab-tests", json=lab_test_data, headers=auth_headers(PATIENT))
        assert response.status_code == 403
