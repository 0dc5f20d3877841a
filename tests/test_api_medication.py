MEDICATION = {
    "name": "Amoxicillin",
    "dosage": "500mg",
    "instruction": "After meals",
    "reminder_times": ["08:00", "20:00", "08:00"],
    "start_date": "2026-10-18",
    "days_of_week": ["Monday", "Thursday"],
}


def _create(client, headers, **overrides):
    return client.post("/api/medications", json={**MEDICATION, **overrides}, headers=headers)


def test_requires_authentication(client):
    response = client.get("/api/medications")

    assert response.status_code in (401, 403)


def test_create_and_list(client, auth_headers):
    headers = auth_headers()

    created = _create(client, headers)

    assert created.status_code == 200
    body = created.json()
    assert body["success"] is True
    assert body["message"] == "Success"
    assert body["data"]["reminder_times"] == ["08:00", "20:00"]
    assert body["data"]["days_of_week"] == ["Monday", "Thursday"]

    listed = client.get("/api/medications", headers=headers).json()["data"]
    assert [m["medication_id"] for m in listed] == [body["data"]["medication_id"]]


def test_invalid_schedule_is_rejected(client, auth_headers):
    headers = auth_headers()

    assert _create(client, headers, reminder_times=["8am"]).status_code == 422
    assert _create(client, headers, reminder_times=[]).status_code == 422
    assert _create(client, headers, days_of_week=["Mon"]).status_code == 422
    assert _create(client, headers, name="  ").status_code == 422
    assert client.get("/api/medications", headers=headers).json()["data"] == []


def test_get_update_delete(client, auth_headers):
    headers = auth_headers()
    medication_id = _create(client, headers).json()["data"]["medication_id"]

    fetched = client.get(f"/api/medications/{medication_id}", headers=headers)
    assert fetched.json()["data"]["name"] == "Amoxicillin"

    updated = client.patch(f"/api/medications/{medication_id}", json={"reminder_times": ["09:30"]}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["reminder_times"] == ["09:30"]
    assert updated.json()["data"]["dosage"] == "500mg"

    deleted = client.delete(f"/api/medications/{medication_id}", headers=headers)
    assert deleted.json()["data"] is True
    assert client.get(f"/api/medications/{medication_id}", headers=headers).status_code == 404


def test_other_users_medication_is_not_found(client, auth_headers):
    owner = auth_headers()
    other = auth_headers(email="bola@example.com", phone_number="+2348000000002")
    medication_id = _create(client, owner).json()["data"]["medication_id"]

    assert client.get(f"/api/medications/{medication_id}", headers=other).status_code == 404
    response = client.delete(f"/api/medications/{medication_id}", headers=other)
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Medication not found or unauthorized"}
    assert client.get("/api/medications", headers=other).json()["data"] == []
