import pytest

from app.repository.repo_dose import DoseRepository
from app.repository.repo_medication import MedicationRepository
from app.repository.repo_user import UserRepository
from app.services.reminder_scheduler import reminder_scheduler
from app.services.srv_reminder import ReminderService

from tests.conftest import MONDAY_0800, FakeEmailClient, FakeSmsClient

MEDICATION = {
    "name": "Amoxicillin",
    "dosage": "500mg",
    "instruction": "After meals",
    "reminder_times": ["08:00"],
    "start_date": "2026-10-18",
    "days_of_week": ["Monday"],
}


@pytest.fixture
def notifiers(monkeypatch):
    email_client, sms_client = FakeEmailClient(), FakeSmsClient()

    def service_factory(session):
        return ReminderService(
            medication_repo=MedicationRepository(session),
            user_repo=UserRepository(session),
            dose_repo=DoseRepository(session),
            email_client=email_client,
            sms_client=sms_client,
        )

    monkeypatch.setattr(reminder_scheduler, "service_factory", service_factory)
    monkeypatch.setattr(reminder_scheduler, "clock", lambda: MONDAY_0800)
    return email_client, sms_client


def test_manual_run_sends_reminders_and_records_dose(client, auth_headers, notifiers):
    email_client, sms_client = notifiers
    headers = auth_headers()
    medication_id = client.post("/api/medications", json=MEDICATION, headers=headers).json()["data"]["medication_id"]

    response = client.post("/api/reminders/run", headers=headers)

    assert response.status_code == 200
    report = response.json()["data"]
    assert report["current_time"] == "08:00"
    assert report["current_day"] == "Monday"
    assert report["matched"] == 1
    assert [o["channel"] for o in report["outcomes"]] == ["email", "sms", "dose_ledger"]
    assert [m["to"] for m in email_client.sent] == ["ada@example.com"]
    assert [m["to"] for m in sms_client.sent] == ["+2348000000001"]

    doses = client.get("/api/doses", headers=headers).json()["data"]
    assert len(doses) == 1
    assert doses[0]["medication_id"] == medication_id
    assert doses[0]["medication_name"] == "Amoxicillin"
    assert doses[0]["status"] == "pending"
    assert doses[0]["scheduled_time"].startswith("2026-10-19T08:00")


def test_manual_run_is_refused_while_sweep_running(client, auth_headers, notifiers):
    headers = auth_headers()
    reminder_scheduler._lock.acquire()
    try:
        response = client.post("/api/reminders/run", headers=headers)
    finally:
        reminder_scheduler._lock.release()

    assert response.status_code == 409
    assert response.json()["success"] is False


def test_dose_status_transitions(client, auth_headers, notifiers):
    headers = auth_headers()
    client.post("/api/medications", json=MEDICATION, headers=headers)
    client.post("/api/reminders/run", headers=headers)
    dose_id = client.get("/api/doses", headers=headers).json()["data"][0]["dose_id"]

    taken = client.patch(f"/api/doses/{dose_id}", json={"status": "taken"}, headers=headers)
    assert taken.status_code == 200
    assert taken.json()["data"]["status"] == "taken"

    again = client.patch(f"/api/doses/{dose_id}", json={"status": "skipped"}, headers=headers)
    assert again.status_code == 400

    assert client.get("/api/doses?status=pending", headers=headers).json()["data"] == []
    assert len(client.get("/api/doses?status=taken", headers=headers).json()["data"]) == 1


def test_dose_of_another_user_is_not_found(client, auth_headers, notifiers):
    owner = auth_headers()
    other = auth_headers(email="bola@example.com", phone_number="+2348000000002")
    client.post("/api/medications", json=MEDICATION, headers=owner)
    client.post("/api/reminders/run", headers=owner)
    dose_id = client.get("/api/doses", headers=owner).json()["data"][0]["dose_id"]

    response = client.patch(f"/api/doses/{dose_id}", json={"status": "taken"}, headers=other)

    assert response.status_code == 404
    assert client.get("/api/doses", headers=other).json()["data"] == []


def test_pending_is_not_a_valid_target(client, auth_headers, notifiers):
    headers = auth_headers()
    client.post("/api/medications", json=MEDICATION, headers=headers)
    client.post("/api/reminders/run", headers=headers)
    dose_id = client.get("/api/doses", headers=headers).json()["data"][0]["dose_id"]

    response = client.patch(f"/api/doses/{dose_id}", json={"status": "pending"}, headers=headers)

    assert response.status_code == 400
