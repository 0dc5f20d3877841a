import os
from datetime import date, datetime

import pytest

os.environ["SQL_DATABASE_URL"] = "sqlite://"
os.environ.pop("DATABASE_URL", None)
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["REMINDER_SCHEDULER_ENABLED"] = "false"

from app.db.base import SessionLocal, engine  # noqa: E402
from app.helpers.exception_handler import NotificationError  # noqa: E402
from app.models import Base, Medication, User  # noqa: E402

# 2026-10-19 is a Monday
MONDAY_0800 = datetime(2026, 10, 19, 8, 0)


class FakeEmailClient:
    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    def send_email(self, to, subject, body, html=None):
        if to in self.fail_for:
            raise NotificationError("email", f"mailbox unavailable: {to}")
        self.sent.append({"to": to, "subject": subject, "body": body, "html": html})


class FakeSmsClient:
    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    def send_sms(self, to, body):
        if to in self.fail_for:
            raise NotificationError("sms", f"gateway rejected {to}")
        self.sent.append({"to": to, "body": body})


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def email_client():
    return FakeEmailClient()


@pytest.fixture
def sms_client():
    return FakeSmsClient()


@pytest.fixture
def make_user(session):
    def _make(email="ada@example.com", phone_number="+2348000000001", full_name="Ada Obi"):
        user = User(full_name=full_name, email=email, phone_number=phone_number, hashed_password="x")
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_medication(session):
    def _make(user_id, name="Amoxicillin", reminder_times=("08:00", "20:00"),
              days_of_week=("Monday",), start_date=date(2026, 10, 18), dosage="500mg"):
        medication = Medication(
            user_id=user_id,
            name=name,
            dosage=dosage,
            instruction="After meals",
            reminder_times=list(reminder_times),
            days_of_week=list(days_of_week),
            start_date=start_date,
        )
        session.add(medication)
        session.commit()
        session.refresh(medication)
        return medication
    return _make


@pytest.fixture
def mail_outbox():
    return FakeEmailClient()


@pytest.fixture
def client(mail_outbox):
    from fastapi.testclient import TestClient
    from app.main import app
    from app.notifier.email_client import get_email_client

    app.dependency_overrides[get_email_client] = lambda: mail_outbox
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    def _login(email="ada@example.com", password="Secret#123", phone_number="+2348000000001"):
        client.post("/api/auth/register", json={
            "full_name": "Ada Obi",
            "email": email,
            "password": password,
            "phone_number": phone_number,
        })
        response = client.post("/api/auth/login", json={"username": email, "password": password})
        token = response.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}
    return _login
