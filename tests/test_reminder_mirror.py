import json
from datetime import date, datetime

import pytest

from app.client.api_client import ApiClientError
from app.client.reminder_mirror import ReminderMirror, reminder_id, reminder_status
from app.client.storage import LAST_GENERATED_KEY, REMINDERS_KEY, MemoryStorage
from app.helpers.enums import ReminderStatus
from app.schemas.sche_medication import MedicationResponse
from app.schemas.sche_reminder import Reminder


def _medication(medication_id="med-1", reminder_times=("08:00", "20:00"), days=("Monday",),
                start=date(2026, 10, 18), name="Amoxicillin"):
    return MedicationResponse(
        medication_id=medication_id,
        user_id="user-1",
        name=name,
        dosage="500mg",
        instruction="After meals",
        reminder_times=list(reminder_times),
        days_of_week=list(days),
        start_date=start,
    )


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return Clock(datetime(2026, 10, 19, 9, 15))


@pytest.fixture
def storage():
    return MemoryStorage()


def _mirror(storage, clock, medications):
    calls = []

    def fetch():
        calls.append(1)
        return medications

    mirror = ReminderMirror(storage, fetch, clock=clock)
    mirror.fetch_calls = calls
    return mirror


def test_generates_today_reminders_with_deterministic_ids(storage, clock):
    mirror = _mirror(storage, clock, [_medication(), _medication("med-2", days=["Tuesday"])])

    reminders = mirror.ensure_today_reminders()

    assert [r.id for r in reminders] == ["med-1-2026-10-19-08:00", "med-1-2026-10-19-20:00"]
    assert all(not r.taken and not r.skipped for r in reminders)
    assert storage.get_item(LAST_GENERATED_KEY) == "2026-10-19"


def test_second_call_same_day_changes_nothing(storage, clock):
    mirror = _mirror(storage, clock, [_medication()])

    first = mirror.ensure_today_reminders()
    stored_after_first = storage.get_item(REMINDERS_KEY)
    second = mirror.ensure_today_reminders()

    assert [r.id for r in second] == [r.id for r in first]
    assert storage.get_item(REMINDERS_KEY) == stored_after_first
    assert len(mirror.get_reminders()) == 2
    assert len(mirror.fetch_calls) == 1


def test_taken_reminder_survives_regeneration(storage, clock):
    mirror = _mirror(storage, clock, [_medication()])
    mirror.ensure_today_reminders()
    mirror.mark_taken("med-1-2026-10-19-08:00")

    storage.remove_item(LAST_GENERATED_KEY)
    again = mirror.ensure_today_reminders()
    regenerated = mirror.generate_today_reminders([_medication()])

    assert regenerated == []
    taken = [r for r in again if r.id == "med-1-2026-10-19-08:00"]
    assert len(taken) == 1 and taken[0].taken
    assert len(mirror.get_reminders()) == 2


def test_generation_keeps_other_days(storage, clock):
    old = Reminder(id="med-1-2026-10-12-08:00", medication_id="med-1", time="08:00", date="2026-10-12", taken=True)
    storage.set_item(REMINDERS_KEY, json.dumps([old.model_dump()]))
    mirror = _mirror(storage, clock, [_medication()])

    mirror.ensure_today_reminders()

    ids = {r.id for r in mirror.get_reminders()}
    assert ids == {"med-1-2026-10-12-08:00", "med-1-2026-10-19-08:00", "med-1-2026-10-19-20:00"}


def test_no_generation_once_marked_for_today(storage, clock):
    storage.set_item(LAST_GENERATED_KEY, "2026-10-19")
    mirror = _mirror(storage, clock, [_medication()])

    assert mirror.ensure_today_reminders() == []
    assert mirror.fetch_calls == []


def test_no_medications_means_no_marker(storage, clock):
    mirror = _mirror(storage, clock, [])

    assert mirror.ensure_today_reminders() == []
    assert storage.get_item(LAST_GENERATED_KEY) is None


def test_fetch_failure_keeps_existing_and_records_error(storage, clock):
    def fetch():
        raise ApiClientError("GET /medications failed with 503")

    mirror = ReminderMirror(storage, fetch, clock=clock)

    assert mirror.ensure_today_reminders() == []
    assert mirror.last_error == "GET /medications failed with 503"
    assert storage.get_item(LAST_GENERATED_KEY) is None


def test_corrupted_storage_is_cleared(storage, clock):
    storage.set_item(REMINDERS_KEY, "{not json")
    mirror = _mirror(storage, clock, [])

    assert mirror.get_reminders() == []
    assert storage.get_item(REMINDERS_KEY) is None


def test_wrongly_shaped_storage_is_cleared(storage, clock):
    storage.set_item(REMINDERS_KEY, json.dumps({"id": "x"}))
    mirror = _mirror(storage, clock, [])

    assert mirror.get_reminders() == []
    assert storage.get_item(REMINDERS_KEY) is None


def test_upcoming_reminders_filters_and_sorts(storage, clock):
    today = "2026-10-19"
    reminders = [
        Reminder(id="c", medication_id="m", time="21:00", date=today),
        Reminder(id="a", medication_id="m", time="09:15", date=today),
        Reminder(id="past", medication_id="m", time="08:00", date=today),
        Reminder(id="taken", medication_id="m", time="10:00", date=today, taken=True),
        Reminder(id="skipped", medication_id="m", time="11:00", date=today, skipped=True),
        Reminder(id="tomorrow", medication_id="m", time="10:00", date="2026-10-20"),
        Reminder(id="b", medication_id="m", time="12:30", date=today),
    ]
    mirror = _mirror(storage, clock, [])
    mirror.save_reminders(reminders)

    assert [r.id for r in mirror.get_upcoming_reminders()] == ["a", "b", "c"]


def test_mark_skipped_returns_today_list(storage, clock):
    mirror = _mirror(storage, clock, [_medication()])
    mirror.ensure_today_reminders()

    updated = mirror.mark_skipped("med-1-2026-10-19-20:00")

    assert [(r.time, r.taken, r.skipped) for r in updated] == [("08:00", False, False), ("20:00", False, True)]
    assert mirror.get_reminders()[1].skipped is True


def test_status_derivation():
    now = datetime(2026, 10, 19, 9, 15)
    base = dict(medication_id="m", date="2026-10-19")

    assert reminder_status(Reminder(id="1", time="08:00", taken=True, **base), now) == ReminderStatus.TAKEN
    assert reminder_status(Reminder(id="2", time="08:00", skipped=True, **base), now) == ReminderStatus.SKIPPED
    assert reminder_status(Reminder(id="3", time="09:15", **base), now) == ReminderStatus.OVERDUE
    assert reminder_status(Reminder(id="4", time="09:16", **base), now) == ReminderStatus.PENDING


def test_reminder_id_format():
    assert reminder_id("abc", "2026-10-19", "08:00") == "abc-2026-10-19-08:00"
