"""
Client Reminder Mirror.

Derives today's reminder instances from the medication list, keeps them in
client-local storage and answers "what is due / overdue" from wall-clock time
without contacting the backend again.
"""
import json
import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from app.client.api_client import ApiClientError
from app.client.storage import LocalStorage, REMINDERS_KEY, LAST_GENERATED_KEY
from app.helpers.enums import ReminderStatus
from app.helpers.schedule import format_hhmm, is_due_on, weekday_name
from app.schemas.sche_medication import MedicationResponse
from app.schemas.sche_reminder import Reminder

logger = logging.getLogger(__name__)

_reminder_list = TypeAdapter(List[Reminder])


def reminder_id(medication_id: str, date: str, time: str) -> str:
    return f"{medication_id}-{date}-{time}"


def reminder_status(reminder: Reminder, now: datetime) -> ReminderStatus:
    if reminder.taken:
        return ReminderStatus.TAKEN
    if reminder.skipped:
        return ReminderStatus.SKIPPED
    due_at = datetime.fromisoformat(f"{reminder.date}T{reminder.time}")
    if due_at <= now:
        return ReminderStatus.OVERDUE
    return ReminderStatus.PENDING


def _by_time(reminders: List[Reminder]) -> List[Reminder]:
    return sorted(reminders, key=lambda r: r.time)


class ReminderMirror:
    """
    Usage:
        mirror = ReminderMirror(JsonFileStorage('~/.med-reminder.json'), api.get_medications)
        today = mirror.ensure_today_reminders()
        mirror.mark_taken(today[0].id)
    """

    def __init__(
        self,
        storage: LocalStorage,
        fetch_medications: Callable[[], Sequence[MedicationResponse]],
        clock: Callable[[], datetime] = datetime.now
    ):
        self.storage = storage
        self.fetch_medications = fetch_medications
        self.clock = clock
        self.last_error: Optional[str] = None

    def _today(self) -> str:
        return self.clock().date().isoformat()

    def get_reminders(self) -> List[Reminder]:
        raw = self.storage.get_item(REMINDERS_KEY)
        if not raw:
            return []
        try:
            return _reminder_list.validate_python(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.error(f"Stored reminders are corrupted, clearing them: {e}")
            self.storage.remove_item(REMINDERS_KEY)
            return []

    def save_reminders(self, reminders: List[Reminder]) -> None:
        self.storage.set_item(REMINDERS_KEY, json.dumps([r.model_dump() for r in reminders]))

    def generate_today_reminders(self, medications: Sequence[MedicationResponse],
                                 existing: Optional[List[Reminder]] = None) -> List[Reminder]:
        """
        Build reminders for today that are not stored yet.

        Ids are deterministic per (medication, date, time) and checked
        against every stored reminder, not only today's.
        """
        now = self.clock()
        today = now.date().isoformat()
        day = weekday_name(now)
        known_ids = {r.id for r in (existing if existing is not None else self.get_reminders())}

        generated: List[Reminder] = []
        for medication in medications:
            if not is_due_on(medication, now, day):
                continue
            for time in medication.reminder_times:
                rid = reminder_id(medication.medication_id, today, time)
                if rid in known_ids:
                    continue
                known_ids.add(rid)
                generated.append(Reminder(id=rid, medication_id=medication.medication_id, time=time, date=today))
                logger.debug(f"Generated reminder: {medication.name} at {time}")
        return generated

    def ensure_today_reminders(self) -> List[Reminder]:
        """
        Return today's reminders, generating them at most once per day.

        Generation runs only when nothing is stored for today and today is
        not yet marked as generated. A failed medication fetch is recorded in
        ``last_error`` and today's stored reminders are returned as they are.
        """
        today = self._today()
        all_reminders = self.get_reminders()
        todays = [r for r in all_reminders if r.date == today]
        self.last_error = None

        if todays or self.storage.get_item(LAST_GENERATED_KEY) == today:
            return _by_time(todays)

        try:
            medications = list(self.fetch_medications())
        except ApiClientError as e:
            logger.error(f"Could not fetch medications for today's reminders: {e}")
            self.last_error = str(e)
            return _by_time(todays)

        if not medications:
            logger.info("No medications available to generate reminders from")
            return []

        generated = self.generate_today_reminders(medications, existing=all_reminders)
        self.save_reminders([r for r in all_reminders if r.date != today] + generated)
        self.storage.set_item(LAST_GENERATED_KEY, today)
        logger.info(f"Generated {len(generated)} reminders for {today}")
        return _by_time(generated)

    def update_reminder_status(self, reminder_id: str, taken: bool, skipped: bool) -> List[Reminder]:
        """Rewrite one reminder's flags by id and return today's reminders."""
        reminders = self.get_reminders()
        updated = [
            r.model_copy(update={'taken': taken, 'skipped': skipped}) if r.id == reminder_id else r
            for r in reminders
        ]
        self.save_reminders(updated)
        return self.get_today_reminders(updated)

    def mark_taken(self, reminder_id: str) -> List[Reminder]:
        return self.update_reminder_status(reminder_id, taken=True, skipped=False)

    def mark_skipped(self, reminder_id: str) -> List[Reminder]:
        return self.update_reminder_status(reminder_id, taken=False, skipped=True)

    def get_today_reminders(self, reminders: Optional[List[Reminder]] = None) -> List[Reminder]:
        today = self._today()
        reminders = reminders if reminders is not None else self.get_reminders()
        return _by_time([r for r in reminders if r.date == today])

    def get_upcoming_reminders(self) -> List[Reminder]:
        now = self.clock()
        today = now.date().isoformat()
        current_time = format_hhmm(now)
        # fixed-width HH:mm strings order lexicographically
        return _by_time([
            r for r in self.get_reminders()
            if r.date == today and not r.taken and not r.skipped and r.time >= current_time
        ])

    def reminder_status(self, reminder: Reminder) -> ReminderStatus:
        return reminder_status(reminder, self.clock())
