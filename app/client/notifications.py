"""
Client-local notification preferences, contact details and app notifications.
"""
import json
import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.client.storage import LocalStorage, NOTIFICATION_PREFERENCES_KEY, USER_CONTACT_KEY
from app.schemas.sche_medication import MedicationResponse
from app.schemas.sche_reminder import NotificationPreference, Reminder, UserContact

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _load(storage: LocalStorage, key: str, model: Type[M]) -> M:
    raw = storage.get_item(key)
    if not raw:
        return model()
    try:
        return model.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as e:
        logger.error(f"Stored {key} is corrupted, clearing it: {e}")
        storage.remove_item(key)
        return model()


def get_notification_preferences(storage: LocalStorage) -> NotificationPreference:
    return _load(storage, NOTIFICATION_PREFERENCES_KEY, NotificationPreference)


def save_notification_preferences(storage: LocalStorage, preferences: NotificationPreference) -> None:
    storage.set_item(NOTIFICATION_PREFERENCES_KEY, preferences.model_dump_json())


def get_user_contact(storage: LocalStorage) -> UserContact:
    return _load(storage, USER_CONTACT_KEY, UserContact)


def save_user_contact(storage: LocalStorage, contact: UserContact) -> None:
    storage.set_item(USER_CONTACT_KEY, contact.model_dump_json())


def notification_time(reminder: Reminder, offset_minutes: int) -> datetime:
    due_at = datetime.fromisoformat(f"{reminder.date}T{reminder.time}")
    return due_at - timedelta(minutes=offset_minutes)


def log_notification(title: str, body: str) -> None:
    logger.info(f"{title}: {body}")


class AppNotificationScheduler:
    """
    Arms one-shot timers that show an app notification ahead of each reminder.

    Args:
        storage: Where the notification preferences live.
        notify: Callback receiving (title, body) when a timer fires.
        clock: Current local time.
    """

    def __init__(
        self,
        storage: LocalStorage,
        notify: Callable[[str, str], None] = log_notification,
        clock: Callable[[], datetime] = datetime.now,
        timer_factory: Callable[..., threading.Timer] = threading.Timer
    ):
        self.storage = storage
        self.notify = notify
        self.clock = clock
        self.timer_factory = timer_factory
        self._timers: Dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def schedule(self, reminders: Sequence[Reminder], medications: Sequence[MedicationResponse]) -> List[str]:
        """
        Arm timers for pending reminders whose notification time is ahead.

        Returns:
            Ids of the reminders that got a timer.
        """
        preferences = get_notification_preferences(self.storage)
        if not preferences.app:
            return []

        by_id = {m.medication_id: m for m in medications}
        now = self.clock()
        armed = []
        for reminder in reminders:
            medication = by_id.get(reminder.medication_id)
            if medication is None or reminder.taken or reminder.skipped:
                continue
            fire_at = notification_time(reminder, preferences.reminder_offset_minutes)
            if fire_at <= now:
                continue
            with self._lock:
                if reminder.id in self._timers:
                    continue
                timer = self.timer_factory(
                    (fire_at - now).total_seconds(),
                    self._fire,
                    args=(reminder.id, f"Time to take {medication.name}",
                          f"Dosage: {medication.dosage}, Instructions: {medication.instruction}")
                )
                timer.daemon = True
                self._timers[reminder.id] = timer
                timer.start()
            armed.append(reminder.id)
        return armed

    def _fire(self, reminder_id: str, title: str, body: str) -> None:
        with self._lock:
            self._timers.pop(reminder_id, None)
        try:
            self.notify(title, body)
        except Exception as e:
            logger.error(f"App notification for {reminder_id} failed: {e}", exc_info=True)

    @property
    def pending(self) -> List[str]:
        with self._lock:
            return list(self._timers)

    def cancel_all(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()


def channels_for(preferences: NotificationPreference, contact: Optional[UserContact] = None) -> List[str]:
    """Enabled reminder channels that can actually be used with the given contact."""
    contact = contact or UserContact()
    channels = []
    if preferences.app:
        channels.append('app')
    if preferences.email and contact.email:
        channels.append('email')
    if preferences.sms and contact.phone:
        channels.append('sms')
    return channels
