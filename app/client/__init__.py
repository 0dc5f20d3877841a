"""Offline-tolerant reminder mirror for client applications."""
from app.client.api_client import ApiClientError, MedicationApiClient
from app.client.notifications import AppNotificationScheduler
from app.client.reminder_mirror import ReminderMirror, reminder_status
from app.client.storage import JsonFileStorage, LocalStorage, MemoryStorage
