from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.helpers.enums import NotificationChannel


class ChannelOutcome(BaseModel):
    medication_id: str
    channel: NotificationChannel
    success: bool
    error: Optional[str] = None


class SweepReport(BaseModel):
    """Result of one reminder sweep: one outcome per attempted action."""
    swept_at: datetime
    current_time: str
    current_day: str
    candidates: int = 0
    matched: int = 0
    skipped_missing_user: List[str] = Field(default_factory=list)
    outcomes: List[ChannelOutcome] = Field(default_factory=list)
    error: Optional[str] = None

    def outcomes_for(self, medication_id: str) -> List[ChannelOutcome]:
        return [o for o in self.outcomes if o.medication_id == medication_id]

    @property
    def failures(self) -> List[ChannelOutcome]:
        return [o for o in self.outcomes if not o.success]


class Reminder(BaseModel):
    """Day-scoped reminder instance kept in client-local storage."""
    id: str
    medication_id: str
    time: str
    date: str
    taken: bool = False
    skipped: bool = False
    notes: str = ''


class NotificationPreference(BaseModel):
    email: bool = False
    sms: bool = False
    app: bool = True
    reminder_offset_minutes: int = Field(15, ge=0)


class UserContact(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
