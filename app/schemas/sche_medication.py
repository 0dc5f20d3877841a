from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.helpers.schedule import WEEKDAYS, is_valid_hhmm


def _check_reminder_times(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return value
    if not value:
        raise ValueError('reminder_times must not be empty')
    bad = [t for t in value if not is_valid_hhmm(t)]
    if bad:
        raise ValueError(f'reminder_times must be HH:mm (24h), got {bad}')
    return list(dict.fromkeys(value))


def _check_days_of_week(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return value
    if not value:
        raise ValueError('days_of_week must not be empty')
    bad = [d for d in value if d not in WEEKDAYS]
    if bad:
        raise ValueError(f'days_of_week must be weekday names, got {bad}')
    return list(dict.fromkeys(value))


class MedicationBase(BaseModel):
    name: str
    dosage: str
    instruction: str
    reminder_times: List[str]
    start_date: date
    days_of_week: List[str]


class MedicationCreateRequest(MedicationBase):

    @field_validator('name', 'dosage', 'instruction')
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('must not be blank')
        return value

    @field_validator('reminder_times')
    @classmethod
    def valid_times(cls, value):
        return _check_reminder_times(value)

    @field_validator('days_of_week')
    @classmethod
    def valid_days(cls, value):
        return _check_days_of_week(value)


class MedicationUpdateRequest(BaseModel):
    name: Optional[str] = None
    dosage: Optional[str] = None
    instruction: Optional[str] = None
    reminder_times: Optional[List[str]] = None
    start_date: Optional[date] = None
    days_of_week: Optional[List[str]] = None

    @field_validator('reminder_times')
    @classmethod
    def valid_times(cls, value):
        return _check_reminder_times(value)

    @field_validator('days_of_week')
    @classmethod
    def valid_days(cls, value):
        return _check_days_of_week(value)


class MedicationResponse(MedicationBase):
    medication_id: str
    user_id: str
    notified_today: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
