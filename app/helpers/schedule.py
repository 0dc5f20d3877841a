"""
Schedule matching helpers shared by the server-side reminder sweep and the
client reminder mirror.

A medication is *due on* a date when its start date has been reached and the
date's weekday is one of its scheduled days. It *matches* a minute when the
``HH:mm`` string is one of its reminder times (exact string match).
"""
import re
from datetime import date, datetime
from typing import Any, Iterable, Optional, Union

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

_HHMM_RE = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


def weekday_name(value: Union[date, datetime]) -> str:
    return WEEKDAYS[value.weekday()]


def format_hhmm(value: datetime) -> str:
    return value.strftime('%H:%M')


def is_valid_hhmm(value: Any) -> bool:
    return isinstance(value, str) and bool(_HHMM_RE.match(value))


def to_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _field(medication: Any, name: str):
    if isinstance(medication, dict):
        return medication.get(name)
    return getattr(medication, name, None)


def is_due_on(medication: Any, on_date: Union[date, datetime], weekday: Optional[str] = None) -> bool:
    """
    Check whether a medication is scheduled on a calendar day.

    Args:
        medication: Object or dict with ``start_date`` and ``days_of_week``.
        on_date: The day being checked.
        weekday: Weekday name of ``on_date``; derived when omitted.

    Returns:
        True when ``start_date <= on_date`` and the weekday is scheduled.
    """
    start_date = to_date(_field(medication, 'start_date'))
    if start_date is None or start_date > to_date(on_date):
        return False
    weekday = weekday or weekday_name(on_date)
    return weekday in (_field(medication, 'days_of_week') or [])


def matches_time(medication: Any, hhmm: str) -> bool:
    reminder_times: Iterable[str] = _field(medication, 'reminder_times') or []
    return hhmm in reminder_times
