from __future__ import annotations

from datetime import date

SUNDAY = 6


def is_date_available(day: date, today: date | None = None, excluded_weekday: int = SUNDAY) -> bool:
    """A date is bookable unless it is in the past or falls on the excluded weekday."""
    if today is None:
        today = date.today()
    if day < today:
        return False
    if day.weekday() == excluded_weekday:
        return False
    return True
