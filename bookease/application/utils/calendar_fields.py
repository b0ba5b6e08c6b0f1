from __future__ import annotations

from datetime import date, time


def check_iso_date(value: str, field: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a YYYY-MM-DD date")


def check_time_range(start_time: str, end_time: str) -> None:
    try:
        start, end = time.fromisoformat(start_time), time.fromisoformat(end_time)
    except (TypeError, ValueError):
        raise ValueError("start_time and end_time must be HH:MM")
    if start >= end:
        raise ValueError("end_time must be after start_time")


def check_date_range(start_date: str, end_date: str) -> None:
    if check_iso_date(start_date, "start_date") > check_iso_date(end_date, "end_date"):
        raise ValueError("end_date must not be before start_date")
