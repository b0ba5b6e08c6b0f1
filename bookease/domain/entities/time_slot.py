from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSlot:
    id: str  # "{YYYY-MM-DD}-{HH:MM}"
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    available: bool = True
