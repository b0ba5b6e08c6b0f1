from __future__ import annotations

import hashlib
from datetime import date

from bookease.application.ports.availability import AvailabilityPort


class SeededAvailability(AvailabilityPort):
    """
    Stand-in for a real availability check: marks roughly `ratio` of slots as
    free, deterministically per (date, start time, seed).
    """

    def __init__(self, ratio: float = 0.7, seed: str = "") -> None:
        if not 0.0 <= ratio <= 1.0:
            raise ValueError("ratio must be between 0 and 1")
        self._ratio = ratio
        self._seed = seed

    def is_slot_available(self, day: date, start_time: str, end_time: str) -> bool:
        key = f"{self._seed}:{day.isoformat()}:{start_time}".encode("utf-8")
        digest = hashlib.sha256(key).digest()
        roll = int.from_bytes(digest[:8], "big") / 2**64
        return roll < self._ratio


class AlwaysAvailable(AvailabilityPort):
    def is_slot_available(self, day: date, start_time: str, end_time: str) -> bool:
        return True
