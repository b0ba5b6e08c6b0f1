from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date


class AvailabilityPort(ABC):
    @abstractmethod
    def is_slot_available(self, day: date, start_time: str, end_time: str) -> bool:
        """Check if the slot starting at start_time (HH:MM) on day can be booked."""
        raise NotImplementedError
