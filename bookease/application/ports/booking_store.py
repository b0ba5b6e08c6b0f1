from __future__ import annotations

from abc import ABC, abstractmethod

from bookease.domain.entities.booking import Booking


class BookingStorePort(ABC):
    @abstractmethod
    def append(self, booking: Booking) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def replace(self, booking: Booking) -> None:
        """Overwrite the stored booking with the same id."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Booking]:
        raise NotImplementedError
