from __future__ import annotations

from abc import ABC, abstractmethod

from bookease.domain.entities.attendee import Attendee


class AttendeeStorePort(ABC):
    @abstractmethod
    def list_attendees(self) -> list[Attendee]:
        """All attendees in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def get_attendee(self, attendee_id: str) -> Attendee | None:
        raise NotImplementedError

    @abstractmethod
    def save_attendee(self, attendee: Attendee) -> None:
        """Insert or replace by id, keeping the original position on replace."""
        raise NotImplementedError

    @abstractmethod
    def delete_attendee(self, attendee_id: str) -> None:
        raise NotImplementedError
