from abc import ABC, abstractmethod

from bookease.domain.entities.booking_state import BookingState


class WorkflowSessionStorePort(ABC):
    @abstractmethod
    def get_or_create(self, session_id: str | None) -> str:
        raise NotImplementedError

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_state(self, session_id: str) -> BookingState:
        raise NotImplementedError

    @abstractmethod
    def set_state(self, session_id: str, state: BookingState) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, session_id: str) -> None:
        raise NotImplementedError
