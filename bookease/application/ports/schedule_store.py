from __future__ import annotations

from abc import ABC, abstractmethod

from bookease.domain.entities.schedule import CourseSchedule, RecurringSchedule, Term


class ScheduleStorePort(ABC):
    """Dated course runs, terms and the weekly schedules inside them."""

    @abstractmethod
    def list_schedules(self) -> list[CourseSchedule]:
        raise NotImplementedError

    @abstractmethod
    def get_schedule(self, schedule_id: str) -> CourseSchedule | None:
        raise NotImplementedError

    @abstractmethod
    def save_schedule(self, schedule: CourseSchedule) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_schedule(self, schedule_id: str) -> bool:
        """Returns True if it existed."""
        raise NotImplementedError

    @abstractmethod
    def list_terms(self) -> list[Term]:
        raise NotImplementedError

    @abstractmethod
    def get_term(self, term_id: str) -> Term | None:
        raise NotImplementedError

    @abstractmethod
    def save_term(self, term: Term) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_term(self, term_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def list_recurring_schedules(self) -> list[RecurringSchedule]:
        raise NotImplementedError

    @abstractmethod
    def get_recurring_schedule(self, schedule_id: str) -> RecurringSchedule | None:
        raise NotImplementedError

    @abstractmethod
    def save_recurring_schedule(self, schedule: RecurringSchedule) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_recurring_schedule(self, schedule_id: str) -> bool:
        raise NotImplementedError
