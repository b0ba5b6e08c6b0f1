from __future__ import annotations

from bookease.application.ports.schedule_store import ScheduleStorePort
from bookease.domain.entities.schedule import CourseSchedule, RecurringSchedule, Term
from bookease.infrastructure.catalog.course_catalog_data import TERMS


class MemoryScheduleStore(ScheduleStorePort):
    def __init__(self, terms: list[Term] | None = None) -> None:
        seed = TERMS if terms is None else terms
        self._schedules: dict[str, CourseSchedule] = {}
        self._terms: dict[str, Term] = {t.id: t for t in seed}
        self._recurring: dict[str, RecurringSchedule] = {}

    def list_schedules(self) -> list[CourseSchedule]:
        return list(self._schedules.values())

    def get_schedule(self, schedule_id: str) -> CourseSchedule | None:
        return self._schedules.get(schedule_id)

    def save_schedule(self, schedule: CourseSchedule) -> None:
        self._schedules[schedule.id] = schedule

    def delete_schedule(self, schedule_id: str) -> bool:
        return self._schedules.pop(schedule_id, None) is not None

    def list_terms(self) -> list[Term]:
        return list(self._terms.values())

    def get_term(self, term_id: str) -> Term | None:
        return self._terms.get(term_id)

    def save_term(self, term: Term) -> None:
        self._terms[term.id] = term

    def delete_term(self, term_id: str) -> bool:
        return self._terms.pop(term_id, None) is not None

    def list_recurring_schedules(self) -> list[RecurringSchedule]:
        return list(self._recurring.values())

    def get_recurring_schedule(self, schedule_id: str) -> RecurringSchedule | None:
        return self._recurring.get(schedule_id)

    def save_recurring_schedule(self, schedule: RecurringSchedule) -> None:
        self._recurring[schedule.id] = schedule

    def delete_recurring_schedule(self, schedule_id: str) -> bool:
        return self._recurring.pop(schedule_id, None) is not None
