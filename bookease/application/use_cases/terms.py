from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime
from typing import Any

from bookease.application.exceptions import (
    CourseNotFoundError,
    ScheduleNotFoundError,
    TermNotFoundError,
)
from bookease.application.ports.course_catalog import CourseCatalogPort
from bookease.application.ports.schedule_store import ScheduleStorePort
from bookease.application.utils.calendar_fields import check_date_range, check_time_range
from bookease.domain.entities.course import Course
from bookease.domain.entities.schedule import RecurringSchedule, Term

TERM_FIELDS = frozenset(f.name for f in fields(Term)) - {"id", "created_at", "updated_at"}
REQUIRED_TERM_FIELDS = frozenset({"name", "start_date", "end_date"})
RECURRING_FIELDS = frozenset(f.name for f in fields(RecurringSchedule)) - {"id", "created_at", "updated_at"}
REQUIRED_RECURRING_FIELDS = frozenset(
    {"course_id", "term_id", "day_of_week", "start_time", "end_time", "start_date", "end_date"}
)


def _now_iso() -> str:
    return datetime.now().isoformat()


class TermCatalog:
    """
    Terms and the weekly recurring schedules that run inside them. Deleting a
    term removes its recurring schedules.
    """

    def __init__(self, schedules: ScheduleStorePort, courses: CourseCatalogPort) -> None:
        self._schedules = schedules
        self._courses = courses
        self._logger = logging.getLogger(__name__)

    def list_terms(self, active_only: bool = False) -> list[Term]:
        terms = self._schedules.list_terms()
        if active_only:
            return [t for t in terms if t.is_active]
        return terms

    def get_term(self, term_id: str) -> Term:
        term = self._schedules.get_term(term_id)
        if term is None:
            raise TermNotFoundError(f"Term {term_id} not found")
        return term

    def add_term(self, data: dict[str, Any]) -> Term:
        values = self._clean(data, TERM_FIELDS, "term")
        missing = REQUIRED_TERM_FIELDS - set(values)
        if missing:
            raise ValueError(f"Missing term fields: {', '.join(sorted(missing))}")
        check_date_range(values["start_date"], values["end_date"])

        now = _now_iso()
        term = Term(**values, id=f"term-{uuid.uuid4().hex[:12]}", created_at=now, updated_at=now)
        self._schedules.save_term(term)
        self._logger.info("Term added", extra={"term_id": term.id})
        return term

    def update_term(self, term_id: str, updates: dict[str, Any]) -> Term:
        term = self.get_term(term_id)
        updated = replace(term, **self._clean(updates, TERM_FIELDS, "term"), updated_at=_now_iso())
        check_date_range(updated.start_date, updated.end_date)
        self._schedules.save_term(updated)
        return updated

    def delete_term(self, term_id: str) -> None:
        if not self._schedules.delete_term(term_id):
            raise TermNotFoundError(f"Term {term_id} not found")
        removed = 0
        for schedule in self.list_recurring_schedules(term_id=term_id):
            self._schedules.delete_recurring_schedule(schedule.id)
            removed += 1
        self._logger.info("Term deleted", extra={"term_id": term_id, "removed_schedules": removed})

    def list_recurring_schedules(
        self,
        term_id: str | None = None,
        course_id: str | None = None,
    ) -> list[RecurringSchedule]:
        return [
            s for s in self._schedules.list_recurring_schedules()
            if (term_id is None or s.term_id == term_id)
            and (course_id is None or s.course_id == course_id)
        ]

    def get_recurring_schedule(self, schedule_id: str) -> RecurringSchedule:
        schedule = self._schedules.get_recurring_schedule(schedule_id)
        if schedule is None:
            raise ScheduleNotFoundError(f"Recurring schedule {schedule_id} not found")
        return schedule

    def add_recurring_schedule(self, data: dict[str, Any]) -> RecurringSchedule:
        """Course and term must exist; max_participants defaults to the course's."""
        values = self._clean(data, RECURRING_FIELDS, "recurring schedule")
        missing = REQUIRED_RECURRING_FIELDS - set(values)
        if missing:
            raise ValueError(f"Missing recurring schedule fields: {', '.join(sorted(missing))}")
        course = self._require_course(values["course_id"])
        self.get_term(values["term_id"])
        values.setdefault("max_participants", course.max_participants)
        values.setdefault("location", course.location)

        now = _now_iso()
        schedule = RecurringSchedule(
            **values,
            id=f"recurring-{uuid.uuid4().hex[:12]}",
            created_at=now,
            updated_at=now,
        )
        self._check(schedule)
        self._schedules.save_recurring_schedule(schedule)
        self._logger.info(
            "Recurring schedule added",
            extra={"term_id": schedule.term_id, "schedule_id": schedule.id, "service": course.id},
        )
        return schedule

    def update_recurring_schedule(self, schedule_id: str, updates: dict[str, Any]) -> RecurringSchedule:
        schedule = self.get_recurring_schedule(schedule_id)
        values = self._clean(updates, RECURRING_FIELDS, "recurring schedule")
        if "course_id" in values:
            self._require_course(values["course_id"])
        if "term_id" in values:
            self.get_term(values["term_id"])
        updated = replace(schedule, **values, updated_at=_now_iso())
        self._check(updated)
        self._schedules.save_recurring_schedule(updated)
        return updated

    def delete_recurring_schedule(self, schedule_id: str) -> None:
        if not self._schedules.delete_recurring_schedule(schedule_id):
            raise ScheduleNotFoundError(f"Recurring schedule {schedule_id} not found")

    def _require_course(self, course_id: str) -> Course:
        course = self._courses.get_course(course_id)
        if course is None:
            raise CourseNotFoundError(f"Course {course_id} not found")
        return course

    def _check(self, schedule: RecurringSchedule) -> None:
        if not 0 <= schedule.day_of_week <= 6:
            raise ValueError("day_of_week must be 0 (Monday) to 6 (Sunday)")
        if schedule.max_participants < 0:
            raise ValueError("max_participants must not be negative")
        check_time_range(schedule.start_time, schedule.end_time)
        check_date_range(schedule.start_date, schedule.end_date)

    def _clean(self, data: dict[str, Any], allowed: frozenset[str], kind: str) -> dict[str, Any]:
        unknown = set(data) - allowed
        if unknown:
            raise ValueError(f"Unknown {kind} fields: {', '.join(sorted(unknown))}")
        return {k: v for k, v in data.items() if v is not None}
