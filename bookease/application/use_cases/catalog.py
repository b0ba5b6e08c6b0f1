from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime
from typing import Any

from bookease.application.exceptions import (
    CourseNotFoundError,
    ScheduleFullError,
    ScheduleNotFoundError,
)
from bookease.application.ports.course_catalog import CourseCatalogPort
from bookease.application.ports.schedule_store import ScheduleStorePort
from bookease.application.utils.calendar_fields import check_iso_date, check_time_range
from bookease.domain.entities.course import DIFFICULTIES, Course
from bookease.domain.entities.schedule import SCHEDULE_STATUSES, CourseSchedule

EDITABLE_FIELDS = frozenset(f.name for f in fields(Course)) - {"id", "created_at", "updated_at"}
REQUIRED_FIELDS = frozenset(
    {"title", "description", "instructor", "duration_minutes", "price", "max_participants", "category"}
)
SCHEDULE_FIELDS = frozenset(f.name for f in fields(CourseSchedule)) - {"id", "enrolled_participants"}
REQUIRED_SCHEDULE_FIELDS = frozenset({"course_id", "date", "start_time", "end_time"})


class CourseCatalog:
    """Courses plus their dated schedules; deleting a course removes everything scheduled for it."""

    def __init__(self, store: CourseCatalogPort, schedules: ScheduleStorePort) -> None:
        self._store = store
        self._schedules = schedules
        self._logger = logging.getLogger(__name__)

    def list_courses(self, active_only: bool = False) -> list[Course]:
        courses = self._store.list_courses()
        if active_only:
            return [c for c in courses if c.is_active]
        return courses

    def get_course(self, course_id: str) -> Course:
        course = self._store.get_course(course_id)
        if course is None:
            raise CourseNotFoundError(f"Course {course_id} not found")
        return course

    def add_course(self, data: dict[str, Any]) -> Course:
        missing = REQUIRED_FIELDS - set(data)
        if missing:
            raise ValueError(f"Missing course fields: {', '.join(sorted(missing))}")
        values = self._clean(data)
        now = datetime.now().isoformat()
        course = Course(**values, id=f"course-{uuid.uuid4().hex[:12]}", created_at=now, updated_at=now)
        self._store.save_course(course)
        self._logger.info("Course added", extra={"service": course.id})
        return course

    def update_course(self, course_id: str, updates: dict[str, Any]) -> Course:
        course = self.get_course(course_id)
        updated = replace(course, **self._clean(updates), updated_at=datetime.now().isoformat())
        self._store.save_course(updated)
        return updated

    def delete_course(self, course_id: str) -> None:
        if not self._store.delete_course(course_id):
            raise CourseNotFoundError(f"Course {course_id} not found")
        for schedule in self.list_schedules(course_id):
            self._schedules.delete_schedule(schedule.id)
        for recurring in self._schedules.list_recurring_schedules():
            if recurring.course_id == course_id:
                self._schedules.delete_recurring_schedule(recurring.id)
        self._logger.info("Course deleted", extra={"service": course_id})

    def toggle_course_status(self, course_id: str) -> Course:
        course = self.get_course(course_id)
        return self.update_course(course_id, {"is_active": not course.is_active})

    # Schedules

    def list_schedules(self, course_id: str | None = None) -> list[CourseSchedule]:
        schedules = self._schedules.list_schedules()
        if course_id is not None:
            return [s for s in schedules if s.course_id == course_id]
        return schedules

    def get_schedule(self, schedule_id: str) -> CourseSchedule:
        schedule = self._schedules.get_schedule(schedule_id)
        if schedule is None:
            raise ScheduleNotFoundError(f"Schedule {schedule_id} not found")
        return schedule

    def add_schedule(self, data: dict[str, Any]) -> CourseSchedule:
        """Spots default to the course's max_participants."""
        missing = REQUIRED_SCHEDULE_FIELDS - {k for k, v in data.items() if v is not None}
        if missing:
            raise ValueError(f"Missing schedule fields: {', '.join(sorted(missing))}")
        course = self.get_course(data["course_id"])
        values = self._clean_schedule(data)
        values.setdefault("available_spots", course.max_participants)
        check_time_range(values["start_time"], values["end_time"])

        schedule = CourseSchedule(**values, id=f"schedule-{uuid.uuid4().hex[:12]}")
        self._schedules.save_schedule(schedule)
        self._logger.info("Schedule added", extra={"service": course.id, "schedule_id": schedule.id})
        return schedule

    def update_schedule(self, schedule_id: str, updates: dict[str, Any]) -> CourseSchedule:
        schedule = self.get_schedule(schedule_id)
        values = self._clean_schedule(updates)
        if "course_id" in values:
            self.get_course(values["course_id"])
        updated = replace(schedule, **values)
        check_time_range(updated.start_time, updated.end_time)
        self._schedules.save_schedule(updated)
        return updated

    def delete_schedule(self, schedule_id: str) -> None:
        if not self._schedules.delete_schedule(schedule_id):
            raise ScheduleNotFoundError(f"Schedule {schedule_id} not found")

    def enroll_participant(self, schedule_id: str, customer_id: str) -> CourseSchedule:
        """Take one spot for customer_id. Enrolling twice is a no-op."""
        schedule = self.get_schedule(schedule_id)
        if customer_id in schedule.enrolled_participants:
            return schedule
        if schedule.available_spots <= 0:
            raise ScheduleFullError(f"Schedule {schedule_id} has no spots left")

        updated = replace(
            schedule,
            enrolled_participants=schedule.enrolled_participants + (customer_id,),
            available_spots=schedule.available_spots - 1,
        )
        self._schedules.save_schedule(updated)
        self._logger.info(
            "Participant enrolled",
            extra={"schedule_id": schedule_id, "available_spots": updated.available_spots},
        )
        return updated

    def _clean(self, data: dict[str, Any]) -> dict[str, Any]:
        unknown = set(data) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown course fields: {', '.join(sorted(unknown))}")
        if "difficulty" in data and data["difficulty"] not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
        for key in ("price", "duration_minutes", "max_participants"):
            if key in data and data[key] is not None and data[key] < 0:
                raise ValueError(f"{key} must not be negative")
        return dict(data)

    def _clean_schedule(self, data: dict[str, Any]) -> dict[str, Any]:
        unknown = set(data) - SCHEDULE_FIELDS
        if unknown:
            raise ValueError(f"Unknown schedule fields: {', '.join(sorted(unknown))}")
        values = {k: v for k, v in data.items() if v is not None}
        if "status" in values and values["status"] not in SCHEDULE_STATUSES:
            raise ValueError(f"status must be one of {', '.join(SCHEDULE_STATUSES)}")
        if "date" in values:
            check_iso_date(values["date"], "date")
        if values.get("available_spots", 0) < 0:
            raise ValueError("available_spots must not be negative")
        return values
