from __future__ import annotations

from dataclasses import dataclass


SCHEDULE_STATUSES = ("scheduled", "ongoing", "completed", "cancelled")


@dataclass(frozen=True)
class CourseSchedule:
    """A dated run of a course that participants enroll in."""

    id: str
    course_id: str
    date: str  # YYYY-MM-DD
    start_time: str  # HH:MM
    end_time: str
    available_spots: int
    enrolled_participants: tuple[str, ...] = ()
    status: str = "scheduled"
    location: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Term:
    id: str
    name: str
    start_date: str
    end_date: str
    is_active: bool = True
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class RecurringSchedule:
    """A weekly slot for a course inside a term."""

    id: str
    course_id: str
    term_id: str
    day_of_week: int  # date.weekday(): Monday=0 .. Sunday=6
    start_time: str
    end_time: str
    start_date: str
    end_date: str
    max_participants: int
    location: str = ""
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None
