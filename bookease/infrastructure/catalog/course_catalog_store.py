from __future__ import annotations

from bookease.application.ports.course_catalog import CourseCatalogPort
from bookease.domain.entities.course import Course
from bookease.infrastructure.catalog.course_catalog_data import COURSES


class CourseCatalogStore(CourseCatalogPort):
    def __init__(self, courses: list[Course] | None = None) -> None:
        seed = COURSES if courses is None else courses
        self._courses: dict[str, Course] = {c.id: c for c in seed}

    def list_courses(self) -> list[Course]:
        return list(self._courses.values())

    def get_course(self, course_id: str) -> Course | None:
        return self._courses.get(course_id.strip())

    def save_course(self, course: Course) -> None:
        self._courses[course.id] = course

    def delete_course(self, course_id: str) -> bool:
        return self._courses.pop(course_id, None) is not None
