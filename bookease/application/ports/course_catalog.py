from __future__ import annotations

from abc import ABC, abstractmethod

from bookease.domain.entities.course import Course


class CourseCatalogPort(ABC):
    @abstractmethod
    def list_courses(self) -> list[Course]:
        raise NotImplementedError

    @abstractmethod
    def get_course(self, course_id: str) -> Course | None:
        """Get course by id."""
        raise NotImplementedError

    @abstractmethod
    def save_course(self, course: Course) -> None:
        """Insert or replace a course by id."""
        raise NotImplementedError

    @abstractmethod
    def delete_course(self, course_id: str) -> bool:
        """Remove course. Returns True if it existed."""
        raise NotImplementedError
