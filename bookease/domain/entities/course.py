from __future__ import annotations

from dataclasses import dataclass


DIFFICULTIES = ("beginner", "intermediate", "advanced")


@dataclass(frozen=True)
class Course:
    id: str
    title: str
    description: str
    instructor: str
    duration_minutes: int
    price: float
    max_participants: int
    category: str
    difficulty: str = "beginner"  # "beginner", "intermediate", "advanced"
    location: str = ""
    is_active: bool = True
    requirements: str | None = None
    image_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
