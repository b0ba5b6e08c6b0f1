from __future__ import annotations

from bookease.domain.entities.course import Course
from bookease.domain.entities.schedule import Term

SEED_TIMESTAMP = "2024-01-01T00:00:00"

COURSES: list[Course] = [
    Course(
        id="course-yoga-basics",
        title="Yoga Basics",
        description="Foundational postures, breathing and relaxation for first-timers.",
        instructor="Maya Chen",
        duration_minutes=60,
        price=20,
        max_participants=12,
        category="Wellness",
        difficulty="beginner",
        location="Studio A",
        requirements="Yoga mat",
        created_at=SEED_TIMESTAMP,
        updated_at=SEED_TIMESTAMP,
    ),
    Course(
        id="course-vinyasa-flow",
        title="Vinyasa Flow",
        description="Breath-linked sequences building strength and mobility.",
        instructor="Maya Chen",
        duration_minutes=90,
        price=35,
        max_participants=10,
        category="Wellness",
        difficulty="intermediate",
        location="Studio A",
        created_at=SEED_TIMESTAMP,
        updated_at=SEED_TIMESTAMP,
    ),
    Course(
        id="course-watercolor-intro",
        title="Introduction to Watercolor",
        description="Washes, layering and color mixing with a small still life.",
        instructor="Tom Alvarez",
        duration_minutes=120,
        price=45,
        max_participants=8,
        category="Art",
        difficulty="beginner",
        location="Art Room",
        requirements="Materials provided",
        created_at=SEED_TIMESTAMP,
        updated_at=SEED_TIMESTAMP,
    ),
    Course(
        id="course-swim-technique",
        title="Swim Technique Clinic",
        description="Stroke analysis and drills for confident lap swimmers.",
        instructor="Priya Nair",
        duration_minutes=45,
        price=30,
        max_participants=6,
        category="Sports",
        difficulty="advanced",
        location="Pool",
        created_at=SEED_TIMESTAMP,
        updated_at=SEED_TIMESTAMP,
    ),
    Course(
        id="course-first-aid",
        title="First Aid Essentials",
        description="CPR, choking response and wound care with certification.",
        instructor="Sam Okafor",
        duration_minutes=180,
        price=60,
        max_participants=15,
        category="Safety",
        difficulty="beginner",
        location="Classroom 2",
        is_active=False,
        created_at=SEED_TIMESTAMP,
        updated_at=SEED_TIMESTAMP,
    ),
]

TERMS: list[Term] = [
    Term(
        id="term-spring-2024",
        name="Spring 2024",
        start_date="2024-03-01",
        end_date="2024-05-31",
        description="Spring semester courses",
        created_at=SEED_TIMESTAMP,
        updated_at=SEED_TIMESTAMP,
    ),
    Term(
        id="term-summer-2024",
        name="Summer 2024",
        start_date="2024-06-01",
        end_date="2024-08-31",
        description="Summer intensive courses",
        created_at=SEED_TIMESTAMP,
        updated_at=SEED_TIMESTAMP,
    ),
]
