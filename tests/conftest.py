from __future__ import annotations

from datetime import date, timedelta
from zoneinfo import ZoneInfo

import pytest

from bookease.application.events import EventBus
from bookease.application.use_cases.attendees import AttendeeRegistry
from bookease.application.use_cases.booking_ledger import BookingLedger
from bookease.application.use_cases.booking_workflow import BookingWorkflow
from bookease.domain.entities.course import Course
from bookease.domain.entities.customer import Customer, User
from bookease.domain.events import BookingConfirmed
from bookease.infrastructure.availability.seeded_availability import AlwaysAvailable
from bookease.infrastructure.store.memory_store import MemoryAttendeeStore, MemoryBookingStore

UTC = ZoneInfo("UTC")


def next_weekday(days_ahead: int = 7) -> date:
    """A Monday-to-Saturday date at least days_ahead from today."""
    day = date.today() + timedelta(days=days_ahead)
    while day.weekday() == 6:
        day += timedelta(days=1)
    return day


@pytest.fixture
def yoga() -> Course:
    return Course(
        id="course-yoga-basics",
        title="Yoga Basics",
        description="Foundational postures",
        instructor="Maya Chen",
        duration_minutes=60,
        price=20,
        max_participants=12,
        category="Wellness",
    )


@pytest.fixture
def parent_user() -> User:
    return User(id="user-parent", email="parent@example.com", name="Pat Parent", phone="+1 555 0000")


@pytest.fixture
def customer() -> Customer:
    return Customer(name="Jane Roe", email="jane@example.com", phone="+1 555 0100")


@pytest.fixture
def ledger() -> BookingLedger:
    return BookingLedger(store=MemoryBookingStore(), timezone=UTC)


@pytest.fixture
def registry() -> AttendeeRegistry:
    return AttendeeRegistry(store=MemoryAttendeeStore())


@pytest.fixture
def events(registry: AttendeeRegistry) -> EventBus:
    bus = EventBus()
    bus.subscribe(BookingConfirmed.event_type, registry.on_booking_confirmed)
    return bus


@pytest.fixture
def workflow(ledger: BookingLedger, events: EventBus) -> BookingWorkflow:
    return BookingWorkflow(ledger=ledger, events=events, availability=AlwaysAvailable())


@pytest.fixture
def bookable_day() -> date:
    return next_weekday()
