from datetime import date, datetime
from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from bookease.core.config import settings
from bookease.application.events import EventBus
from bookease.application.ports.attendee_store import AttendeeStorePort
from bookease.application.ports.auth import AuthPort
from bookease.application.ports.availability import AvailabilityPort
from bookease.application.ports.course_catalog import CourseCatalogPort
from bookease.application.ports.schedule_store import ScheduleStorePort
from bookease.application.ports.workflow_session_store import WorkflowSessionStorePort
from bookease.application.use_cases.analytics import BookingAnalytics
from bookease.application.use_cases.attendees import AttendeeRegistry
from bookease.application.use_cases.booking_ledger import BookingLedger
from bookease.application.use_cases.booking_workflow import BookingWorkflow
from bookease.application.use_cases.catalog import CourseCatalog
from bookease.application.use_cases.terms import TermCatalog
from bookease.domain.events import BookingConfirmed
from bookease.infrastructure.auth.mock_auth import MockAuthStore
from bookease.infrastructure.availability.seeded_availability import SeededAvailability
from bookease.infrastructure.catalog.course_catalog_store import CourseCatalogStore
from bookease.infrastructure.catalog.schedule_store import MemoryScheduleStore
from bookease.infrastructure.store.json_store import JsonAttendeeStore
from bookease.infrastructure.store.memory_store import (
    MemoryAttendeeStore,
    MemoryBookingStore,
    MemoryWorkflowSessionStore,
)


_attendee_store: JsonAttendeeStore | MemoryAttendeeStore | None = None


def get_timezone() -> ZoneInfo:
    try:
        return ZoneInfo(settings.BUSINESS_TIMEZONE)
    except Exception as e:
        logging.getLogger(__name__).warning(
            "Unknown business timezone, using UTC", extra={"reason": str(e)}
        )
        return ZoneInfo("UTC")


def get_business_today() -> date:
    return datetime.now(get_timezone()).date()


def get_attendee_store() -> AttendeeStorePort:
    global _attendee_store
    if _attendee_store is None:
        if settings.ENV.lower() in {"dev", "local"}:
            _attendee_store = JsonAttendeeStore(
                data_dir=settings.ATTENDEE_STORE_DIR,
                name=settings.ATTENDEE_STORE_NAME,
            )
        else:
            _attendee_store = MemoryAttendeeStore()
    return _attendee_store


@lru_cache
def get_course_store() -> CourseCatalogPort:
    return CourseCatalogStore()


@lru_cache
def get_schedule_store() -> ScheduleStorePort:
    return MemoryScheduleStore()


@lru_cache
def get_auth() -> AuthPort:
    return MockAuthStore()


@lru_cache
def get_session_store() -> WorkflowSessionStorePort:
    return MemoryWorkflowSessionStore()


@lru_cache
def get_availability() -> AvailabilityPort:
    return SeededAvailability(ratio=settings.SLOT_AVAILABILITY_RATIO)


@lru_cache
def get_course_catalog() -> CourseCatalog:
    return CourseCatalog(store=get_course_store(), schedules=get_schedule_store())


@lru_cache
def get_term_catalog() -> TermCatalog:
    return TermCatalog(schedules=get_schedule_store(), courses=get_course_store())


@lru_cache
def get_attendee_registry() -> AttendeeRegistry:
    return AttendeeRegistry(store=get_attendee_store())


@lru_cache
def get_booking_ledger() -> BookingLedger:
    return BookingLedger(
        store=MemoryBookingStore(),
        timezone=get_timezone(),
        full_refund_hours=settings.FULL_REFUND_HOURS,
        partial_refund_hours=settings.PARTIAL_REFUND_HOURS,
        partial_refund_rate=settings.PARTIAL_REFUND_RATE,
        change_notice_hours=settings.CHANGE_NOTICE_HOURS,
    )


@lru_cache
def get_event_bus() -> EventBus:
    bus = EventBus()
    bus.subscribe(BookingConfirmed.event_type, get_attendee_registry().on_booking_confirmed)
    return bus


@lru_cache
def get_booking_workflow() -> BookingWorkflow:
    return BookingWorkflow(
        ledger=get_booking_ledger(),
        events=get_event_bus(),
        availability=get_availability(),
        consultation_duration_minutes=settings.CONSULTATION_DURATION_MINUTES,
        start_hour=settings.SLOT_START_HOUR,
        end_hour=settings.SLOT_END_HOUR,
        interval_minutes=settings.SLOT_INTERVAL_MINUTES,
        excluded_weekday=settings.EXCLUDED_WEEKDAY,
    )


@lru_cache
def get_analytics() -> BookingAnalytics:
    return BookingAnalytics()
