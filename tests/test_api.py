from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from bookease.application.events import EventBus
from bookease.application.use_cases.attendees import AttendeeRegistry
from bookease.application.use_cases.booking_ledger import BookingLedger
from bookease.application.use_cases.booking_workflow import BookingWorkflow
from bookease.application.use_cases.catalog import CourseCatalog
from bookease.application.use_cases.terms import TermCatalog
from bookease.domain.events import BookingConfirmed
from bookease.infrastructure.auth.mock_auth import MockAuthStore
from bookease.infrastructure.availability.seeded_availability import AlwaysAvailable
from bookease.infrastructure.catalog.course_catalog_store import CourseCatalogStore
from bookease.infrastructure.catalog.schedule_store import MemoryScheduleStore
from bookease.infrastructure.store.memory_store import (
    MemoryAttendeeStore,
    MemoryBookingStore,
    MemoryWorkflowSessionStore,
)
from bookease.main import app
from bookease.wiring import dependencies
from conftest import UTC, next_weekday

API = "/api/v1"


@pytest.fixture
def client():
    registry = AttendeeRegistry(store=MemoryAttendeeStore())
    bus = EventBus()
    bus.subscribe(BookingConfirmed.event_type, registry.on_booking_confirmed)
    ledger = BookingLedger(store=MemoryBookingStore(), timezone=UTC)
    workflow = BookingWorkflow(ledger=ledger, events=bus, availability=AlwaysAvailable())
    auth = MockAuthStore()
    sessions = MemoryWorkflowSessionStore()
    course_store = CourseCatalogStore()
    schedule_store = MemoryScheduleStore()
    catalog = CourseCatalog(store=course_store, schedules=schedule_store)
    terms = TermCatalog(schedules=schedule_store, courses=course_store)

    app.dependency_overrides[dependencies.get_attendee_registry] = lambda: registry
    app.dependency_overrides[dependencies.get_booking_ledger] = lambda: ledger
    app.dependency_overrides[dependencies.get_booking_workflow] = lambda: workflow
    app.dependency_overrides[dependencies.get_auth] = lambda: auth
    app.dependency_overrides[dependencies.get_session_store] = lambda: sessions
    app.dependency_overrides[dependencies.get_course_catalog] = lambda: catalog
    app.dependency_overrides[dependencies.get_term_catalog] = lambda: terms
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _pick_first_slot(client, session_id, day):
    r = client.put(f"{API}/booking-sessions/{session_id}/date", json={"date": day.isoformat()})
    assert r.json()["action"] == "date_selected"
    slots = client.get(f"{API}/booking-sessions/{session_id}/slots").json()["slots"]
    r = client.put(f"{API}/booking-sessions/{session_id}/time-slot", json={"slot_id": slots[0]["id"]})
    assert r.json()["action"] == "time_slot_selected"
    return slots[0]


def _book_course(client, day, customer=None):
    r = client.post(f"{API}/booking-sessions", json={"course_id": "course-yoga-basics"})
    session_id = r.json()["session_id"]
    _pick_first_slot(client, session_id, day)
    client.post(f"{API}/booking-sessions/{session_id}/next")
    client.put(
        f"{API}/booking-sessions/{session_id}/customer",
        json=customer or {"name": "Jane Roe", "email": "jane@example.com", "phone": "+1 555 0100"},
    )
    client.post(f"{API}/booking-sessions/{session_id}/next")
    r = client.post(f"{API}/booking-sessions/{session_id}/confirm")
    assert r.status_code == 200
    return r.json()["booking"]


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_course_booking_over_http(client):
    day = next_weekday()
    r = client.post(f"{API}/booking-sessions", json={"course_id": "course-yoga-basics"})
    assert r.status_code == 201
    body = r.json()
    session_id = body["session_id"]
    assert body["action"] == "ask_date_time"
    assert body["state"]["current_step"] == 2

    slot = _pick_first_slot(client, session_id, day)
    assert slot["start_time"] == "09:00"
    assert slot["end_time"] == "10:00"

    r = client.post(f"{API}/booking-sessions/{session_id}/next")
    assert r.json()["action"] == "ask_customer"

    r = client.put(
        f"{API}/booking-sessions/{session_id}/customer",
        json={"name": "Jane Roe", "email": "not-an-email", "phone": "+1 555 0100"},
    )
    assert r.json()["action"] == "invalid_customer"
    assert "email" in r.json()["errors"]

    client.put(
        f"{API}/booking-sessions/{session_id}/customer",
        json={"name": "Jane Roe", "email": "jane@example.com", "phone": "+1 555 0100"},
    )
    r = client.post(f"{API}/booking-sessions/{session_id}/next")
    assert r.json()["state"]["current_step"] == 4

    r = client.post(f"{API}/booking-sessions/{session_id}/next")
    body = r.json()
    assert body["action"] == "booked"
    assert body["state"]["current_step"] == 5
    assert body["state"]["selected_service"] is None
    booking = body["booking"]
    assert booking["total_price"] == 20
    assert booking["status"] == "confirmed"
    assert body["state"]["confirmed_booking_id"] == booking["id"]

    r = client.get(f"{API}/bookings/{booking['id']}")
    assert r.json()["can_cancel"] is True
    assert r.json()["can_reschedule"] is True


def test_confirm_incomplete_session_conflicts(client):
    r = client.post(f"{API}/booking-sessions", json={"course_id": "course-yoga-basics"})
    session_id = r.json()["session_id"]

    r = client.post(f"{API}/booking-sessions/{session_id}/confirm")

    assert r.status_code == 409
    assert client.get(f"{API}/bookings").json() == []


def test_confirm_before_confirmation_step_is_refused(client):
    r = client.post(f"{API}/booking-sessions", json={"course_id": "course-yoga-basics"})
    session_id = r.json()["session_id"]
    _pick_first_slot(client, session_id, next_weekday())
    client.put(
        f"{API}/booking-sessions/{session_id}/customer",
        json={"name": "Jane Roe", "email": "jane@example.com", "phone": "+1 555 0100"},
    )

    r = client.post(f"{API}/booking-sessions/{session_id}/confirm")

    assert r.status_code == 200
    assert r.json()["action"] == "confirmation_required"
    assert r.json()["state"]["current_step"] == 2
    assert r.json()["booking"] is None
    assert client.get(f"{API}/bookings").json() == []


def test_consultation_asks_for_sign_in(client):
    day = next_weekday()
    r = client.post(
        f"{API}/booking-sessions",
        json={"course_id": "course-yoga-basics", "mode": "consultation"},
    )
    session_id = r.json()["session_id"]
    slot = _pick_first_slot(client, session_id, day)
    assert slot["end_time"] == "09:45"

    r = client.post(f"{API}/booking-sessions/{session_id}/next")
    assert r.json()["action"] == "auth_required"

    assert client.post(f"{API}/auth/login", json={"email": "john@example.com", "password": "x"}).status_code == 200
    r = client.post(f"{API}/booking-sessions/{session_id}/next")
    body = r.json()
    assert body["action"] == "confirm"
    assert body["state"]["customer"]["email"] == "john@example.com"

    r = client.post(f"{API}/booking-sessions/{session_id}/next")
    booking = r.json()["booking"]
    assert booking["total_price"] == 0
    assert booking["mode"] == "consultation"

    mine = client.get(f"{API}/bookings/mine").json()
    assert [b["id"] for b in mine] == [booking["id"]]


def test_consultation_needs_a_course(client):
    r = client.post(f"{API}/booking-sessions", json={"mode": "consultation"})
    assert r.status_code == 400


def test_unknown_course_is_404(client):
    r = client.post(f"{API}/booking-sessions", json={"course_id": "course-missing"})
    assert r.status_code == 404


def test_cancel_with_refund_and_double_cancel(client):
    booking = _book_course(client, next_weekday(days_ahead=10))

    r = client.post(
        f"{API}/bookings/{booking['id']}/cancel-with-refund",
        json={"reason": "Schedule conflict", "refund_type": "refund"},
    )
    body = r.json()
    assert r.status_code == 200
    assert body["status"] == "cancelled"
    assert body["payment_status"] == "refunded"
    assert body["refund_amount"] == 20
    assert body["cancellation_reason"] == "Schedule conflict"
    assert body["can_cancel"] is False

    r = client.post(
        f"{API}/bookings/{booking['id']}/cancel-with-refund",
        json={"reason": "Again", "refund_type": "store_credit"},
    )
    assert r.status_code == 409


def test_reschedule_and_transfer(client):
    day = next_weekday(days_ahead=10)
    booking = _book_course(client, day)
    new_day = next_weekday(days_ahead=14)

    r = client.post(
        f"{API}/bookings/{booking['id']}/reschedule",
        json={"new_date": new_day.isoformat(), "slot_id": f"{new_day.isoformat()}-10:00", "reason": "Travel"},
    )
    body = r.json()
    assert r.status_code == 200
    assert body["date"] == new_day.isoformat()
    assert body["time_slot"]["end_time"] == "11:00"
    assert body["reschedule_history"][0]["original_date"] == day.isoformat()

    r = client.post(
        f"{API}/bookings/{booking['id']}/reschedule",
        json={"new_date": new_day.isoformat(), "slot_id": f"{new_day.isoformat()}-16:30"},
    )
    assert r.status_code == 400

    r = client.post(
        f"{API}/bookings/{booking['id']}/transfer",
        json={"customer": {"name": "Sam Lee", "email": "sam@example.com", "phone": "555 0101"}},
    )
    assert r.json()["customer_email"] == "sam@example.com"
    assert r.json()["transfer_history"][0]["original_customer_email"] == "jane@example.com"

    r = client.post(
        f"{API}/bookings/{booking['id']}/transfer",
        json={"customer": {"name": "", "email": "bad", "phone": "abc"}},
    )
    assert r.status_code == 400

    assert client.get(f"{API}/bookings/booking-missing").status_code == 404


def test_booking_for_dependent_saves_attendee(client):
    client.post(f"{API}/auth/login", json={"email": "john@example.com", "password": "x"})
    booking = _book_course(
        client,
        next_weekday(),
        customer={
            "name": "Timmy Doe",
            "email": "timmy@example.com",
            "phone": "+1 555 0102",
            "date_of_birth": "2015-03-01",
        },
    )
    assert booking["booked_by"] == "user-1"

    attendees = client.get(f"{API}/attendees", params={"parent_user_id": "user-1"}).json()
    assert [a["name"] for a in attendees] == ["Timmy Doe"]
    assert attendees[0]["date_of_birth"] == "2015-03-01"


def test_attendee_crud(client):
    r = client.post(f"{API}/attendees", json={"parent_user_id": "user-1", "name": "Ava Doe"})
    assert r.status_code == 201
    attendee_id = r.json()["id"]

    r = client.patch(f"{API}/attendees/{attendee_id}", json={"allergies": "Peanuts"})
    assert r.json()["allergies"] == "Peanuts"
    assert r.json()["name"] == "Ava Doe"

    assert client.get(f"{API}/attendees/{attendee_id}").status_code == 200
    assert client.delete(f"{API}/attendees/{attendee_id}").status_code == 204
    assert client.get(f"{API}/attendees/{attendee_id}").status_code == 404
    assert client.patch(f"{API}/attendees/{attendee_id}", json={"name": "X"}).status_code == 404


def test_attendee_rename_clash_is_rejected(client):
    client.post(f"{API}/attendees", json={"parent_user_id": "user-1", "name": "Ava Doe"})
    other_id = client.post(f"{API}/attendees", json={"parent_user_id": "user-1", "name": "Ben Doe"}).json()["id"]

    r = client.patch(f"{API}/attendees/{other_id}", json={"name": "ava doe"})

    assert r.status_code == 400
    names = [a["name"] for a in client.get(f"{API}/attendees", params={"parent_user_id": "user-1"}).json()]
    assert names == ["Ava Doe", "Ben Doe"]


def test_course_admin_requires_sign_in(client):
    payload = {
        "title": "Pottery",
        "description": "Wheel throwing",
        "instructor": "Ivy",
        "duration_minutes": 90,
        "price": 40,
        "max_participants": 6,
        "category": "Art",
    }
    assert client.post(f"{API}/courses", json=payload).status_code == 401

    client.post(f"{API}/auth/admin/login", json={"email": "admin@bookease.com", "password": "x"})
    r = client.post(f"{API}/courses", json=payload)
    assert r.status_code == 201
    course_id = r.json()["id"]

    r = client.post(f"{API}/courses/{course_id}/toggle")
    assert r.json()["is_active"] is False
    active = client.get(f"{API}/courses", params={"active_only": True}).json()
    assert course_id not in {c["id"] for c in active}


def test_auth_errors(client):
    assert client.get(f"{API}/auth/me").status_code == 401
    assert client.post(f"{API}/auth/login", json={"email": "who@example.com", "password": "x"}).status_code == 401
    payload = {"email": "john@example.com", "name": "John", "phone": "1", "password": "x"}
    assert client.post(f"{API}/auth/register", json=payload).status_code == 409


def test_analytics_endpoint(client):
    _book_course(client, next_weekday())

    body = client.get(f"{API}/analytics").json()

    assert body["revenue_total"] == 20
    assert body["bookings_confirmed"] == 1
    assert body["most_popular"][0]["course"]["id"] == "course-yoga-basics"
    assert body["most_popular"][0]["booking_count"] == 1


def test_date_selection_uses_the_business_today(client):
    app.dependency_overrides[dependencies.get_business_today] = lambda: date(2030, 6, 5)
    r = client.post(f"{API}/booking-sessions", json={"course_id": "course-yoga-basics"})
    session_id = r.json()["session_id"]

    r = client.put(f"{API}/booking-sessions/{session_id}/date", json={"date": "2030-06-04"})
    assert r.json()["action"] == "date_unavailable"

    r = client.put(f"{API}/booking-sessions/{session_id}/date", json={"date": "2030-06-05"})
    assert r.json()["action"] == "date_selected"


def test_unknown_booking_session_is_404(client):
    assert client.get(f"{API}/booking-sessions/no-such-session").status_code == 404
    assert client.post(f"{API}/booking-sessions/no-such-session/next").status_code == 404
    r = client.put(f"{API}/booking-sessions/no-such-session/date", json={"date": "2030-06-05"})
    assert r.status_code == 404


def test_ended_booking_session_is_gone(client):
    session_id = client.post(f"{API}/booking-sessions", json={}).json()["session_id"]
    assert client.get(f"{API}/booking-sessions/{session_id}").status_code == 200

    assert client.delete(f"{API}/booking-sessions/{session_id}").status_code == 204
    assert client.get(f"{API}/booking-sessions/{session_id}").status_code == 404
    assert client.delete(f"{API}/booking-sessions/{session_id}").status_code == 404


def test_schedules_and_enrollment_over_http(client):
    payload = {"course_id": "course-yoga-basics", "date": "2030-06-05", "start_time": "10:00", "end_time": "11:00"}
    assert client.post(f"{API}/schedules", json=payload).status_code == 401

    client.post(f"{API}/auth/admin/login", json={"email": "admin@bookease.com", "password": "x"})
    r = client.post(f"{API}/schedules", json={**payload, "available_spots": 1})
    assert r.status_code == 201
    schedule_id = r.json()["id"]

    r = client.post(f"{API}/schedules/{schedule_id}/enroll", json={"customer_id": "user-1"})
    assert r.json()["available_spots"] == 0
    assert r.json()["enrolled_participants"] == ["user-1"]
    r = client.post(f"{API}/schedules/{schedule_id}/enroll", json={"customer_id": "user-2"})
    assert r.status_code == 409

    listed = client.get(f"{API}/courses/course-yoga-basics/schedules").json()
    assert [s["id"] for s in listed] == [schedule_id]

    assert client.delete(f"{API}/courses/course-yoga-basics").status_code == 204
    assert client.get(f"{API}/schedules/{schedule_id}").status_code == 404


def test_terms_and_recurring_schedules_over_http(client):
    client.post(f"{API}/auth/admin/login", json={"email": "admin@bookease.com", "password": "x"})
    r = client.post(
        f"{API}/terms",
        json={"name": "Autumn 2030", "start_date": "2030-09-01", "end_date": "2030-11-30"},
    )
    assert r.status_code == 201
    term_id = r.json()["id"]

    r = client.post(
        f"{API}/recurring-schedules",
        json={
            "course_id": "course-yoga-basics",
            "term_id": term_id,
            "day_of_week": 2,
            "start_time": "18:00",
            "end_time": "19:00",
            "start_date": "2030-09-04",
            "end_date": "2030-11-27",
        },
    )
    assert r.status_code == 201
    assert r.json()["max_participants"] == 12
    assert len(client.get(f"{API}/recurring-schedules", params={"term_id": term_id}).json()) == 1

    assert client.delete(f"{API}/terms/{term_id}").status_code == 204
    assert client.get(f"{API}/recurring-schedules").json() == []
    assert client.get(f"{API}/terms/{term_id}").status_code == 404
    names = [t["name"] for t in client.get(f"{API}/terms").json()]
    assert names == ["Spring 2024", "Summer 2024"]
