from __future__ import annotations

from bookease.application.events import EventBus
from bookease.application.use_cases.booking_workflow import BookingWorkflow
from bookease.domain.events import BookingConfirmed
from bookease.infrastructure.availability.seeded_availability import AlwaysAvailable


def _confirm(workflow, yoga, customer, day):
    state = workflow.book_course(yoga).state
    state = workflow.select_date(state, day).state
    state = workflow.select_time_slot(state, workflow.time_slots(state)[0].id).state
    state = workflow.update_customer(state, customer).state
    state = workflow.next(workflow.next(state).state).state
    return workflow.confirm(state)


def test_handlers_run_in_subscription_order():
    bus = EventBus()
    seen = []
    bus.subscribe("booking.confirmed", lambda e: seen.append("first"))
    bus.subscribe("booking.confirmed", lambda e: seen.append("second"))

    result = bus.publish(BookingConfirmed(booking=None, customer=None))

    assert seen == ["first", "second"]
    assert result.notified == 2
    assert result.failed == 0


def test_subscribing_twice_registers_once():
    bus = EventBus()

    def handler(event):
        pass

    bus.subscribe("booking.confirmed", handler)
    bus.subscribe("booking.confirmed", handler)

    assert bus.subscribers("booking.confirmed") == [handler]
    assert bus.subscribers("booking.cancelled") == []


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    seen = []

    def broken(event):
        raise RuntimeError("disk full")

    bus.subscribe("booking.confirmed", broken)
    bus.subscribe("booking.confirmed", lambda e: seen.append(e))

    result = bus.publish(BookingConfirmed(booking=None, customer=None))

    assert len(seen) == 1
    assert result.failed == 1
    assert result.failures[0]["error"] == "disk full"
    assert result.failures[0]["error_type"] == "RuntimeError"


def test_booking_survives_failing_subscriber(ledger, yoga, customer, bookable_day):
    bus = EventBus()

    def broken(event):
        raise RuntimeError("attendee store offline")

    bus.subscribe(BookingConfirmed.event_type, broken)
    workflow = BookingWorkflow(ledger=ledger, events=bus, availability=AlwaysAvailable())

    result = _confirm(workflow, yoga, customer, bookable_day)

    assert result.action == "booked"
    assert ledger.list_bookings() == [result.booking]


def test_is_for_someone_else(customer, parent_user):
    assert BookingConfirmed(booking=None, customer=customer, booking_user=parent_user).is_for_someone_else
    assert not BookingConfirmed(booking=None, customer=customer).is_for_someone_else
