from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from bookease.application.exceptions import (
    BookingInvariantError,
    BookingNotEligibleError,
    BookingNotFoundError,
    CustomerValidationError,
)
from bookease.domain.entities.booking_state import BookingState
from bookease.domain.entities.customer import Customer
from bookease.domain.entities.time_slot import TimeSlot

UTC = ZoneInfo("UTC")

DAY = date(2030, 6, 4)
SLOT = TimeSlot(id="2030-06-04-10:00", start_time="10:00", end_time="11:00")
START = datetime(2030, 6, 4, 10, 0, tzinfo=UTC)


@pytest.fixture
def booking(ledger, yoga, customer):
    state = BookingState(
        selected_service=yoga,
        selected_date=DAY,
        selected_time_slot=SLOT,
        customer=customer,
        current_step=4,
    )
    return ledger.create_booking(state)


def test_course_booking_charges_list_price(booking):
    assert booking.total_price == 20
    assert booking.status == "confirmed"
    assert booking.payment_status == "pending"
    assert booking.service.name == "Yoga Basics"
    assert booking.reschedule_history == ()


def test_consultation_booking_is_free(ledger, yoga, customer):
    state = BookingState(
        selected_service=yoga,
        selected_date=DAY,
        selected_time_slot=SLOT,
        customer=customer,
        mode="consultation",
    )

    booking = ledger.create_booking(state)

    assert yoga.price > 0
    assert booking.total_price == 0
    assert booking.mode == "consultation"


def test_create_booking_requires_complete_state(ledger, yoga):
    with pytest.raises(BookingInvariantError):
        ledger.create_booking(BookingState(selected_service=yoga, selected_date=DAY))
    assert ledger.list_bookings() == []


def test_plain_cancel_sets_status_only(ledger, booking):
    cancelled = ledger.cancel_booking(booking.id)

    assert cancelled.status == "cancelled"
    assert cancelled.payment_status == "pending"
    assert cancelled.refund_amount is None
    assert ledger.get_booking(booking.id).status == "cancelled"


@pytest.mark.parametrize(
    "hours_before, expected",
    [(72, 20), (48, 20), (47.5, 16), (24, 16), (23.9, 0), (1, 0)],
)
def test_refund_tiers(ledger, booking, hours_before, expected):
    now = START - timedelta(hours=hours_before)

    cancelled = ledger.cancel_booking_with_refund(booking.id, "schedule clash", "refund", now=now)

    assert cancelled.status == "cancelled"
    assert cancelled.payment_status == "refunded"
    assert cancelled.refund_amount == pytest.approx(expected)
    assert cancelled.store_credit_amount == 0
    assert cancelled.cancellation_reason == "schedule clash"


@pytest.mark.parametrize("hours_before", [100, 30, 2])
def test_store_credit_is_always_full_price(ledger, booking, hours_before):
    now = START - timedelta(hours=hours_before)

    cancelled = ledger.cancel_booking_with_refund(booking.id, "sick", "store_credit", now=now)

    assert cancelled.payment_status == "store_credit"
    assert cancelled.store_credit_amount == booking.total_price
    assert cancelled.refund_amount == 0


def test_refund_cancel_rejects_unknown_type_and_double_cancel(ledger, booking):
    with pytest.raises(ValueError):
        ledger.cancel_booking_with_refund(booking.id, "x", "cash")

    ledger.cancel_booking_with_refund(booking.id, "x", "refund", now=START - timedelta(days=5))
    with pytest.raises(BookingNotEligibleError):
        ledger.cancel_booking_with_refund(booking.id, "x", "refund", now=START - timedelta(days=5))


def test_reschedule_appends_history(ledger, booking):
    new_slot = TimeSlot(id="2030-06-06-14:00", start_time="14:00", end_time="15:00")
    now = START - timedelta(days=3)

    first = ledger.reschedule_booking(booking.id, date(2030, 6, 6), new_slot, reason="travel", now=now)
    second = ledger.reschedule_booking(booking.id, DAY, SLOT, now=now)

    assert first.date == "2030-06-06"
    assert first.time_slot == new_slot
    assert len(second.reschedule_history) == 2
    record = second.reschedule_history[0]
    assert record.original_date == "2030-06-04"
    assert record.original_time_slot == SLOT
    assert record.new_date == "2030-06-06"
    assert record.new_time_slot == new_slot
    assert record.reason == "travel"
    assert second.reschedule_history[1].reason is None
    assert second.date == "2030-06-04"


def test_reschedule_needs_a_day_of_notice(ledger, booking):
    new_slot = TimeSlot(id="2030-06-06-14:00", start_time="14:00", end_time="15:00")

    with pytest.raises(BookingNotEligibleError):
        ledger.reschedule_booking(booking.id, date(2030, 6, 6), new_slot, now=START - timedelta(hours=5))
    assert ledger.get_booking(booking.id).reschedule_history == ()


def test_eligibility_checks(ledger, booking):
    assert ledger.can_reschedule(booking, START - timedelta(hours=24)) is True
    assert ledger.can_cancel(booking, START - timedelta(hours=23)) is False

    cancelled = ledger.cancel_booking(booking.id)
    assert ledger.can_reschedule(cancelled, START - timedelta(days=10)) is False


def test_transfer_replaces_customer_and_records_it(ledger, booking):
    new_customer = Customer(name="Max Moss", email="max@example.com", phone="555-0101", emergency_contact="Mo")

    transferred = ledger.transfer_booking(booking.id, new_customer, reason="gift")

    assert transferred.customer_name == "Max Moss"
    assert transferred.customer_email == "max@example.com"
    assert transferred.customer_phone == "555-0101"
    assert transferred.customer_emergency_contact == "Mo"
    record = transferred.transfer_history[0]
    assert record.original_customer_name == "Jane Roe"
    assert record.original_customer_email == "jane@example.com"
    assert record.new_customer_email == "max@example.com"
    assert record.reason == "gift"


def test_transfer_validates_new_customer(ledger, booking):
    with pytest.raises(CustomerValidationError) as exc_info:
        ledger.transfer_booking(booking.id, Customer(name="Max", email="nope", phone="555"))

    assert "email" in exc_info.value.errors
    assert ledger.get_booking(booking.id).transfer_history == ()


def test_unknown_booking_id(ledger):
    with pytest.raises(BookingNotFoundError):
        ledger.cancel_booking("booking-missing")
    with pytest.raises(BookingNotFoundError):
        ledger.transfer_booking("booking-missing", Customer(name="A", email="a@b.co", phone="1"))


def test_lookup_by_customer_and_user(ledger, yoga, customer, parent_user):
    state = BookingState(
        selected_service=yoga,
        selected_date=DAY,
        selected_time_slot=SLOT,
        customer=customer,
        booking_user=parent_user,
    )
    booking = ledger.create_booking(state)

    assert booking.booked_by == parent_user.id
    assert ledger.list_bookings_for_customer("JANE@example.com") == [booking]
    assert ledger.list_bookings_for_user(parent_user.id, parent_user.email) == [booking]
