from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from bookease.domain.entities.booking import REFUND_TYPE_REFUND, Booking


@dataclass(frozen=True)
class RefundQuote:
    refund_amount: float
    store_credit_amount: float
    hours_until_booking: float


def booking_start(booking: Booking, timezone: ZoneInfo) -> datetime:
    day = date.fromisoformat(booking.date)
    start = time.fromisoformat(booking.time_slot.start_time)
    return datetime.combine(day, start, tzinfo=timezone)


def hours_until_booking(booking: Booking, now: datetime, timezone: ZoneInfo) -> float:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone)
    return (booking_start(booking, timezone) - now).total_seconds() / 3600


def quote_refund(
    booking: Booking,
    refund_type: str,
    now: datetime,
    timezone: ZoneInfo,
    full_refund_hours: int = 48,
    partial_refund_hours: int = 24,
    partial_refund_rate: float = 0.8,
) -> RefundQuote:
    """
    Refunds are tiered on notice: full at >= full_refund_hours, partial_refund_rate
    at >= partial_refund_hours, nothing below. Store credit is always the full price.
    """
    hours = hours_until_booking(booking, now, timezone)

    if refund_type != REFUND_TYPE_REFUND:
        return RefundQuote(refund_amount=0, store_credit_amount=booking.total_price, hours_until_booking=hours)

    refund_amount: float = 0
    if hours >= full_refund_hours:
        refund_amount = booking.total_price
    elif hours >= partial_refund_hours:
        refund_amount = booking.total_price * partial_refund_rate
    return RefundQuote(refund_amount=refund_amount, store_credit_amount=0, hours_until_booking=hours)
