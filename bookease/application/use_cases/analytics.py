from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import date

from bookease.domain.entities.booking import STATUS_CANCELLED, STATUS_CONFIRMED, Booking
from bookease.domain.entities.course import Course

CAPACITY_DAYS = 30


@dataclass(frozen=True)
class AnalyticsSummary:
    revenue_total: float
    revenue_by_category: dict[str, float]
    revenue_by_month: dict[str, float]
    bookings_total: int
    bookings_confirmed: int
    bookings_cancelled: int
    fill_rate: float
    courses_total: int
    courses_active: int
    most_popular: list[tuple[Course, int]]
    refunds_total: int
    refunds_amount: float


class BookingAnalytics:
    def __init__(self, capacity_days: int = CAPACITY_DAYS, popular_limit: int = 5) -> None:
        self._capacity_days = capacity_days
        self._popular_limit = popular_limit

    def summarize(self, bookings: list[Booking], courses: list[Course]) -> AnalyticsSummary:
        confirmed = [b for b in bookings if b.status == STATUS_CONFIRMED]
        cancelled = [b for b in bookings if b.status == STATUS_CANCELLED]

        by_category: dict[str, float] = defaultdict(float)
        by_month: dict[str, float] = defaultdict(float)
        for booking in confirmed:
            by_category[booking.service.category] += booking.total_price
            by_month[date.fromisoformat(booking.date).strftime("%B %Y")] += booking.total_price

        counts = Counter(b.service_id for b in confirmed)
        ranked = sorted(courses, key=lambda c: counts.get(c.id, 0), reverse=True)

        # Capacity is approximated as every course running once a day for a month.
        capacity = sum(c.max_participants for c in courses) * self._capacity_days
        fill_rate = (len(confirmed) / capacity) * 100 if capacity > 0 else 0.0

        return AnalyticsSummary(
            revenue_total=sum(b.total_price for b in confirmed),
            revenue_by_category=dict(by_category),
            revenue_by_month=dict(by_month),
            bookings_total=len(bookings),
            bookings_confirmed=len(confirmed),
            bookings_cancelled=len(cancelled),
            fill_rate=round(fill_rate, 2),
            courses_total=len(courses),
            courses_active=sum(1 for c in courses if c.is_active),
            most_popular=[(c, counts.get(c.id, 0)) for c in ranked[: self._popular_limit]],
            refunds_total=len(cancelled),
            refunds_amount=sum((b.refund_amount or 0) + (b.store_credit_amount or 0) for b in cancelled),
        )
