#!/usr/bin/env python3
"""
Local booking walk-through (no HTTP).

Usage:
  python3 scripts/book_local.py [--course course-yoga-basics] [--consultation] [--days-ahead 3]

Drives the booking workflow through the project wiring: picks the first
bookable date at least --days-ahead out, the first free slot, fills customer
details (or signs in the demo user for consultations) and confirms.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bookease.domain.entities.customer import Customer
from bookease.wiring.dependencies import (
    get_auth,
    get_booking_ledger,
    get_booking_workflow,
    get_course_catalog,
)


def _print_step(label: str, result) -> None:
    state = result.state
    print(f"[{label}] action={result.action} step={state.current_step} mode={state.mode}")
    for field, message in result.errors.items():
        print(f"    {field}: {message}")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--course", default="course-yoga-basics")
    parser.add_argument("--consultation", action="store_true")
    parser.add_argument("--days-ahead", type=int, default=3)
    args = parser.parse_args()

    workflow = get_booking_workflow()
    course = get_course_catalog().get_course(args.course)

    if args.consultation:
        user = get_auth().login_user("john@example.com", "demo")
        result = workflow.start_consultation(course, user)
    else:
        result = workflow.book_course(course)
    _print_step("start", result)

    day = date.today() + timedelta(days=args.days_ahead)
    while not workflow.is_bookable(day):
        day += timedelta(days=1)
    result = workflow.select_date(result.state, day)
    _print_step(f"date {day.isoformat()}", result)

    free = [s for s in workflow.time_slots(result.state) if s.available]
    if not free:
        print(f"No free slots on {day.isoformat()}")
        return 1
    result = workflow.select_time_slot(result.state, free[0].id)
    _print_step(f"slot {free[0].start_time}-{free[0].end_time}", result)

    result = workflow.next(result.state)
    _print_step("next", result)

    if not args.consultation:
        result = workflow.update_customer(
            result.state,
            Customer(name="Jane Roe", email="jane@example.com", phone="+1 555 0100"),
        )
        _print_step("customer", result)
        result = workflow.next(result.state)
        _print_step("next", result)

    result = workflow.confirm(result.state)
    _print_step("confirm", result)

    booking = get_booking_ledger().get_booking(result.state.confirmed_booking_id)
    print(
        f"\nBooked {booking.service.name} for {booking.customer_name} on {booking.date} "
        f"{booking.time_slot.start_time} | total={booking.total_price} status={booking.status} "
        f"payment={booking.payment_status}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
