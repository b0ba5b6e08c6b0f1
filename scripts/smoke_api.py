#!/usr/bin/env python3
"""Smoke test for a running BookEase API: books a course end to end over HTTP."""

import sys
from datetime import date, timedelta

import httpx


BASE_URL = "http://127.0.0.1:8001"


def _next_bookable(start: date) -> date:
    day = start
    while day.weekday() == 6:
        day += timedelta(days=1)
    return day


def run_course_booking(client: httpx.Client) -> bool:
    print("=" * 60)
    print("Booking Yoga Basics over /api/v1/booking-sessions")
    print("=" * 60)

    try:
        response = client.post("/api/v1/booking-sessions", json={"course_id": "course-yoga-basics"})
        response.raise_for_status()
        session_id = response.json()["session_id"]

        day = _next_bookable(date.today() + timedelta(days=7))
        client.put(f"/api/v1/booking-sessions/{session_id}/date", json={"date": day.isoformat()}).raise_for_status()

        slots = client.get(f"/api/v1/booking-sessions/{session_id}/slots").json()["slots"]
        free = [s for s in slots if s["available"]]
        if not free:
            print(f"❌ No free slots on {day.isoformat()}")
            return False
        client.put(
            f"/api/v1/booking-sessions/{session_id}/time-slot", json={"slot_id": free[0]["id"]}
        ).raise_for_status()

        client.post(f"/api/v1/booking-sessions/{session_id}/next").raise_for_status()
        client.put(
            f"/api/v1/booking-sessions/{session_id}/customer",
            json={"name": "Jane Roe", "email": "jane@example.com", "phone": "+1 555 0100"},
        ).raise_for_status()
        client.post(f"/api/v1/booking-sessions/{session_id}/next").raise_for_status()

        response = client.post(f"/api/v1/booking-sessions/{session_id}/confirm")
        response.raise_for_status()
        booking = response.json()["booking"]
        print(f"✅ Booked {booking['id']} on {booking['date']} at {booking['time_slot']['start_time']}")
        print(f"   total={booking['total_price']} status={booking['status']}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False


def main():
    print("\n🚀 Smoke testing BookEase API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except Exception:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn bookease.main:app --reload --port 8001")
        sys.exit(1)

    with httpx.Client(base_url=BASE_URL, timeout=30.0) as client:
        ok = run_course_booking(client)

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!" if ok else "❌ Smoke test failed")
    print("=" * 60 + "\n")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
