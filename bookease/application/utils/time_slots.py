from __future__ import annotations

from datetime import date, datetime, timedelta

from bookease.application.ports.availability import AvailabilityPort
from bookease.domain.entities.time_slot import TimeSlot


def slot_id(day: date, start_time: str) -> str:
    return f"{day.isoformat()}-{start_time}"


def generate_time_slots(
    day: date,
    duration_minutes: int,
    availability: AvailabilityPort | None = None,
    start_hour: int = 9,
    end_hour: int = 17,
    interval_minutes: int = 30,
) -> list[TimeSlot]:
    """
    Candidate slots for day on interval boundaries between start_hour and end_hour.
    A slot is emitted only if it ends no later than end_hour; availability is
    answered by the oracle (every slot is available without one).
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    slots: list[TimeSlot] = []
    current = datetime.combine(day, datetime.min.time().replace(hour=start_hour))
    close = datetime.combine(day, datetime.min.time().replace(hour=end_hour))

    while current < close:
        slot_end = current + timedelta(minutes=duration_minutes)
        if slot_end > close:
            break
        start_time = current.strftime("%H:%M")
        end_time = slot_end.strftime("%H:%M")
        available = True
        if availability is not None:
            available = availability.is_slot_available(day, start_time, end_time)
        slots.append(
            TimeSlot(
                id=slot_id(day, start_time),
                start_time=start_time,
                end_time=end_time,
                available=available,
            )
        )
        current += timedelta(minutes=interval_minutes)

    return slots
