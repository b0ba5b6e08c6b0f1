from __future__ import annotations

from datetime import date, time

import pytest

from bookease.infrastructure.availability.seeded_availability import AlwaysAvailable, SeededAvailability
from bookease.application.utils.time_slots import generate_time_slots

DAY = date(2030, 6, 4)


@pytest.mark.parametrize("duration", [15, 30, 45, 60, 90, 120, 180, 480])
def test_slots_never_end_after_close(duration):
    slots = generate_time_slots(DAY, duration)

    assert slots
    for slot in slots:
        assert time.fromisoformat(slot.end_time) <= time(17, 0)
        assert time.fromisoformat(slot.start_time) >= time(9, 0)


def test_sixty_minute_slots_on_half_hour_boundaries():
    slots = generate_time_slots(DAY, 60)

    starts = [s.start_time for s in slots]
    assert starts[0] == "09:00"
    assert starts[1] == "09:30"
    assert starts[-1] == "16:00"
    assert len(slots) == 15
    assert slots[-1].end_time == "17:00"


def test_forty_five_minute_slot_stops_before_close():
    slots = generate_time_slots(DAY, 45)

    assert slots[-1].start_time == "16:00"
    assert slots[-1].end_time == "16:45"
    assert "16:30" not in [s.start_time for s in slots]


def test_duration_longer_than_window_yields_nothing():
    assert generate_time_slots(DAY, 9 * 60) == []


def test_slot_ids_are_derived_from_date_and_start():
    slot = generate_time_slots(DAY, 30)[0]

    assert slot.id == "2030-06-04-09:00"
    assert slot.end_time == "09:30"


def test_without_oracle_every_slot_is_available():
    assert all(s.available for s in generate_time_slots(DAY, 60))
    assert all(s.available for s in generate_time_slots(DAY, 60, availability=AlwaysAvailable()))


def test_seeded_availability_is_deterministic():
    first = generate_time_slots(DAY, 30, availability=SeededAvailability(ratio=0.7))
    second = generate_time_slots(DAY, 30, availability=SeededAvailability(ratio=0.7))

    assert [s.available for s in first] == [s.available for s in second]


def test_seeded_availability_ratio_bounds():
    none_free = generate_time_slots(DAY, 30, availability=SeededAvailability(ratio=0.0))
    all_free = generate_time_slots(DAY, 30, availability=SeededAvailability(ratio=1.0))

    assert not any(s.available for s in none_free)
    assert all(s.available for s in all_free)


def test_non_positive_duration_is_rejected():
    with pytest.raises(ValueError):
        generate_time_slots(DAY, 0)
