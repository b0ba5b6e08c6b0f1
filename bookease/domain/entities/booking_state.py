from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from bookease.domain.entities.course import Course
from bookease.domain.entities.customer import Customer, User
from bookease.domain.entities.time_slot import TimeSlot

MODE_COURSE = "course"
MODE_CONSULTATION = "consultation"
BOOKING_MODES = (MODE_COURSE, MODE_CONSULTATION)

STEP_SERVICE = 1
STEP_DATE_TIME = 2
STEP_CUSTOMER = 3
STEP_CONFIRMATION = 4
STEP_SUCCESS = 5


@dataclass(frozen=True)
class BookingState:
    selected_service: Course | None = None
    selected_date: date | None = None
    selected_time_slot: TimeSlot | None = None
    customer: Customer | None = None
    booking_user: User | None = None  # who is booking, possibly for someone else
    current_step: int = STEP_SERVICE
    mode: str = MODE_COURSE  # "course", "consultation"
    confirmed_booking_id: str | None = None  # only set on the success step

    @property
    def is_consultation(self) -> bool:
        return self.mode == MODE_CONSULTATION
