from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date

from bookease.application.events import EventBus
from bookease.application.exceptions import BookingInvariantError
from bookease.application.ports.availability import AvailabilityPort
from bookease.application.use_cases.booking_ledger import BookingLedger
from bookease.application.utils.availability import SUNDAY, is_date_available
from bookease.application.utils.customer_validation import validate_customer
from bookease.application.utils.time_slots import generate_time_slots
from bookease.domain.entities.booking import Booking
from bookease.domain.entities.booking_state import (
    BOOKING_MODES,
    MODE_CONSULTATION,
    MODE_COURSE,
    STEP_CONFIRMATION,
    STEP_CUSTOMER,
    STEP_DATE_TIME,
    STEP_SERVICE,
    STEP_SUCCESS,
    BookingState,
)
from bookease.domain.entities.course import Course
from bookease.domain.entities.customer import Customer, User
from bookease.domain.entities.time_slot import TimeSlot
from bookease.domain.events import BookingConfirmed


@dataclass(frozen=True)
class WorkflowResult:
    action: str
    state: BookingState
    booking: Booking | None = None
    errors: dict[str, str] = field(default_factory=dict)


class BookingWorkflow:
    """
    Multi-step booking wizard.

    Steps: 1 service, 2 date/time, 3 customer details (course mode only),
    4 confirmation, 5 success. Every operation takes the current state and
    returns a WorkflowResult; a refused transition keeps the state as it was
    and names the missing precondition in `action`.
    """

    def __init__(
        self,
        ledger: BookingLedger,
        events: EventBus,
        availability: AvailabilityPort | None = None,
        consultation_duration_minutes: int = 45,
        start_hour: int = 9,
        end_hour: int = 17,
        interval_minutes: int = 30,
        excluded_weekday: int = SUNDAY,
    ) -> None:
        self._ledger = ledger
        self._events = events
        self._availability = availability
        self._consultation_duration_minutes = consultation_duration_minutes
        self._start_hour = start_hour
        self._end_hour = end_hour
        self._interval_minutes = interval_minutes
        self._excluded_weekday = excluded_weekday
        self._logger = logging.getLogger(__name__)

    # Entry points

    def start_booking(self, user: User | None = None) -> WorkflowResult:
        return WorkflowResult(action="ask_service", state=BookingState(booking_user=user))

    def book_course(self, course: Course, user: User | None = None) -> WorkflowResult:
        """Start from a course card: the service is known, go straight to the calendar."""
        state = BookingState(selected_service=course, booking_user=user, current_step=STEP_DATE_TIME)
        return WorkflowResult(action="ask_date_time", state=state)

    def start_consultation(self, course: Course, user: User | None = None) -> WorkflowResult:
        state = BookingState(
            selected_service=course,
            booking_user=user,
            current_step=STEP_DATE_TIME,
            mode=MODE_CONSULTATION,
        )
        return WorkflowResult(action="ask_date_time", state=state)

    def reset(self) -> WorkflowResult:
        return WorkflowResult(action="reset", state=BookingState())

    # Field updates

    def set_mode(self, state: BookingState, mode: str) -> WorkflowResult:
        if mode not in BOOKING_MODES:
            raise ValueError(f"mode must be one of {', '.join(BOOKING_MODES)}")
        return WorkflowResult(action="mode_set", state=replace(state, mode=mode))

    def select_service(self, state: BookingState, course: Course) -> WorkflowResult:
        if not course.is_active:
            return WorkflowResult(action="service_unavailable", state=state)
        updated = replace(state, selected_service=course, selected_date=None, selected_time_slot=None)
        return WorkflowResult(action="service_selected", state=updated)

    def is_bookable(self, day: date, today: date | None = None) -> bool:
        return is_date_available(day, today=today, excluded_weekday=self._excluded_weekday)

    def select_date(self, state: BookingState, day: date, today: date | None = None) -> WorkflowResult:
        if not self.is_bookable(day, today=today):
            return WorkflowResult(action="date_unavailable", state=state)
        updated = replace(state, selected_date=day, selected_time_slot=None)
        return WorkflowResult(action="date_selected", state=updated)

    def time_slots(self, state: BookingState) -> list[TimeSlot]:
        if not state.selected_service or not state.selected_date:
            return []
        return self.slots_for(state.selected_date, self.slot_duration(state))

    def slots_for(self, day: date, duration_minutes: int) -> list[TimeSlot]:
        return generate_time_slots(
            day,
            duration_minutes,
            availability=self._availability,
            start_hour=self._start_hour,
            end_hour=self._end_hour,
            interval_minutes=self._interval_minutes,
        )

    def slot_duration(self, state: BookingState) -> int:
        if state.is_consultation or not state.selected_service:
            return self._consultation_duration_minutes
        return state.selected_service.duration_minutes

    def booking_duration(self, booking: Booking) -> int:
        if booking.mode == MODE_CONSULTATION:
            return self._consultation_duration_minutes
        return booking.service.duration_minutes

    def select_time_slot(self, state: BookingState, slot_id: str) -> WorkflowResult:
        if not state.selected_date:
            return WorkflowResult(action="date_required", state=state)
        slot = next((s for s in self.time_slots(state) if s.id == slot_id), None)
        if slot is None or not slot.available:
            return WorkflowResult(action="slot_unavailable", state=state)
        return WorkflowResult(action="time_slot_selected", state=replace(state, selected_time_slot=slot))

    def update_customer(self, state: BookingState, customer: Customer) -> WorkflowResult:
        errors = validate_customer(customer)
        if errors:
            return WorkflowResult(action="invalid_customer", state=state, errors=errors)
        return WorkflowResult(action="customer_updated", state=replace(state, customer=customer))

    def set_booking_user(self, state: BookingState, user: User | None) -> WorkflowResult:
        return WorkflowResult(action="booking_user_set", state=replace(state, booking_user=user))

    # Navigation

    def next(self, state: BookingState, current_user: User | None = None) -> WorkflowResult:
        step = state.current_step

        if step == STEP_SERVICE:
            if not state.selected_service:
                return WorkflowResult(action="service_required", state=state)
            return WorkflowResult(action="ask_date_time", state=replace(state, current_step=STEP_DATE_TIME))

        if step == STEP_DATE_TIME:
            if not state.selected_date:
                return WorkflowResult(action="date_required", state=state)
            if not state.selected_time_slot:
                return WorkflowResult(action="time_slot_required", state=state)
            if state.mode == MODE_COURSE:
                return WorkflowResult(action="ask_customer", state=replace(state, current_step=STEP_CUSTOMER))
            return self._advance_consultation(state, current_user)

        if step == STEP_CUSTOMER:
            if not state.customer:
                return WorkflowResult(action="customer_required", state=state)
            errors = validate_customer(state.customer)
            if errors:
                return WorkflowResult(action="invalid_customer", state=state, errors=errors)
            return WorkflowResult(action="confirm", state=replace(state, current_step=STEP_CONFIRMATION))

        if step == STEP_CONFIRMATION:
            return self.confirm(state)

        return WorkflowResult(action="booked", state=state)

    def back(self, state: BookingState) -> WorkflowResult:
        step = state.current_step
        if step == STEP_DATE_TIME:
            target = STEP_SERVICE
        elif step == STEP_CUSTOMER:
            target = STEP_DATE_TIME
        elif step == STEP_CONFIRMATION:
            target = STEP_DATE_TIME if state.is_consultation else STEP_CUSTOMER
        else:
            return WorkflowResult(action="noop", state=state)
        return WorkflowResult(action="back", state=replace(state, current_step=target))

    def confirm(self, state: BookingState) -> WorkflowResult:
        """
        Write the ledger entry and publish BookingConfirmed. Raises
        BookingInvariantError, leaving the ledger untouched, if any of
        service, date, time slot or customer is missing. Outside the
        confirmation step nothing is written and the state comes back unchanged.
        """
        missing = [
            name
            for name, value in (
                ("service", state.selected_service),
                ("date", state.selected_date),
                ("time_slot", state.selected_time_slot),
                ("customer", state.customer),
            )
            if not value
        ]
        if missing:
            self._logger.error(
                "Booking confirmation with incomplete state",
                extra={"step": state.current_step, "mode": state.mode, "reason": ",".join(missing)},
            )
            raise BookingInvariantError(f"Missing booking information: {', '.join(missing)}")
        if state.current_step != STEP_CONFIRMATION:
            return WorkflowResult(action="confirmation_required", state=state)

        booking = self._ledger.create_booking(state)
        self._events.publish(
            BookingConfirmed(booking=booking, customer=state.customer, booking_user=state.booking_user)
        )
        return WorkflowResult(
            action="booked",
            state=BookingState(current_step=STEP_SUCCESS, confirmed_booking_id=booking.id),
            booking=booking,
        )

    def _advance_consultation(self, state: BookingState, current_user: User | None) -> WorkflowResult:
        if state.customer:
            return WorkflowResult(action="confirm", state=replace(state, current_step=STEP_CONFIRMATION))

        user = current_user or state.booking_user
        if user is None:
            return WorkflowResult(action="auth_required", state=state)

        updated = replace(
            state,
            customer=user.to_customer(),
            booking_user=state.booking_user or user,
            current_step=STEP_CONFIRMATION,
        )
        return WorkflowResult(action="confirm", state=updated)
