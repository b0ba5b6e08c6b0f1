from __future__ import annotations

import uuid

from bookease.application.ports.attendee_store import AttendeeStorePort
from bookease.application.ports.booking_store import BookingStorePort
from bookease.application.ports.workflow_session_store import WorkflowSessionStorePort
from bookease.domain.entities.attendee import Attendee
from bookease.domain.entities.booking import Booking
from bookease.domain.entities.booking_state import BookingState


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}

    def append(self, booking: Booking) -> None:
        if booking.id in self._bookings:
            raise ValueError(f"Booking {booking.id} already exists")
        self._bookings[booking.id] = booking

    def get(self, booking_id: str) -> Booking | None:
        return self._bookings.get(booking_id)

    def replace(self, booking: Booking) -> None:
        if booking.id not in self._bookings:
            raise KeyError(booking.id)
        self._bookings[booking.id] = booking

    def list_all(self) -> list[Booking]:
        return list(self._bookings.values())


class MemoryAttendeeStore(AttendeeStorePort):
    def __init__(self) -> None:
        self._attendees: dict[str, Attendee] = {}

    def list_attendees(self) -> list[Attendee]:
        return list(self._attendees.values())

    def get_attendee(self, attendee_id: str) -> Attendee | None:
        return self._attendees.get(attendee_id)

    def save_attendee(self, attendee: Attendee) -> None:
        self._attendees[attendee.id] = attendee

    def delete_attendee(self, attendee_id: str) -> None:
        self._attendees.pop(attendee_id, None)


class MemoryWorkflowSessionStore(WorkflowSessionStorePort):
    def __init__(self) -> None:
        self._states: dict[str, BookingState] = {}

    def get_or_create(self, session_id: str | None) -> str:
        if session_id and session_id in self._states:
            return session_id
        session_id = session_id or uuid.uuid4().hex
        self._states[session_id] = BookingState()
        return session_id

    def exists(self, session_id: str) -> bool:
        return session_id in self._states

    def get_state(self, session_id: str) -> BookingState:
        return self._states.get(session_id, BookingState())

    def set_state(self, session_id: str, state: BookingState) -> None:
        self._states[session_id] = state

    def remove(self, session_id: str) -> None:
        self._states.pop(session_id, None)
