from __future__ import annotations

from dataclasses import dataclass

from bookease.domain.entities.booking import Booking
from bookease.domain.entities.customer import Customer, User


@dataclass(frozen=True)
class BookingConfirmed:
    """Published once a workflow confirmation has written a ledger entry."""

    booking: Booking
    customer: Customer
    booking_user: User | None = None

    event_type = "booking.confirmed"

    @property
    def is_for_someone_else(self) -> bool:
        return (
            self.booking_user is not None
            and self.customer.email != self.booking_user.email
        )
