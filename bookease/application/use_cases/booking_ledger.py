from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from zoneinfo import ZoneInfo

from bookease.application.exceptions import (
    BookingInvariantError,
    BookingNotEligibleError,
    BookingNotFoundError,
    CustomerValidationError,
)
from bookease.application.ports.booking_store import BookingStorePort
from bookease.application.utils.customer_validation import validate_customer
from bookease.application.utils.refund_policy import hours_until_booking, quote_refund
from bookease.domain.entities.booking import (
    PAYMENT_PENDING,
    PAYMENT_REFUNDED,
    PAYMENT_STORE_CREDIT,
    REFUND_TYPE_REFUND,
    REFUND_TYPES,
    STATUS_CANCELLED,
    STATUS_CONFIRMED,
    Booking,
    RescheduleRecord,
    ServiceSnapshot,
    TransferRecord,
)
from bookease.domain.entities.booking_state import BookingState
from bookease.domain.entities.customer import Customer
from bookease.domain.entities.time_slot import TimeSlot


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class BookingLedger:
    def __init__(
        self,
        store: BookingStorePort,
        timezone: ZoneInfo,
        full_refund_hours: int = 48,
        partial_refund_hours: int = 24,
        partial_refund_rate: float = 0.8,
        change_notice_hours: int = 24,
    ) -> None:
        self._store = store
        self._timezone = timezone
        self._full_refund_hours = full_refund_hours
        self._partial_refund_hours = partial_refund_hours
        self._partial_refund_rate = partial_refund_rate
        self._change_notice_hours = change_notice_hours
        self._logger = logging.getLogger(__name__)

    def create_booking(self, state: BookingState) -> Booking:
        """
        Append the booking described by a completed workflow state.
        Only the booking workflow calls this; consultations are always free.
        """
        service = state.selected_service
        customer = state.customer
        if not service or not state.selected_date or not state.selected_time_slot or not customer:
            raise BookingInvariantError("Missing booking information")

        booking_user = state.booking_user
        for_someone_else = booking_user is not None and customer.email != booking_user.email
        now = self._now().isoformat()

        booking = Booking(
            id=_new_id("booking"),
            service_id=service.id,
            service=ServiceSnapshot(
                id=service.id,
                name=service.title,
                description=service.description,
                duration_minutes=service.duration_minutes,
                price=service.price,
                category=service.category,
            ),
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            customer_emergency_contact=customer.emergency_contact,
            booked_by=booking_user.id if for_someone_else else None,
            booked_by_name=booking_user.name if for_someone_else else None,
            date=state.selected_date.isoformat(),
            time_slot=state.selected_time_slot,
            status=STATUS_CONFIRMED,
            payment_status=PAYMENT_PENDING,
            total_price=0 if state.is_consultation else service.price,
            mode=state.mode,
            notes=customer.notes,
            created_at=now,
            updated_at=now,
        )
        self._store.append(booking)
        self._logger.info(
            "Booking created",
            extra={"booking_id": booking.id, "mode": booking.mode, "service": service.id},
        )
        return booking

    def get_booking(self, booking_id: str) -> Booking:
        booking = self._store.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(f"Booking {booking_id} not found")
        return booking

    def list_bookings(self) -> list[Booking]:
        return self._store.list_all()

    def list_bookings_for_customer(self, email: str) -> list[Booking]:
        lowered = email.lower()
        return [b for b in self._store.list_all() if b.customer_email.lower() == lowered]

    def list_bookings_for_user(self, user_id: str, email: str) -> list[Booking]:
        """Bookings made for the user plus bookings the user made for others."""
        lowered = email.lower()
        return [
            b for b in self._store.list_all()
            if b.customer_email.lower() == lowered or b.booked_by == user_id
        ]

    def can_reschedule(self, booking: Booking, now: datetime | None = None) -> bool:
        return self._has_notice(booking, now)

    def can_cancel(self, booking: Booking, now: datetime | None = None) -> bool:
        """Cancellation without penalty needs the same notice as rescheduling."""
        return self._has_notice(booking, now)

    def cancel_booking(self, booking_id: str) -> Booking:
        booking = self.get_booking(booking_id)
        updated = replace(booking, status=STATUS_CANCELLED, updated_at=self._now().isoformat())
        self._store.replace(updated)
        self._logger.info("Booking cancelled", extra={"booking_id": booking_id})
        return updated

    def cancel_booking_with_refund(
        self,
        booking_id: str,
        reason: str,
        refund_type: str,
        now: datetime | None = None,
    ) -> Booking:
        if refund_type not in REFUND_TYPES:
            raise ValueError(f"refund_type must be one of {', '.join(REFUND_TYPES)}")

        booking = self.get_booking(booking_id)
        if booking.status == STATUS_CANCELLED:
            raise BookingNotEligibleError(f"Booking {booking_id} is already cancelled")

        now = now or self._now()
        quote = quote_refund(
            booking,
            refund_type,
            now,
            self._timezone,
            full_refund_hours=self._full_refund_hours,
            partial_refund_hours=self._partial_refund_hours,
            partial_refund_rate=self._partial_refund_rate,
        )
        updated = replace(
            booking,
            status=STATUS_CANCELLED,
            payment_status=PAYMENT_REFUNDED if refund_type == REFUND_TYPE_REFUND else PAYMENT_STORE_CREDIT,
            cancellation_reason=reason,
            refund_amount=quote.refund_amount,
            store_credit_amount=quote.store_credit_amount,
            updated_at=now.isoformat(),
        )
        self._store.replace(updated)
        self._logger.info(
            "Booking cancelled with refund",
            extra={
                "booking_id": booking_id,
                "refund_type": refund_type,
                "refund_amount": quote.refund_amount,
                "store_credit_amount": quote.store_credit_amount,
                "reason": reason,
            },
        )
        return updated

    def reschedule_booking(
        self,
        booking_id: str,
        new_date: date,
        new_time_slot: TimeSlot,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> Booking:
        booking = self.get_booking(booking_id)
        now = now or self._now()
        if not self.can_reschedule(booking, now):
            raise BookingNotEligibleError(
                f"Booking {booking_id} can only be rescheduled {self._change_notice_hours}h "
                "before it starts"
            )

        record = RescheduleRecord(
            id=_new_id("reschedule"),
            original_date=booking.date,
            original_time_slot=booking.time_slot,
            new_date=new_date.isoformat(),
            new_time_slot=new_time_slot,
            reason=reason,
            created_at=now.isoformat(),
        )
        updated = replace(
            booking,
            date=record.new_date,
            time_slot=new_time_slot,
            reschedule_history=booking.reschedule_history + (record,),
            updated_at=now.isoformat(),
        )
        self._store.replace(updated)
        self._logger.info("Booking rescheduled", extra={"booking_id": booking_id, "reason": reason})
        return updated

    def transfer_booking(self, booking_id: str, new_customer: Customer, reason: str | None = None) -> Booking:
        errors = validate_customer(new_customer)
        if errors:
            raise CustomerValidationError(errors)

        booking = self.get_booking(booking_id)
        now = self._now().isoformat()
        record = TransferRecord(
            id=_new_id("transfer"),
            original_customer_name=booking.customer_name,
            original_customer_email=booking.customer_email,
            new_customer_name=new_customer.name,
            new_customer_email=new_customer.email,
            reason=reason,
            created_at=now,
        )
        updated = replace(
            booking,
            customer_name=new_customer.name,
            customer_email=new_customer.email,
            customer_phone=new_customer.phone,
            customer_emergency_contact=new_customer.emergency_contact,
            transfer_history=booking.transfer_history + (record,),
            updated_at=now,
        )
        self._store.replace(updated)
        self._logger.info("Booking transferred", extra={"booking_id": booking_id, "reason": reason})
        return updated

    def _has_notice(self, booking: Booking, now: datetime | None) -> bool:
        if booking.status != STATUS_CONFIRMED:
            return False
        now = now or self._now()
        return hours_until_booking(booking, now, self._timezone) >= self._change_notice_hours

    def _now(self) -> datetime:
        return datetime.now(self._timezone)
