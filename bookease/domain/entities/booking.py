from __future__ import annotations

from dataclasses import dataclass

from bookease.domain.entities.time_slot import TimeSlot

STATUS_CONFIRMED = "confirmed"
STATUS_PENDING = "pending"
STATUS_CANCELLED = "cancelled"

PAYMENT_PAID = "paid"
PAYMENT_PENDING = "pending"
PAYMENT_REFUNDED = "refunded"
PAYMENT_STORE_CREDIT = "store_credit"

REFUND_TYPE_REFUND = "refund"
REFUND_TYPE_STORE_CREDIT = "store_credit"
REFUND_TYPES = (REFUND_TYPE_REFUND, REFUND_TYPE_STORE_CREDIT)


@dataclass(frozen=True)
class ServiceSnapshot:
    """Course details copied onto the booking at confirmation time."""

    id: str
    name: str
    description: str
    duration_minutes: int
    price: float
    category: str


@dataclass(frozen=True)
class RescheduleRecord:
    id: str
    original_date: str
    original_time_slot: TimeSlot
    new_date: str
    new_time_slot: TimeSlot
    reason: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class TransferRecord:
    id: str
    original_customer_name: str
    original_customer_email: str
    new_customer_name: str
    new_customer_email: str
    reason: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class Booking:
    id: str
    service_id: str
    service: ServiceSnapshot
    customer_name: str
    customer_email: str
    customer_phone: str
    date: str  # YYYY-MM-DD
    time_slot: TimeSlot
    total_price: float
    status: str = STATUS_CONFIRMED  # "confirmed", "pending", "cancelled"
    payment_status: str = PAYMENT_PENDING  # "paid", "pending", "refunded", "store_credit"
    mode: str = "course"
    customer_emergency_contact: str | None = None
    booked_by: str | None = None  # set only when booking for someone else
    booked_by_name: str | None = None
    notes: str | None = None
    cancellation_reason: str | None = None
    refund_amount: float | None = None
    store_credit_amount: float | None = None
    created_at: str | None = None
    updated_at: str | None = None
    reschedule_history: tuple[RescheduleRecord, ...] = ()
    transfer_history: tuple[TransferRecord, ...] = ()
