from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from bookease.api.v1.schemas import (
    BookingSchema,
    CancelWithRefundRequestSchema,
    RescheduleRequestSchema,
    TransferRequestSchema,
)
from bookease.application.exceptions import (
    BookingNotEligibleError,
    BookingNotFoundError,
    CustomerValidationError,
)
from bookease.application.ports.auth import AuthPort
from bookease.application.use_cases.booking_ledger import BookingLedger
from bookease.application.use_cases.booking_workflow import BookingWorkflow
from bookease.domain.entities.booking import Booking
from bookease.domain.entities.customer import Customer
from bookease.wiring.dependencies import (
    get_auth,
    get_booking_ledger,
    get_booking_workflow,
    get_business_today,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _to_schema(booking: Booking, ledger: BookingLedger) -> BookingSchema:
    schema = BookingSchema.model_validate(booking)
    schema.can_reschedule = ledger.can_reschedule(booking)
    schema.can_cancel = ledger.can_cancel(booking)
    return schema


def _get_or_404(booking_id: str, ledger: BookingLedger) -> Booking:
    try:
        return ledger.get_booking(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/bookings", response_model=list[BookingSchema])
def list_bookings(email: str | None = None, ledger: BookingLedger = Depends(get_booking_ledger)):
    bookings = ledger.list_bookings_for_customer(email) if email else ledger.list_bookings()
    return [_to_schema(b, ledger) for b in bookings]


@router.get("/bookings/mine", response_model=list[BookingSchema])
def my_bookings(ledger: BookingLedger = Depends(get_booking_ledger), auth: AuthPort = Depends(get_auth)):
    user = auth.current_user()
    if user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return [_to_schema(b, ledger) for b in ledger.list_bookings_for_user(user.id, user.email)]


@router.get("/bookings/{booking_id}", response_model=BookingSchema)
def get_booking(booking_id: str, ledger: BookingLedger = Depends(get_booking_ledger)):
    return _to_schema(_get_or_404(booking_id, ledger), ledger)


@router.post("/bookings/{booking_id}/cancel", response_model=BookingSchema)
def cancel_booking(booking_id: str, ledger: BookingLedger = Depends(get_booking_ledger)):
    try:
        return _to_schema(ledger.cancel_booking(booking_id), ledger)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/bookings/{booking_id}/cancel-with-refund", response_model=BookingSchema)
def cancel_with_refund(
    booking_id: str,
    req: CancelWithRefundRequestSchema,
    ledger: BookingLedger = Depends(get_booking_ledger),
):
    try:
        booking = ledger.cancel_booking_with_refund(booking_id, req.reason, req.refund_type.value)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookingNotEligibleError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _to_schema(booking, ledger)


@router.post("/bookings/{booking_id}/reschedule", response_model=BookingSchema)
def reschedule_booking(
    booking_id: str,
    req: RescheduleRequestSchema,
    ledger: BookingLedger = Depends(get_booking_ledger),
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    today: date = Depends(get_business_today),
):
    booking = _get_or_404(booking_id, ledger)
    if not workflow.is_bookable(req.new_date, today=today):
        raise HTTPException(status_code=400, detail=f"{req.new_date.isoformat()} is not bookable")

    slots = workflow.slots_for(req.new_date, workflow.booking_duration(booking))
    slot = next((s for s in slots if s.id == req.slot_id), None)
    if slot is None or not slot.available:
        raise HTTPException(status_code=400, detail=f"Time slot {req.slot_id} is not available")

    try:
        updated = ledger.reschedule_booking(booking_id, req.new_date, slot, reason=req.reason)
    except BookingNotEligibleError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _to_schema(updated, ledger)


@router.post("/bookings/{booking_id}/transfer", response_model=BookingSchema)
def transfer_booking(
    booking_id: str,
    req: TransferRequestSchema,
    ledger: BookingLedger = Depends(get_booking_ledger),
):
    try:
        booking = ledger.transfer_booking(booking_id, Customer(**req.customer.model_dump()), reason=req.reason)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CustomerValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    return _to_schema(booking, ledger)
