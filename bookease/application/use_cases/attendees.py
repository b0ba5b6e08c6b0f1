from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime
from typing import Any

from bookease.application.ports.attendee_store import AttendeeStorePort
from bookease.domain.entities.attendee import Attendee
from bookease.domain.entities.customer import Customer
from bookease.domain.events import BookingConfirmed

ATTENDEE_FIELDS = frozenset(f.name for f in fields(Attendee))
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def _now_iso() -> str:
    return datetime.now().isoformat()


class AttendeeRegistry:
    """People a signed-in user can book for, keyed by their owning parent user."""

    def __init__(self, store: AttendeeStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def add_attendee(self, data: dict[str, Any]) -> str:
        """
        Create an attendee, or merge into the parent's attendee with the same
        (case-insensitive) name. Returns the id of the stored record.
        """
        parent_user_id = data.get("parent_user_id")
        name = (data.get("name") or "").strip()
        if not parent_user_id:
            raise ValueError("parent_user_id is required")
        if not name:
            raise ValueError("name is required")

        values = self._clean(data)
        values["name"] = name

        existing = self._find_by_name(parent_user_id, name)
        if existing:
            merged = replace(existing, **values, updated_at=_now_iso())
            self._store.save_attendee(merged)
            self._logger.info("Attendee merged", extra={"attendee_id": existing.id})
            return existing.id

        now = _now_iso()
        attendee = Attendee(
            **values,
            id=f"attendee-{uuid.uuid4().hex[:12]}",
            created_at=now,
            updated_at=now,
        )
        self._store.save_attendee(attendee)
        self._logger.info("Attendee created", extra={"attendee_id": attendee.id})
        return attendee.id

    def add_attendee_from_booking(self, customer: Customer, parent_user_id: str) -> str:
        # A missing date of birth stays unknown rather than defaulting to today.
        return self.add_attendee(
            {
                "parent_user_id": parent_user_id,
                "name": customer.name,
                "email": customer.email,
                "phone": customer.phone,
                "date_of_birth": customer.date_of_birth or None,
                "emergency_contact": customer.emergency_contact or "",
                "medical_info": customer.medical_info or "",
                "notes": customer.notes or "",
            }
        )

    def update_attendee(self, attendee_id: str, updates: dict[str, Any]) -> Attendee | None:
        """Raises ValueError if a rename would collide with another attendee of the same parent."""
        existing = self._store.get_attendee(attendee_id)
        if existing is None:
            return None
        values = self._clean(updates)
        values.pop("parent_user_id", None)
        if "name" in values:
            name = values["name"].strip()
            if not name:
                raise ValueError("name is required")
            clash = self._find_by_name(existing.parent_user_id, name)
            if clash is not None and clash.id != attendee_id:
                raise ValueError(f"An attendee named {clash.name} already exists")
            values["name"] = name
        updated = replace(existing, **values, updated_at=_now_iso())
        self._store.save_attendee(updated)
        return updated

    def delete_attendee(self, attendee_id: str) -> None:
        self._store.delete_attendee(attendee_id)

    def get_attendee(self, attendee_id: str) -> Attendee | None:
        return self._store.get_attendee(attendee_id)

    def get_attendees_by_parent(self, parent_user_id: str) -> list[Attendee]:
        return [a for a in self._store.list_attendees() if a.parent_user_id == parent_user_id]

    def on_booking_confirmed(self, event: BookingConfirmed) -> None:
        """Save whoever was booked for as an attendee of the booking user."""
        customer = event.customer
        if not event.is_for_someone_else or not customer.date_of_birth:
            return
        attendee_id = self.add_attendee_from_booking(customer, event.booking_user.id)
        self._logger.info(
            "Attendee saved from booking",
            extra={"attendee_id": attendee_id, "booking_id": event.booking.id},
        )

    def _find_by_name(self, parent_user_id: str, name: str) -> Attendee | None:
        lowered = name.lower()
        for attendee in self.get_attendees_by_parent(parent_user_id):
            if attendee.name.lower() == lowered:
                return attendee
        return None

    def _clean(self, data: dict[str, Any]) -> dict[str, Any]:
        unknown = set(data) - ATTENDEE_FIELDS
        if unknown:
            raise ValueError(f"Unknown attendee fields: {', '.join(sorted(unknown))}")
        return {k: v for k, v in data.items() if k not in PROTECTED_FIELDS and v is not None}
