from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Attendee:
    id: str
    parent_user_id: str
    name: str
    email: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None  # unknown stays None
    emergency_contact: str = ""
    medical_info: str | None = None
    allergies: str | None = None
    notes: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
