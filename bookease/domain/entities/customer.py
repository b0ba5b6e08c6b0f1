from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    """Who a booking is for, captured fresh on every booking."""

    name: str
    email: str
    phone: str
    emergency_contact: str | None = None
    date_of_birth: str | None = None  # YYYY-MM-DD
    address: str | None = None
    medical_info: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str
    phone: str
    emergency_contact: str | None = None
    date_of_birth: str | None = None
    address: str | None = None
    medical_info: str | None = None
    created_at: str | None = None
    is_active: bool = True

    def to_customer(self) -> Customer:
        return Customer(
            name=self.name or "",
            email=self.email,
            phone=self.phone or "",
            emergency_contact=self.emergency_contact or "",
            date_of_birth=self.date_of_birth or "",
            medical_info=self.medical_info or "",
            notes="",
        )


@dataclass(frozen=True)
class Admin:
    id: str
    email: str
    name: str
    role: str = "admin"  # "admin", "super_admin"
    created_at: str | None = None
    is_active: bool = True
