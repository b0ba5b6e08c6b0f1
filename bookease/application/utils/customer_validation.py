from __future__ import annotations

import re

from bookease.domain.entities.customer import Customer

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-\+\(\)]+$")


def validate_customer(customer: Customer) -> dict[str, str]:
    """Returns field -> message for every failing field; empty when valid."""
    errors: dict[str, str] = {}

    if not (customer.name or "").strip():
        errors["name"] = "Name is required"

    email = (customer.email or "").strip()
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = "Please enter a valid email address"

    phone = (customer.phone or "").strip()
    if not phone:
        errors["phone"] = "Phone number is required"
    elif not PHONE_PATTERN.match(phone):
        errors["phone"] = "Please enter a valid phone number"

    return errors
