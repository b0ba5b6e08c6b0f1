from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime
from typing import Any

from bookease.application.exceptions import AuthenticationError, DuplicateUserError
from bookease.application.ports.auth import AuthPort
from bookease.domain.entities.customer import Admin, User

PROFILE_FIELDS = frozenset(f.name for f in fields(User)) - {"id", "created_at", "is_active"}


def _seed_users() -> list[User]:
    return [
        User(
            id="user-1",
            email="john@example.com",
            name="John Doe",
            phone="+1234567890",
            created_at=datetime.now().isoformat(),
        )
    ]


def _seed_admins() -> list[Admin]:
    return [
        Admin(
            id="admin-1",
            email="admin@bookease.com",
            name="Admin User",
            role="admin",
            created_at=datetime.now().isoformat(),
        )
    ]


class MockAuthStore(AuthPort):
    """Single-session sign-in against an in-memory user list. Passwords are not checked."""

    def __init__(self, users: list[User] | None = None, admins: list[Admin] | None = None) -> None:
        self._users: list[User] = list(users) if users is not None else _seed_users()
        self._admins: list[Admin] = list(admins) if admins is not None else _seed_admins()
        self._user: User | None = None
        self._admin: Admin | None = None
        self._logger = logging.getLogger(__name__)

    def current_user(self) -> User | None:
        return self._user

    def current_admin(self) -> Admin | None:
        return self._admin

    def register_user(self, email: str, name: str, phone: str, password: str) -> User:
        if any(u.email == email for u in self._users):
            raise DuplicateUserError("User with this email already exists")

        user = User(
            id=f"user-{uuid.uuid4().hex[:12]}",
            email=email,
            name=name,
            phone=phone,
            created_at=datetime.now().isoformat(),
        )
        self._users.append(user)
        self._user = user
        self._logger.info("User registered", extra={"user_id": user.id})
        return user

    def login_user(self, email: str, password: str) -> User:
        user = next((u for u in self._users if u.email == email and u.is_active), None)
        if user is None:
            raise AuthenticationError("Invalid email or password")
        self._user = user
        return user

    def login_admin(self, email: str, password: str) -> Admin:
        admin = next((a for a in self._admins if a.email == email and a.is_active), None)
        if admin is None:
            raise AuthenticationError("Invalid admin credentials")
        self._admin = admin
        return admin

    def logout_user(self) -> None:
        self._user = None

    def logout_admin(self) -> None:
        self._admin = None

    def update_user_profile(self, updates: dict[str, Any]) -> User | None:
        if self._user is None:
            return None
        unknown = set(updates) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        updated = replace(self._user, **updates)
        self._users = [updated if u.id == updated.id else u for u in self._users]
        self._user = updated
        return updated
