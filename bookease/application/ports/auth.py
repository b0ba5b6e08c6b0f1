from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from bookease.domain.entities.customer import Admin, User


class AuthPort(ABC):
    @abstractmethod
    def current_user(self) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def current_admin(self) -> Admin | None:
        raise NotImplementedError

    @abstractmethod
    def register_user(self, email: str, name: str, phone: str, password: str) -> User:
        """Create and sign in a user. Raises DuplicateUserError if the email is taken."""
        raise NotImplementedError

    @abstractmethod
    def login_user(self, email: str, password: str) -> User:
        """Raises AuthenticationError for unknown or inactive users."""
        raise NotImplementedError

    @abstractmethod
    def login_admin(self, email: str, password: str) -> Admin:
        raise NotImplementedError

    @abstractmethod
    def logout_user(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def logout_admin(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def update_user_profile(self, updates: dict[str, Any]) -> User | None:
        """Apply updates to the signed-in user. No-op (None) when signed out."""
        raise NotImplementedError
