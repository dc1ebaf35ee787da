"""User-related business logic."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

import bcrypt

from recipe_finder.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from recipe_finder.domain.models import UserId, UserRecord, to_user_id

_logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("first_name", "last_name", "display_name")
_MIN_PASSWORD_LENGTH = 6


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""

    def get_by_id(self, user_id: UserId) -> UserRecord | None:
        """Return a user by id, if present."""

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create and return a new user record."""

    def update_user(self, user_id: UserId, payload: dict[str, object]) -> UserRecord:
        """Apply a partial update and return the user."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    password_rounds: int = 12

    def register(self, data: dict[str, object]) -> UserRecord:
        """Create a user after checking the email is not taken.

        The uniqueness check is a separate read before the insert.
        """
        email = _normalize_email(data.get("email"))
        password = str(data.get("password") or "")
        first_name = str(data.get("first_name") or "").strip()
        last_name = str(data.get("last_name") or "").strip()

        errors: dict[str, str] = {}
        if not email or "@" not in email:
            errors["email"] = "A valid email is required"
        if len(password) < _MIN_PASSWORD_LENGTH:
            errors["password"] = (
                f"Password must be at least {_MIN_PASSWORD_LENGTH} characters"
            )
        confirm = data.get("confirm_password")
        if confirm is not None and confirm != password:
            errors["confirm_password"] = "Passwords do not match"
        if not first_name:
            errors["first_name"] = "First name is required"
        if not last_name:
            errors["last_name"] = "Last name is required"
        if errors:
            raise ValidationError(errors)

        if self.repository.get_by_email(email) is not None:
            raise ConflictError("User with this email already exists")

        user = self.repository.create_user(
            {
                "email": email,
                "password_hash": hash_password(password, self.password_rounds),
                "first_name": first_name,
                "last_name": last_name,
                "display_name": f"{first_name} {last_name}",
                "is_admin": False,
                "created_at": datetime.now(tz=UTC).isoformat(),
            }
        )
        _logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, email: object, password: str) -> UserRecord:
        """Return the user for valid credentials."""
        user = self.repository.get_by_email(_normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        return user

    def get_user(self, user_id: object) -> UserRecord:
        """Return a user or raise NotFoundError."""
        user = self.repository.get_by_id(to_user_id(user_id))
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def update_profile(self, user_id: object, updates: dict[str, object]) -> UserRecord:
        """Update display fields; credentials and identity are ignored."""
        user = self.get_user(user_id)
        payload = {
            key: str(value).strip()
            for key, value in updates.items()
            if key in _PROFILE_FIELDS and value is not None
        }
        if not payload:
            return user
        return self.repository.update_user(user.id, payload)

    def change_password(
        self, user_id: object, current_password: str, new_password: str
    ) -> None:
        """Replace the password after verifying the current one."""
        user = self.get_user(user_id)
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")
        if len(new_password) < _MIN_PASSWORD_LENGTH:
            raise ValidationError(
                {
                    "new_password": (
                        f"Password must be at least {_MIN_PASSWORD_LENGTH} characters"
                    )
                }
            )
        password_hash = hash_password(new_password, self.password_rounds)
        self.repository.update_user(user.id, {"password_hash": password_hash})
        _logger.info("Password changed for user %s", user.id)


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False


def _normalize_email(value: object) -> str:
    return str(value or "").strip().lower()
