"""Tests for user service."""

import pytest

from recipe_finder.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from recipe_finder.services.users import UserService, hash_password, verify_password
from tests.conftest import TEST_PASSWORD_ROUNDS, InMemoryUserRepository


def _service() -> UserService:
    return UserService(InMemoryUserRepository(), password_rounds=TEST_PASSWORD_ROUNDS)


def _registration(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "email": "Ada@Example.com",
        "password": "secret-pass",
        "confirm_password": "secret-pass",
        "first_name": "Ada",
        "last_name": "Lovelace",
    }
    data.update(overrides)
    return data


def test_register_hashes_password_and_normalizes_email() -> None:
    service = _service()

    user = service.register(_registration())

    assert user.email == "ada@example.com"
    assert user.display_name == "Ada Lovelace"
    assert user.password_hash != "secret-pass"
    assert verify_password("secret-pass", user.password_hash)


def test_register_rejects_duplicate_email() -> None:
    service = _service()
    service.register(_registration())

    with pytest.raises(ConflictError):
        service.register(_registration(email="ADA@example.com"))


def test_register_reports_invalid_fields() -> None:
    service = _service()

    with pytest.raises(ValidationError) as exc_info:
        service.register(
            _registration(
                email="not-an-email", password="abc", confirm_password="xyz"
            )
        )

    assert set(exc_info.value.errors) == {"email", "password", "confirm_password"}


def test_authenticate_checks_password() -> None:
    service = _service()
    user = service.register(_registration())

    assert service.authenticate("ada@example.com", "secret-pass").id == user.id
    with pytest.raises(AuthenticationError):
        service.authenticate("ada@example.com", "wrong-pass")
    with pytest.raises(AuthenticationError):
        service.authenticate("nobody@example.com", "secret-pass")


def test_update_profile_ignores_protected_fields() -> None:
    service = _service()
    user = service.register(_registration())

    updated = service.update_profile(
        user.id, {"display_name": " Countess ", "email": "evil@example.com"}
    )

    assert updated.display_name == "Countess"
    assert updated.email == "ada@example.com"


def test_change_password_requires_current_password() -> None:
    service = _service()
    user = service.register(_registration())

    with pytest.raises(AuthenticationError):
        service.change_password(user.id, "wrong-pass", "new-secret")
    service.change_password(user.id, "secret-pass", "new-secret")

    assert service.authenticate("ada@example.com", "new-secret").id == user.id


def test_get_user_missing_raises() -> None:
    with pytest.raises(NotFoundError):
        _service().get_user("missing")


def test_verify_password_rejects_garbage_hash() -> None:
    assert verify_password("secret", "not-a-bcrypt-hash") is False
    assert verify_password("secret", hash_password("secret", rounds=4)) is True
