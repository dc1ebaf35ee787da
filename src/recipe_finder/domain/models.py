"""Domain models for users and identities."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

UserId = str
RecipeId = str


def to_user_id(value: object) -> UserId:
    """Convert an ingested user id into its canonical string form."""
    return _to_identity(value, kind="user")


def to_recipe_id(value: object) -> RecipeId:
    """Convert an ingested recipe id into its canonical string form."""
    return _to_identity(value, kind="recipe")


def _to_identity(value: object, *, kind: str) -> str:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Invalid {kind} id: {value!r}")
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ValueError(f"Invalid {kind} id: {value!r}")


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UserId
    email: str
    password_hash: str
    first_name: str
    last_name: str
    display_name: str
    is_admin: bool
    created_at: datetime | None


@dataclass(frozen=True)
class PublicUser:
    """User data that is safe to hand to clients."""

    id: UserId
    email: str
    first_name: str
    last_name: str
    display_name: str
    is_admin: bool
    created_at: datetime | None

    @classmethod
    def from_record(cls, record: UserRecord) -> "PublicUser":
        """Strip credentials from a stored user."""
        return cls(
            id=record.id,
            email=record.email,
            first_name=record.first_name,
            last_name=record.last_name,
            display_name=record.display_name,
            is_admin=record.is_admin,
            created_at=record.created_at,
        )
