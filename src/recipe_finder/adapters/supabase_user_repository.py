"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from recipe_finder.domain.models import UserId, UserRecord, to_user_id
from recipe_finder.services.users import UserRepository

_COLUMNS = (
    "id, email, password_hash, first_name, last_name, display_name, "
    "is_admin, created_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_id(self, user_id: UserId) -> UserRecord | None:
        """Return a user by id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user_id: UserId, payload: dict[str, object]) -> UserRecord:
        """Patch a user row and return it."""
        response = (
            self.client.table("users").update(payload).eq("id", user_id).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    first_name = str(row.get("first_name") or "")
    last_name = str(row.get("last_name") or "")
    return UserRecord(
        id=to_user_id(row["id"]),
        email=str(row.get("email", "")),
        password_hash=str(row.get("password_hash") or ""),
        first_name=first_name,
        last_name=last_name,
        display_name=str(row.get("display_name") or f"{first_name} {last_name}"),
        is_admin=bool(row.get("is_admin", False)),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
