"""Supabase implementation for favorites."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from recipe_finder.domain.favorites import Favorite
from recipe_finder.domain.models import RecipeId, UserId, to_recipe_id, to_user_id
from recipe_finder.services.favorites import FavoriteRepository


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase-backed favorites; expects a unique (user_id, recipe_id) index."""

    client: Client

    def find_favorites(self, user_id: UserId, recipe_id: RecipeId) -> list[Favorite]:
        """Return favorites for the user and recipe pair."""
        response = (
            self.client.table("favorites")
            .select("*")
            .eq("user_id", user_id)
            .eq("recipe_id", recipe_id)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_favorite(row) for row in response.data or []]

    def create_favorite(
        self, user_id: UserId, recipe_id: RecipeId, payload: dict[str, object]
    ) -> Favorite | None:
        """Insert unless the pair exists; conflicting inserts return no rows."""
        response = (
            self.client.table("favorites")
            .upsert(
                {**payload, "user_id": user_id, "recipe_id": recipe_id},
                on_conflict="user_id,recipe_id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if not response.data:
            return None
        return _parse_favorite(response.data[0])

    def get_favorite(self, favorite_id: str) -> Favorite | None:
        """Return a favorite by id, if present."""
        response = (
            self.client.table("favorites")
            .select("*")
            .eq("id", favorite_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_favorite(response.data[0])

    def delete_favorite(self, favorite_id: str) -> None:
        """Delete a favorite by id."""
        self.client.table("favorites").delete().eq("id", favorite_id).execute()

    def list_by_user(self, user_id: UserId) -> list[Favorite]:
        """Return a user's favorites, newest first."""
        response = (
            self.client.table("favorites")
            .select("*")
            .eq("user_id", user_id)
            .order("added_at", desc=True)
            .execute()
        )
        return [_parse_favorite(row) for row in response.data or []]


def _parse_favorite(row: dict[str, object]) -> Favorite:
    added_raw = row.get("added_at")
    ready = row.get("ready_in_minutes")
    servings = row.get("servings")
    return Favorite(
        id=str(row["id"]),
        user_id=to_user_id(row["user_id"]),
        recipe_id=to_recipe_id(row["recipe_id"]),
        title=str(row.get("title") or ""),
        image=row.get("image"),
        ready_in_minutes=int(ready) if ready is not None else None,
        servings=int(servings) if servings is not None else None,
        summary=str(row.get("summary") or ""),
        added_at=(
            datetime.fromisoformat(added_raw)
            if isinstance(added_raw, str) and added_raw
            else None
        ),
    )
