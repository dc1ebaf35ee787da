"""Supabase repository for cached remote recipes."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from recipe_finder.domain.recipes import CachedRecipe
from recipe_finder.services.recipe_cache import RecipeCacheRepository


@dataclass
class SupabaseRecipeCacheRepository(RecipeCacheRepository):
    """Stores remote payloads verbatim in a JSON column keyed by remote id."""

    client: Client

    def get_recipe(self, recipe_id: int) -> CachedRecipe | None:
        """Return a cached recipe, if present."""
        response = (
            self.client.table("cached_recipes")
            .select("id, title, payload, cached_at")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_recipes(self) -> list[CachedRecipe]:
        """Return every cached recipe."""
        response = (
            self.client.table("cached_recipes")
            .select("id, title, payload, cached_at")
            .order("cached_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def add_recipe(
        self,
        recipe_id: int,
        title: str,
        payload: dict[str, object],
        cached_at: datetime,
    ) -> bool:
        """Insert a recipe; an existing id is left untouched."""
        response = (
            self.client.table("cached_recipes")
            .upsert(
                {
                    "id": recipe_id,
                    "title": title,
                    "payload": payload,
                    "cached_at": cached_at.isoformat(),
                },
                on_conflict="id",
                ignore_duplicates=True,
            )
            .execute()
        )
        return bool(response.data)

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a cached recipe."""
        self.client.table("cached_recipes").delete().eq("id", recipe_id).execute()


def _parse_row(row: dict[str, object]) -> CachedRecipe:
    cached_raw = row.get("cached_at")
    payload = row.get("payload")
    return CachedRecipe(
        id=int(row["id"]),
        title=str(row.get("title") or ""),
        payload=payload if isinstance(payload, dict) else {},
        cached_at=(
            datetime.fromisoformat(cached_raw)
            if isinstance(cached_raw, str) and cached_raw
            else None
        ),
    )
