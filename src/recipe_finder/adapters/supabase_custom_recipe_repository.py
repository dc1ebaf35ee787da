"""Supabase implementation for user-authored recipes."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from recipe_finder.domain.models import RecipeId, UserId, to_recipe_id, to_user_id
from recipe_finder.domain.recipes import CustomRecipe
from recipe_finder.services.custom_recipes import CustomRecipeRepository


@dataclass
class SupabaseCustomRecipeRepository(CustomRecipeRepository):
    """Supabase-backed repository for custom recipes."""

    client: Client

    def create_recipe(
        self, owner_user_id: UserId, payload: dict[str, object], created_at: datetime
    ) -> CustomRecipe:
        """Create a recipe row and return it."""
        stamp = created_at.isoformat()
        response = (
            self.client.table("custom_recipes")
            .insert(
                {
                    **payload,
                    "owner_user_id": owner_user_id,
                    "created_at": stamp,
                    "updated_at": stamp,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create custom recipe")
        return _parse_recipe(response.data[0])

    def get_recipe(self, recipe_id: RecipeId) -> CustomRecipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("custom_recipes")
            .select("*")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def replace_recipe(
        self, recipe_id: RecipeId, payload: dict[str, object], updated_at: datetime
    ) -> CustomRecipe:
        """Write every mutable column of a recipe."""
        response = (
            self.client.table("custom_recipes")
            .update({**payload, "updated_at": updated_at.isoformat()})
            .eq("id", recipe_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update custom recipe")
        return _parse_recipe(response.data[0])

    def delete_recipe(self, recipe_id: RecipeId) -> None:
        """Delete a recipe row."""
        self.client.table("custom_recipes").delete().eq("id", recipe_id).execute()

    def list_by_owner(self, owner_user_id: UserId) -> list[CustomRecipe]:
        """Return every recipe of an owner."""
        response = (
            self.client.table("custom_recipes")
            .select("*")
            .eq("owner_user_id", owner_user_id)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def list_public(self) -> list[CustomRecipe]:
        """Return recipes flagged public."""
        response = (
            self.client.table("custom_recipes")
            .select("*")
            .eq("is_public", True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_recipe(row: dict[str, object]) -> CustomRecipe:
    """Parse a custom recipe row into a domain model."""
    prep_time = int(row.get("prep_time") or 0)
    cook_time = int(row.get("cook_time") or 0)
    servings = row.get("servings")
    return CustomRecipe(
        id=to_recipe_id(row["id"]),
        owner_user_id=to_user_id(row["owner_user_id"]),
        title=str(row.get("title", "")),
        description=str(row.get("description") or ""),
        image=row.get("image"),
        servings=int(servings) if servings is not None else None,
        prep_time=prep_time,
        cook_time=cook_time,
        total_time=int(row.get("total_time") or prep_time + cook_time),
        difficulty=str(row.get("difficulty") or "medium"),
        cuisine=row.get("cuisine"),
        category=row.get("category"),
        ingredients=list(row.get("ingredients") or []),
        instructions=list(row.get("instructions") or []),
        tags=list(row.get("tags") or []),
        is_public=bool(row.get("is_public", False)),
        notes=row.get("notes"),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
