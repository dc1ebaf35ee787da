"""Supabase repository for the recipe of the day."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from recipe_finder.domain.recipes import DailyRecipe
from recipe_finder.services.recipes import DailyRecipeRepository

_DAILY_ROW_ID = 1


@dataclass
class SupabaseDailyRecipeRepository(DailyRecipeRepository):
    """Keeps the pinned recipe in a single row."""

    client: Client

    def get_daily(self) -> DailyRecipe | None:
        """Return the pinned recipe, if any."""
        response = (
            self.client.table("daily_recipes")
            .select("day, recipe")
            .eq("id", _DAILY_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        day_raw = row.get("day")
        recipe = row.get("recipe")
        if not isinstance(day_raw, str) or not isinstance(recipe, dict):
            return None
        return DailyRecipe(day=date.fromisoformat(day_raw), recipe=recipe)

    def save_daily(self, daily: DailyRecipe) -> None:
        """Pin a recipe for a day."""
        self.client.table("daily_recipes").upsert(
            {
                "id": _DAILY_ROW_ID,
                "day": daily.day.isoformat(),
                "recipe": daily.recipe,
            }
        ).execute()
