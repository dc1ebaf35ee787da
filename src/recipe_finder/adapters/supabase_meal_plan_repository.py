"""Supabase repository for meal plans."""

from dataclasses import dataclass

from supabase import Client

from recipe_finder.domain.meal_plans import MealPlan
from recipe_finder.domain.models import UserId, to_user_id
from recipe_finder.services.meal_plans import MealPlanRepository


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plans."""

    client: Client

    def create_plan(self, user_id: UserId, payload: dict[str, object]) -> MealPlan:
        """Create a plan row and return it."""
        response = (
            self.client.table("meal_plans")
            .insert({**payload, "user_id": user_id})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        return _parse_plan(response.data[0])

    def get_plan(self, plan_id: str) -> MealPlan | None:
        """Return a plan by id, if present."""
        response = (
            self.client.table("meal_plans")
            .select("*")
            .eq("id", plan_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_by_user(self, user_id: UserId) -> list[MealPlan]:
        """Return all plans of a user."""
        response = (
            self.client.table("meal_plans").select("*").eq("user_id", user_id).execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def delete_plan(self, plan_id: str) -> None:
        """Delete a plan row."""
        self.client.table("meal_plans").delete().eq("id", plan_id).execute()


def _parse_plan(row: dict[str, object]) -> MealPlan:
    plan_data = row.get("plan_data")
    return MealPlan(
        id=str(row["id"]),
        user_id=to_user_id(row["user_id"]),
        name=str(row.get("name") or ""),
        week=row.get("week"),
        plan_data=plan_data if isinstance(plan_data, dict) else {},
    )
