"""Meal plan service."""

from dataclasses import dataclass
from typing import Protocol

from recipe_finder.domain.errors import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from recipe_finder.domain.meal_plans import MealPlan
from recipe_finder.domain.models import UserId, to_user_id


class MealPlanRepository(Protocol):
    """Persistence interface for meal plans."""

    def create_plan(self, user_id: UserId, payload: dict[str, object]) -> MealPlan:
        """Create a plan and return it."""

    def get_plan(self, plan_id: str) -> MealPlan | None:
        """Return a plan by id, if present."""

    def list_by_user(self, user_id: UserId) -> list[MealPlan]:
        """Return all plans of a user."""

    def delete_plan(self, plan_id: str) -> None:
        """Delete a plan."""


@dataclass
class MealPlanService:
    """Service for meal plan CRUD."""

    repository: MealPlanRepository

    def create(
        self,
        user_id: object,
        name: str,
        week: str | None = None,
        plan_data: dict[str, object] | None = None,
    ) -> MealPlan:
        """Create a meal plan for a user."""
        if not name or not name.strip():
            raise ValidationError({"name": "Plan name is required"})
        return self.repository.create_plan(
            to_user_id(user_id),
            {"name": name.strip(), "week": week, "plan_data": plan_data or {}},
        )

    def list_for_user(self, user_id: object) -> list[MealPlan]:
        """Return a user's meal plans."""
        return self.repository.list_by_user(to_user_id(user_id))

    def delete(self, plan_id: str, acting_user_id: object) -> None:
        """Delete a plan owned by the acting user."""
        plan = self.repository.get_plan(plan_id)
        if plan is None:
            raise NotFoundError(f"Meal plan {plan_id} not found")
        if plan.user_id != to_user_id(acting_user_id):
            raise UnauthorizedError(f"Meal plan {plan_id} belongs to another user")
        self.repository.delete_plan(plan.id)
