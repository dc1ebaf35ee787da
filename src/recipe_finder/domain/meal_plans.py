"""Meal plan domain models."""

from dataclasses import dataclass

from recipe_finder.domain.models import UserId


@dataclass(frozen=True)
class MealPlan:
    """A weekly plan mapping days to meals."""

    id: str
    user_id: UserId
    name: str
    week: str | None
    plan_data: dict[str, object]
