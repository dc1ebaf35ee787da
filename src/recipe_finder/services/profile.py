"""Profile dashboard aggregation."""

from dataclasses import dataclass

from recipe_finder.domain.favorites import Favorite
from recipe_finder.domain.meal_plans import MealPlan
from recipe_finder.domain.models import PublicUser
from recipe_finder.domain.recipes import CustomRecipe
from recipe_finder.services.custom_recipes import CustomRecipeService
from recipe_finder.services.favorites import FavoritesLedger
from recipe_finder.services.meal_plans import MealPlanService
from recipe_finder.services.users import UserService


@dataclass(frozen=True)
class ProfileDashboard:
    """Everything the profile page shows for a user."""

    user: PublicUser
    favorites: list[Favorite]
    custom_recipes: list[CustomRecipe]
    meal_plans: list[MealPlan]

    @property
    def counts(self) -> dict[str, int]:
        """Item counts per section."""
        return {
            "favorites": len(self.favorites),
            "custom_recipes": len(self.custom_recipes),
            "meal_plans": len(self.meal_plans),
        }


@dataclass
class ProfileService:
    """Builds the profile dashboard."""

    user_service: UserService
    favorites: FavoritesLedger
    custom_recipes: CustomRecipeService
    meal_plans: MealPlanService

    def dashboard(self, user_id: object) -> ProfileDashboard:
        """Return the user's profile with favorites, recipes and plans."""
        user = self.user_service.get_user(user_id)
        return ProfileDashboard(
            user=PublicUser.from_record(user),
            favorites=self.favorites.list_for_user(user.id),
            custom_recipes=self.custom_recipes.list_by_owner(user.id),
            meal_plans=self.meal_plans.list_for_user(user.id),
        )
