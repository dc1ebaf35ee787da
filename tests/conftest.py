"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import uuid4

import pytest

from recipe_finder.adapters.spoonacular_client import RecipeApiClient
from recipe_finder.config import Settings
from recipe_finder.containers import AppContainer
from recipe_finder.domain.errors import RemoteUnavailableError
from recipe_finder.domain.favorites import Favorite
from recipe_finder.domain.meal_plans import MealPlan
from recipe_finder.domain.models import RecipeId, UserId, UserRecord
from recipe_finder.domain.quota import ApiUsageStats
from recipe_finder.domain.recipes import CachedRecipe, CustomRecipe, DailyRecipe
from recipe_finder.services.custom_recipes import (
    CustomRecipeRepository,
    CustomRecipeService,
)
from recipe_finder.services.favorites import FavoriteRepository, FavoritesLedger
from recipe_finder.services.meal_plans import MealPlanRepository, MealPlanService
from recipe_finder.services.profile import ProfileService
from recipe_finder.services.quota import StoreQuotaTracker, UsageStatsRepository
from recipe_finder.services.recipe_cache import RecipeCache, RecipeCacheRepository
from recipe_finder.services.recipes import DailyRecipeRepository, RecipeGateway
from recipe_finder.services.sessions import SessionManager
from recipe_finder.services.users import UserRepository, UserService

TEST_PASSWORD_ROUNDS = 4


def make_recipe(recipe_id: int, title: str, **extra: object) -> dict[str, object]:
    """Build a remote recipe payload."""
    return {"id": recipe_id, "title": title, **extra}


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UserId, UserRecord] = field(default_factory=dict)

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((user for user in self.users.values() if user.email == email), None)

    def get_by_id(self, user_id: UserId) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        user = UserRecord(
            id=str(uuid4()),
            email=str(payload["email"]),
            password_hash=str(payload["password_hash"]),
            first_name=str(payload["first_name"]),
            last_name=str(payload["last_name"]),
            display_name=str(payload["display_name"]),
            is_admin=bool(payload.get("is_admin", False)),
            created_at=None,
        )
        self.users[user.id] = user
        return user

    def update_user(self, user_id: UserId, payload: dict[str, object]) -> UserRecord:
        user = replace(self.users[user_id], **payload)
        self.users[user_id] = user
        return user


@dataclass
class InMemoryCustomRecipeRepository(CustomRecipeRepository):
    """In-memory custom recipe repository for tests."""

    recipes: dict[RecipeId, CustomRecipe] = field(default_factory=dict)

    def create_recipe(
        self, owner_user_id: UserId, payload: dict[str, object], created_at: datetime
    ) -> CustomRecipe:
        recipe = CustomRecipe(
            id=str(uuid4()),
            created_at=created_at,
            updated_at=created_at,
            **payload,
        )
        self.recipes[recipe.id] = recipe
        return recipe

    def get_recipe(self, recipe_id: RecipeId) -> CustomRecipe | None:
        return self.recipes.get(recipe_id)

    def replace_recipe(
        self, recipe_id: RecipeId, payload: dict[str, object], updated_at: datetime
    ) -> CustomRecipe:
        recipe = replace(self.recipes[recipe_id], **payload, updated_at=updated_at)
        self.recipes[recipe_id] = recipe
        return recipe

    def delete_recipe(self, recipe_id: RecipeId) -> None:
        self.recipes.pop(recipe_id, None)

    def list_by_owner(self, owner_user_id: UserId) -> list[CustomRecipe]:
        return [
            recipe
            for recipe in self.recipes.values()
            if recipe.owner_user_id == owner_user_id
        ]

    def list_public(self) -> list[CustomRecipe]:
        return [recipe for recipe in self.recipes.values() if recipe.is_public]


@dataclass
class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory favorites with a unique (user, recipe) constraint."""

    favorites: dict[str, Favorite] = field(default_factory=dict)
    next_id: int = 1

    def find_favorites(self, user_id: UserId, recipe_id: RecipeId) -> list[Favorite]:
        return [
            favorite
            for favorite in self.favorites.values()
            if favorite.user_id == user_id and favorite.recipe_id == recipe_id
        ]

    def create_favorite(
        self, user_id: UserId, recipe_id: RecipeId, payload: dict[str, object]
    ) -> Favorite | None:
        if self.find_favorites(user_id, recipe_id):
            return None
        return self.insert(user_id, recipe_id, payload)

    def insert(
        self,
        user_id: UserId,
        recipe_id: RecipeId,
        payload: dict[str, object] | None = None,
    ) -> Favorite:
        """Insert without the uniqueness check, as a racing writer would."""
        payload = payload or {}
        favorite = Favorite(
            id=str(self.next_id),
            user_id=user_id,
            recipe_id=recipe_id,
            title=str(payload.get("title") or ""),
            image=payload.get("image"),
            ready_in_minutes=payload.get("ready_in_minutes"),
            servings=payload.get("servings"),
            summary=str(payload.get("summary") or ""),
            added_at=None,
        )
        self.next_id += 1
        self.favorites[favorite.id] = favorite
        return favorite

    def get_favorite(self, favorite_id: str) -> Favorite | None:
        return self.favorites.get(favorite_id)

    def delete_favorite(self, favorite_id: str) -> None:
        self.favorites.pop(favorite_id, None)

    def list_by_user(self, user_id: UserId) -> list[Favorite]:
        return [
            favorite
            for favorite in self.favorites.values()
            if favorite.user_id == user_id
        ]


@dataclass
class InMemoryRecipeCacheRepository(RecipeCacheRepository):
    """In-memory recipe cache store for tests."""

    entries: dict[int, CachedRecipe] = field(default_factory=dict)
    add_calls: int = 0
    fail: bool = False

    def get_recipe(self, recipe_id: int) -> CachedRecipe | None:
        if self.fail:
            raise RuntimeError("store unavailable")
        return self.entries.get(recipe_id)

    def list_recipes(self) -> list[CachedRecipe]:
        if self.fail:
            raise RuntimeError("store unavailable")
        return list(self.entries.values())

    def add_recipe(
        self,
        recipe_id: int,
        title: str,
        payload: dict[str, object],
        cached_at: datetime,
    ) -> bool:
        self.add_calls += 1
        if recipe_id in self.entries:
            return False
        self.entries[recipe_id] = CachedRecipe(
            id=recipe_id, title=title, payload=payload, cached_at=cached_at
        )
        return True

    def delete_recipe(self, recipe_id: int) -> None:
        self.entries.pop(recipe_id, None)


@dataclass
class InMemoryUsageStatsRepository(UsageStatsRepository):
    """In-memory API usage counter for tests."""

    stats: ApiUsageStats | None = None
    fail: bool = False

    def get_stats(self) -> ApiUsageStats | None:
        if self.fail:
            raise RuntimeError("store unavailable")
        return self.stats

    def save_stats(self, stats: ApiUsageStats) -> None:
        if self.fail:
            raise RuntimeError("store unavailable")
        self.stats = stats


@dataclass
class InMemoryDailyRecipeRepository(DailyRecipeRepository):
    """In-memory recipe of the day."""

    daily: DailyRecipe | None = None

    def get_daily(self) -> DailyRecipe | None:
        return self.daily

    def save_daily(self, daily: DailyRecipe) -> None:
        self.daily = daily


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """In-memory meal plans for tests."""

    plans: dict[str, MealPlan] = field(default_factory=dict)

    def create_plan(self, user_id: UserId, payload: dict[str, object]) -> MealPlan:
        plan = MealPlan(
            id=str(uuid4()),
            user_id=user_id,
            name=str(payload["name"]),
            week=payload.get("week"),
            plan_data=dict(payload.get("plan_data") or {}),
        )
        self.plans[plan.id] = plan
        return plan

    def get_plan(self, plan_id: str) -> MealPlan | None:
        return self.plans.get(plan_id)

    def list_by_user(self, user_id: UserId) -> list[MealPlan]:
        return [plan for plan in self.plans.values() if plan.user_id == user_id]

    def delete_plan(self, plan_id: str) -> None:
        self.plans.pop(plan_id, None)


@dataclass
class FakeRecipeApiClient(RecipeApiClient):
    """Fake Spoonacular client with canned responses and call counters."""

    random_payload: dict[str, object] = field(
        default_factory=lambda: {
            "recipes": [make_recipe(101, "Remote Pasta", readyInMinutes=25)]
        }
    )
    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "results": [make_recipe(202, "Remote Chicken Curry", readyInMinutes=40)]
        }
    )
    recipe_payloads: dict[int, dict[str, object]] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    search_params: list[dict[str, object]] = field(default_factory=list)
    fail: bool = False

    async def random_recipes(self, number: int = 1) -> dict[str, object]:
        self._record("random")
        return self.random_payload

    async def complex_search(self, params: dict[str, object]) -> dict[str, object]:
        self._record("complex_search")
        self.search_params.append(params)
        return self.search_payload

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        self._record("get_recipe")
        return self.recipe_payloads.get(recipe_id, {})

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail:
            raise RemoteUnavailableError(f"{name} failed")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        spoonacular_api_key="spoonacular-key",
    )


@pytest.fixture
def usage_repository() -> InMemoryUsageStatsRepository:
    return InMemoryUsageStatsRepository()


@pytest.fixture
def cache_repository() -> InMemoryRecipeCacheRepository:
    return InMemoryRecipeCacheRepository()


@pytest.fixture
def remote_client() -> FakeRecipeApiClient:
    return FakeRecipeApiClient()


@pytest.fixture
def quota_tracker(usage_repository: InMemoryUsageStatsRepository) -> StoreQuotaTracker:
    return StoreQuotaTracker(repository=usage_repository, daily_limit=150)


@pytest.fixture
def recipe_cache(cache_repository: InMemoryRecipeCacheRepository) -> RecipeCache:
    return RecipeCache(repository=cache_repository)


@pytest.fixture
def recipe_gateway(
    remote_client: FakeRecipeApiClient,
    recipe_cache: RecipeCache,
    quota_tracker: StoreQuotaTracker,
) -> RecipeGateway:
    return RecipeGateway(
        remote_client=remote_client,
        cache=recipe_cache,
        quota=quota_tracker,
        daily_repository=InMemoryDailyRecipeRepository(),
    )


@pytest.fixture
def user_service() -> UserService:
    return UserService(InMemoryUserRepository(), password_rounds=TEST_PASSWORD_ROUNDS)


@pytest.fixture
def container(
    settings: Settings,
    quota_tracker: StoreQuotaTracker,
    recipe_cache: RecipeCache,
    recipe_gateway: RecipeGateway,
    user_service: UserService,
) -> AppContainer:
    custom_recipe_service = CustomRecipeService(InMemoryCustomRecipeRepository())
    favorites_ledger = FavoritesLedger(InMemoryFavoriteRepository())
    meal_plan_service = MealPlanService(InMemoryMealPlanRepository())
    session_manager = SessionManager(user_service=user_service)
    profile_service = ProfileService(
        user_service=user_service,
        favorites=favorites_ledger,
        custom_recipes=custom_recipe_service,
        meal_plans=meal_plan_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        quota_tracker=quota_tracker,
        recipe_cache=recipe_cache,
        recipe_gateway=recipe_gateway,
        custom_recipe_service=custom_recipe_service,
        favorites_ledger=favorites_ledger,
        user_service=user_service,
        session_manager=session_manager,
        meal_plan_service=meal_plan_service,
        profile_service=profile_service,
        close_resources=close_resources,
    )
