"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from recipe_finder.adapters.spoonacular_client import HttpxSpoonacularClient
from recipe_finder.adapters.supabase_custom_recipe_repository import (
    SupabaseCustomRecipeRepository,
)
from recipe_finder.adapters.supabase_daily_recipe_repository import (
    SupabaseDailyRecipeRepository,
)
from recipe_finder.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from recipe_finder.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from recipe_finder.adapters.supabase_recipe_cache_repository import (
    SupabaseRecipeCacheRepository,
)
from recipe_finder.adapters.supabase_usage_stats_repository import (
    SupabaseUsageStatsRepository,
)
from recipe_finder.adapters.supabase_user_repository import SupabaseUserRepository
from recipe_finder.config import Settings, parse_api_key
from recipe_finder.services.custom_recipes import CustomRecipeService
from recipe_finder.services.favorites import FavoritesLedger
from recipe_finder.services.meal_plans import MealPlanService
from recipe_finder.services.profile import ProfileService
from recipe_finder.services.quota import StoreQuotaTracker
from recipe_finder.services.recipe_cache import RecipeCache
from recipe_finder.services.recipes import RecipeGateway
from recipe_finder.services.sessions import SessionManager
from recipe_finder.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    quota_tracker: StoreQuotaTracker
    recipe_cache: RecipeCache
    recipe_gateway: RecipeGateway
    custom_recipe_service: CustomRecipeService
    favorites_ledger: FavoritesLedger
    user_service: UserService
    session_manager: SessionManager
    meal_plan_service: MealPlanService
    profile_service: ProfileService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    quota_tracker = StoreQuotaTracker(
        repository=SupabaseUsageStatsRepository(supabase_client),
        daily_limit=resolved_settings.api_daily_limit,
        timezone_name=resolved_settings.quota_timezone,
    )
    recipe_cache = RecipeCache(
        repository=SupabaseRecipeCacheRepository(supabase_client),
        max_entries=resolved_settings.cache_max_entries,
    )
    api_key = parse_api_key(resolved_settings.spoonacular_api_key)
    spoonacular_client = (
        HttpxSpoonacularClient.create(
            api_key=api_key,
            base_url=resolved_settings.spoonacular_base_url,
            timeout_seconds=resolved_settings.remote_timeout_seconds,
        )
        if api_key
        else None
    )
    recipe_gateway = RecipeGateway(
        remote_client=spoonacular_client,
        cache=recipe_cache,
        quota=quota_tracker,
        daily_repository=SupabaseDailyRecipeRepository(supabase_client),
        timezone_name=resolved_settings.quota_timezone,
    )
    custom_recipe_service = CustomRecipeService(
        SupabaseCustomRecipeRepository(supabase_client)
    )
    favorites_ledger = FavoritesLedger(SupabaseFavoriteRepository(supabase_client))
    user_service = UserService(
        SupabaseUserRepository(supabase_client),
        password_rounds=resolved_settings.password_hash_rounds,
    )
    session_manager = SessionManager(
        user_service=user_service,
        ttl=timedelta(hours=resolved_settings.session_ttl_hours),
    )
    meal_plan_service = MealPlanService(SupabaseMealPlanRepository(supabase_client))
    profile_service = ProfileService(
        user_service=user_service,
        favorites=favorites_ledger,
        custom_recipes=custom_recipe_service,
        meal_plans=meal_plan_service,
    )

    async def close_resources() -> None:
        if spoonacular_client is not None:
            await spoonacular_client.close()

    return AppContainer(
        settings=resolved_settings,
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
