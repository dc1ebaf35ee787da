"""Recipe gateway choosing between the remote API and the local cache."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Protocol
from zoneinfo import ZoneInfo

from recipe_finder.adapters.spoonacular_client import RecipeApiClient
from recipe_finder.domain.errors import RemoteUnavailableError
from recipe_finder.domain.recipes import AdvancedSearchFilters, DailyRecipe
from recipe_finder.services.quota import QuotaTracker
from recipe_finder.services.recipe_cache import RecipeCache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

_DIET_FLAGS = {
    "vegetarian": "vegetarian",
    "vegan": "vegan",
    "glutenfree": "glutenFree",
    "dairyfree": "dairyFree",
}


class DailyRecipeRepository(Protocol):
    """Persistence interface for the recipe of the day."""

    def get_daily(self) -> DailyRecipe | None:
        """Return the pinned recipe, if any."""

    def save_daily(self, daily: DailyRecipe) -> None:
        """Pin a recipe for a day."""


@dataclass
class RecipeGateway:
    """Serves recipe data from the remote API when the quota allows.

    Successful remote results are written through to the cache. Remote
    failures, an exhausted quota or a missing API client fall back to the
    cache, and an empty cache yields ``None`` or ``[]``.
    """

    remote_client: RecipeApiClient | None
    cache: RecipeCache
    quota: QuotaTracker
    daily_repository: DailyRecipeRepository | None = None
    timezone_name: str = "UTC"

    def is_remote_configured(self) -> bool:
        """Return True when a remote API client is available."""
        return self.remote_client is not None

    async def get_random_recipe(self) -> dict[str, object] | None:
        """Return one random recipe; each call may differ."""
        client = self.remote_client
        payload = await self._call_remote(
            lambda: client.random_recipes(number=1), action="random"
        )
        if payload is not None:
            self.quota.record_remote_call()
            recipes = _recipe_list(payload, "recipes")
            if recipes:
                self.cache.store(recipes[0])
                return recipes[0]

        _logger.info("Using random cached recipe")
        return self.cache.random_recipe()

    async def search_recipes(
        self, query: str, limit: int = 12
    ) -> list[dict[str, object]]:
        """Full-text search, falling back to cached title matches."""
        client = self.remote_client
        payload = await self._call_remote(
            lambda: client.complex_search({"query": query, "number": limit}),
            action="search",
        )
        if payload is not None:
            results = _recipe_list(payload, "results")
            self.cache.store_many(results)
            self.quota.record_remote_call()
            return results

        _logger.info("Searching cached recipes for %r", query)
        return self.cache.search(query)

    async def get_recipe_by_id(self, recipe_id: int | str) -> dict[str, object] | None:
        """Return recipe details, checking the cache before any quota use."""
        remote_id = _parse_recipe_id(recipe_id)
        cached = self.cache.get(remote_id)
        if cached is not None:
            _logger.info("Using cached recipe details for %s", remote_id)
            return cached

        client = self.remote_client
        payload = await self._call_remote(
            lambda: client.get_recipe(remote_id), action=f"get_recipe:{remote_id}"
        )
        if payload is None:
            return None
        self.quota.record_remote_call()
        if not payload.get("id"):
            return None
        self.cache.store(payload)
        return payload

    async def advanced_search(
        self, filters: AdvancedSearchFilters
    ) -> list[dict[str, object]]:
        """Filtered search; the cache fallback applies a subset of filters."""
        client = self.remote_client
        payload = await self._call_remote(
            lambda: client.complex_search(filters.to_params()),
            action="advanced_search",
        )
        if payload is not None:
            results = _recipe_list(payload, "results")
            self.cache.store_many(results)
            self.quota.record_remote_call()
            return results

        _logger.info("Advanced search using cached recipes")
        return _filter_cached(self.cache.valid_recipes(), filters)

    async def get_daily_recipe(self) -> dict[str, object] | None:
        """Return the recipe pinned for today, pinning a random one if needed."""
        today = datetime.now(tz=ZoneInfo(self.timezone_name)).date()
        pinned = self._read_daily()
        if pinned is not None and pinned.day == today and pinned.recipe:
            _logger.info("Using cached recipe of the day")
            return pinned.recipe

        recipe = await self.get_random_recipe()
        if recipe is not None:
            self._save_daily(DailyRecipe(day=today, recipe=recipe))
        return recipe

    async def _call_remote(
        self,
        func: "Callable[[], Awaitable[dict[str, object]]]",
        *,
        action: str,
    ) -> dict[str, object] | None:
        """Call the remote API when configured and allowed by the quota."""
        if self.remote_client is None:
            return None
        if not self.quota.allow_remote_call():
            _logger.info("Remote %s skipped: daily API quota reached", action)
            return None
        try:
            return await func()
        except RemoteUnavailableError as exc:
            _logger.warning("Remote %s failed, falling back to cache: %s", action, exc)
            return None

    def _read_daily(self) -> DailyRecipe | None:
        if self.daily_repository is None:
            return None
        try:
            return self.daily_repository.get_daily()
        except Exception:
            _logger.exception("Failed to read recipe of the day")
            return None

    def _save_daily(self, daily: DailyRecipe) -> None:
        if self.daily_repository is None:
            return
        try:
            self.daily_repository.save_daily(daily)
        except Exception:
            _logger.exception("Failed to pin recipe of the day")


def _parse_recipe_id(value: int | str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"Invalid recipe id: {value!r}")


def _recipe_list(
    payload: dict[str, object] | None, key: str
) -> list[dict[str, object]]:
    if not payload:
        return []
    items = payload.get(key)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _filter_cached(
    recipes: list[dict[str, object]], filters: AdvancedSearchFilters
) -> list[dict[str, object]]:
    """Best-effort filtering: query, ready time and diet only."""
    results = recipes
    if filters.query:
        needle = filters.query.lower()
        results = [
            recipe
            for recipe in results
            if needle in str(recipe.get("title") or "").lower()
        ]
    if filters.max_ready_time:
        results = [
            recipe
            for recipe in results
            if _ready_in_minutes(recipe) is not None
            and _ready_in_minutes(recipe) <= filters.max_ready_time
        ]
    if filters.diet:
        diets = [
            diet.strip().replace(" ", "")
            for diet in filters.diet.lower().split(",")
            if diet.strip()
        ]
        results = [recipe for recipe in results if _matches_any_diet(recipe, diets)]
    return results[: filters.number]


def _ready_in_minutes(recipe: dict[str, object]) -> int | None:
    value = recipe.get("readyInMinutes")
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return int(value) if value else None


def _matches_any_diet(recipe: dict[str, object], diets: list[str]) -> bool:
    text = f"{recipe.get('title', '')} {recipe.get('summary') or ''}".lower()
    for diet in diets:
        flag = _DIET_FLAGS.get(diet)
        if flag is not None:
            if recipe.get(flag) is True:
                return True
        elif diet in text:
            return True
    return False
