"""Write-through cache of remote recipes kept in the store."""

import logging
import random
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from recipe_finder.domain.recipes import CachedRecipe

_logger = logging.getLogger(__name__)


class RecipeCacheRepository(Protocol):
    """Persistence interface for cached remote recipes."""

    def get_recipe(self, recipe_id: int) -> CachedRecipe | None:
        """Return a cached recipe by remote id, if present."""

    def list_recipes(self) -> list[CachedRecipe]:
        """Return every cached recipe."""

    def add_recipe(
        self,
        recipe_id: int,
        title: str,
        payload: dict[str, object],
        cached_at: datetime,
    ) -> bool:
        """Insert a recipe unless the id is already cached; True when inserted."""

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a cached recipe."""


@dataclass
class RecipeCache:
    """Cache of remote recipes; entries are never updated in place.

    Store failures are logged and reported as an empty cache.
    """

    repository: RecipeCacheRepository
    max_entries: int | None = None

    def store(self, recipe: dict[str, object]) -> bool:
        """Cache a remote recipe unless its id is already cached."""
        recipe_id = _remote_id(recipe.get("id"))
        if recipe_id is None:
            _logger.warning("Skipping recipe without a numeric id")
            return False
        try:
            if self.repository.get_recipe(recipe_id) is not None:
                return False
            inserted = self.repository.add_recipe(
                recipe_id,
                str(recipe.get("title") or ""),
                recipe,
                datetime.now(tz=UTC),
            )
            if inserted:
                _logger.info("Cached recipe %s: %s", recipe_id, recipe.get("title"))
                self._enforce_bound()
            return inserted
        except Exception:
            _logger.exception("Failed to cache recipe %s", recipe_id)
            return False

    def store_many(self, recipes: list[dict[str, object]]) -> int:
        """Cache several recipes and return how many were new."""
        return sum(1 for recipe in recipes if self.store(recipe))

    def get(self, recipe_id: int) -> dict[str, object] | None:
        """Return a cached recipe payload."""
        try:
            cached = self.repository.get_recipe(recipe_id)
        except Exception:
            _logger.exception("Failed to read cached recipe %s", recipe_id)
            return None
        return cached.as_recipe() if cached else None

    def list_all(self) -> list[dict[str, object]]:
        """Return every cached recipe payload."""
        return [entry.as_recipe() for entry in self._entries()]

    def valid_recipes(self) -> list[dict[str, object]]:
        """Return cached payloads that carry both an id and a title."""
        return [entry.as_recipe() for entry in self._entries() if entry.is_valid]

    def search(self, query: str) -> list[dict[str, object]]:
        """Case-insensitive substring match on cached titles."""
        if not query:
            return self.list_all()
        needle = query.lower()
        return [
            entry.as_recipe()
            for entry in self._entries()
            if entry.title and needle in entry.title.lower()
        ]

    def random_recipe(self) -> dict[str, object] | None:
        """Pick a uniformly random valid cached recipe."""
        candidates = self.valid_recipes()
        if not candidates:
            return None
        return random.choice(candidates)  # noqa: S311

    def clear(self) -> int:
        """Delete every cached recipe and return how many were removed."""
        entries = self._entries()
        for entry in entries:
            self.repository.delete_recipe(entry.id)
        _logger.info("Cleared %s cached recipes", len(entries))
        return len(entries)

    def _entries(self) -> list[CachedRecipe]:
        try:
            return self.repository.list_recipes()
        except Exception:
            _logger.exception("Failed to list cached recipes")
            return []

    def _enforce_bound(self) -> None:
        if self.max_entries is None:
            return
        entries = self.repository.list_recipes()
        overflow = len(entries) - self.max_entries
        if overflow <= 0:
            return
        oldest = sorted(
            entries,
            key=lambda entry: entry.cached_at or datetime.min.replace(tzinfo=UTC),
        )
        for entry in oldest[:overflow]:
            self.repository.delete_recipe(entry.id)
        _logger.info("Evicted %s cached recipes", overflow)


def _remote_id(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
