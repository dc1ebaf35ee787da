"""Favorites ledger keeping one favorite per user and recipe."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from recipe_finder.domain.errors import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from recipe_finder.domain.favorites import SUMMARY_MAX_LENGTH, Favorite, FavoriteResult
from recipe_finder.domain.models import RecipeId, UserId, to_recipe_id, to_user_id

_logger = logging.getLogger(__name__)


class FavoriteRepository(Protocol):
    """Persistence interface for favorites."""

    def find_favorites(self, user_id: UserId, recipe_id: RecipeId) -> list[Favorite]:
        """Return favorites matching both the user and the recipe."""

    def create_favorite(
        self, user_id: UserId, recipe_id: RecipeId, payload: dict[str, object]
    ) -> Favorite | None:
        """Insert a favorite; None when one already exists for the pair."""

    def get_favorite(self, favorite_id: str) -> Favorite | None:
        """Return a favorite by its own id."""

    def delete_favorite(self, favorite_id: str) -> None:
        """Delete a favorite by its own id."""

    def list_by_user(self, user_id: UserId) -> list[Favorite]:
        """Return all favorites of a user."""


@dataclass
class FavoritesLedger:
    """Toggle and query favorites.

    ``toggle`` reads then writes; the uniqueness of the pair is closed by
    the repository's conditional insert, not by this class.
    """

    repository: FavoriteRepository

    def is_favorited(self, user_id: object, recipe_id: object) -> Favorite | None:
        """Return the favorite for the pair, lowest id first on duplicates."""
        uid, rid = to_user_id(user_id), to_recipe_id(recipe_id)
        matches = self.repository.find_favorites(uid, rid)
        if not matches:
            return None
        if len(matches) > 1:
            _logger.warning(
                "Found %s favorites for user %s and recipe %s", len(matches), uid, rid
            )
        return min(matches, key=lambda favorite: _id_sort_key(favorite.id))

    def add(self, user_id: object, recipe: dict[str, object]) -> FavoriteResult:
        """Favorite a recipe; adding twice returns the existing record."""
        uid, rid = to_user_id(user_id), _snapshot_recipe_id(recipe)
        existing = self.is_favorited(uid, rid)
        if existing is not None:
            return FavoriteResult(
                status="already_favorited",
                message="Recipe already in favorites",
                favorite=existing,
            )

        summary = str(recipe.get("summary") or "")[:SUMMARY_MAX_LENGTH]
        payload: dict[str, object] = {
            "title": str(recipe.get("title") or ""),
            "image": recipe.get("image"),
            "ready_in_minutes": recipe.get("readyInMinutes"),
            "servings": recipe.get("servings"),
            "summary": summary,
            "added_at": datetime.now(tz=UTC).isoformat(),
        }
        created = self.repository.create_favorite(uid, rid, payload)
        if created is None:
            return FavoriteResult(
                status="already_favorited",
                message="Recipe already in favorites",
                favorite=self.is_favorited(uid, rid),
            )
        _logger.info("User %s favorited recipe %s", uid, rid)
        return FavoriteResult(
            status="added", message="Recipe added to favorites!", favorite=created
        )

    def remove(self, user_id: object, recipe_id: object) -> FavoriteResult:
        """Unfavorite a recipe; removing twice is not an error."""
        existing = self.is_favorited(user_id, recipe_id)
        if existing is None:
            return FavoriteResult(
                status="not_favorited", message="Recipe not in favorites"
            )
        self.repository.delete_favorite(existing.id)
        _logger.info("User %s unfavorited recipe %s", existing.user_id, recipe_id)
        return FavoriteResult(
            status="removed",
            message="Recipe removed from favorites",
            favorite=existing,
        )

    def toggle(self, user_id: object, recipe: dict[str, object]) -> FavoriteResult:
        """Remove the favorite if present, otherwise add it."""
        recipe_id = _snapshot_recipe_id(recipe)
        if self.is_favorited(user_id, recipe_id) is not None:
            return self.remove(user_id, recipe_id)
        return self.add(user_id, recipe)

    def list_for_user(self, user_id: object) -> list[Favorite]:
        """Return all favorites of a user."""
        return self.repository.list_by_user(to_user_id(user_id))

    def count_for_user(self, user_id: object) -> int:
        """Return how many recipes a user has favorited."""
        return len(self.list_for_user(user_id))

    def remove_by_id(self, user_id: object, favorite_id: str) -> None:
        """Delete one of the user's favorites by its own id."""
        favorite = self.repository.get_favorite(favorite_id)
        if favorite is None:
            raise NotFoundError(f"Favorite {favorite_id} not found")
        if favorite.user_id != to_user_id(user_id):
            raise UnauthorizedError(f"Favorite {favorite_id} belongs to another user")
        self.repository.delete_favorite(favorite.id)

    def sync(self, user_id: object, recipes: list[dict[str, object]]) -> int:
        """Favorite every recipe not yet favorited; return how many were added."""
        synced = 0
        for recipe in recipes:
            if self.add(user_id, recipe).status == "added":
                synced += 1
        _logger.info("Synced %s favorites for user %s", synced, user_id)
        return synced


def _snapshot_recipe_id(recipe: dict[str, object]) -> RecipeId:
    try:
        return to_recipe_id(recipe.get("id"))
    except ValueError as exc:
        raise ValidationError({"id": "A recipe id is required"}) from exc

def _id_sort_key(value: str) -> tuple[int, int, str]:
    if value.isdigit():
        return (0, int(value), value)
    return (1, 0, value)
