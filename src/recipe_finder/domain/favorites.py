"""Domain models for favorites."""

from dataclasses import dataclass
from datetime import datetime

from recipe_finder.domain.models import RecipeId, UserId

SUMMARY_MAX_LENGTH = 200


@dataclass(frozen=True)
class Favorite:
    """A recipe saved by a user."""

    id: str
    user_id: UserId
    recipe_id: RecipeId
    title: str
    image: str | None
    ready_in_minutes: int | None
    servings: int | None
    summary: str
    added_at: datetime | None


@dataclass(frozen=True)
class FavoriteResult:
    """Outcome of a favorites mutation."""

    status: str
    message: str
    favorite: Favorite | None = None

    @property
    def is_favorited(self) -> bool:
        """Return True when the recipe is favorited after the call."""
        return self.status in {"added", "already_favorited"}
