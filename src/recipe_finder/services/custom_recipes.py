"""Services for user-authored recipes with single-owner authorization."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from urllib.parse import quote

from recipe_finder.domain.errors import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from recipe_finder.domain.models import RecipeId, UserId, to_recipe_id, to_user_id
from recipe_finder.domain.recipes import DIFFICULTIES, CustomRecipe

_logger = logging.getLogger(__name__)

_PLACEHOLDER_IMAGE = "https://via.placeholder.com/556x370?text={title}"

_EDITABLE_FIELDS = (
    "title",
    "description",
    "image",
    "servings",
    "prep_time",
    "cook_time",
    "difficulty",
    "cuisine",
    "category",
    "ingredients",
    "instructions",
    "tags",
    "is_public",
    "notes",
)

_DEFAULTS: dict[str, object] = {
    "servings": 4,
    "prep_time": 15,
    "cook_time": 30,
    "difficulty": "medium",
    "category": "main",
    "is_public": False,
}


class CustomRecipeRepository(Protocol):
    """Persistence interface for custom recipes."""

    def create_recipe(
        self, owner_user_id: UserId, payload: dict[str, object], created_at: datetime
    ) -> CustomRecipe:
        """Create a recipe and return it with its store-assigned id."""

    def get_recipe(self, recipe_id: RecipeId) -> CustomRecipe | None:
        """Return a recipe by id, if present."""

    def replace_recipe(
        self, recipe_id: RecipeId, payload: dict[str, object], updated_at: datetime
    ) -> CustomRecipe:
        """Replace every mutable field of a recipe and return it."""

    def delete_recipe(self, recipe_id: RecipeId) -> None:
        """Delete a recipe."""

    def list_by_owner(self, owner_user_id: UserId) -> list[CustomRecipe]:
        """Return all recipes of an owner."""

    def list_public(self) -> list[CustomRecipe]:
        """Return recipes flagged public."""


@dataclass
class CustomRecipeService:
    """CRUD over custom recipes; only the owner may mutate or delete.

    The ownership check and the write are separate store calls, so a
    concurrent writer can slip in between them.
    """

    repository: CustomRecipeRepository

    def create(self, owner_user_id: object, data: dict[str, object]) -> CustomRecipe:
        """Validate and store a new recipe for its owner."""
        owner_id = to_user_id(owner_user_id)
        payload = _build_payload({**_DEFAULTS, **_editable(data)})
        payload["owner_user_id"] = owner_id
        recipe = self.repository.create_recipe(
            owner_id, payload, created_at=datetime.now(tz=UTC)
        )
        _logger.info("Custom recipe %s created by user %s", recipe.id, owner_id)
        return recipe

    def update(
        self, recipe_id: object, acting_user_id: object, patch: dict[str, object]
    ) -> CustomRecipe:
        """Merge a patch over the owner's recipe and persist the full record."""
        existing = self._get_owned(recipe_id, acting_user_id)
        merged = {**existing.to_payload(), **_editable(patch)}
        payload = _build_payload(merged)
        payload["owner_user_id"] = existing.owner_user_id
        return self.repository.replace_recipe(
            existing.id, payload, updated_at=datetime.now(tz=UTC)
        )

    def delete(self, recipe_id: object, acting_user_id: object) -> None:
        """Delete the owner's recipe."""
        existing = self._get_owned(recipe_id, acting_user_id)
        self.repository.delete_recipe(existing.id)
        _logger.info("Custom recipe %s deleted", existing.id)

    def get_by_id(self, recipe_id: object) -> CustomRecipe | None:
        """Return a recipe for viewing, regardless of owner."""
        return self.repository.get_recipe(to_recipe_id(recipe_id))

    def list_by_owner(self, owner_user_id: object) -> list[CustomRecipe]:
        """Return all recipes of a user."""
        return self.repository.list_by_owner(to_user_id(owner_user_id))

    def list_public(self) -> list[CustomRecipe]:
        """Return recipes shared publicly."""
        return self.repository.list_public()

    def search(self, owner_user_id: object, text: str) -> list[CustomRecipe]:
        """Search a user's recipes by title, description, ingredient or tag."""
        recipes = self.list_by_owner(owner_user_id)
        if not text:
            return recipes
        return [recipe for recipe in recipes if recipe.matches(text)]

    def _get_owned(self, recipe_id: object, acting_user_id: object) -> CustomRecipe:
        existing = self.repository.get_recipe(to_recipe_id(recipe_id))
        if existing is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        if existing.owner_user_id != to_user_id(acting_user_id):
            _logger.warning(
                "User %s tried to modify recipe %s owned by %s",
                acting_user_id,
                existing.id,
                existing.owner_user_id,
            )
            raise UnauthorizedError(f"Recipe {existing.id} belongs to another user")
        return existing


def _editable(data: dict[str, object]) -> dict[str, object]:
    return {key: data[key] for key in _EDITABLE_FIELDS if key in data}


def _build_payload(data: dict[str, object]) -> dict[str, object]:  # noqa: PLR0912
    """Validate recipe fields and return a normalized payload."""
    errors: dict[str, str] = {}

    title = str(data.get("title") or "").strip()
    if not title:
        errors["title"] = "Recipe title is required"
    description = str(data.get("description") or "").strip()
    if not description:
        errors["description"] = "Description is required"

    ingredients = _clean_lines(data.get("ingredients"))
    if not ingredients:
        errors["ingredients"] = "At least one ingredient is required"
    instructions = _clean_lines(data.get("instructions"))
    if not instructions:
        errors["instructions"] = "At least one instruction step is required"

    difficulty = str(data.get("difficulty") or "").strip().lower()
    if difficulty not in DIFFICULTIES:
        errors["difficulty"] = f"Difficulty must be one of {', '.join(DIFFICULTIES)}"

    prep_time = _non_negative_int(data.get("prep_time"), "prep_time", errors) or 0
    cook_time = _non_negative_int(data.get("cook_time"), "cook_time", errors) or 0
    servings = _non_negative_int(data.get("servings"), "servings", errors)

    if errors:
        raise ValidationError(errors)

    image = str(data.get("image") or "").strip()
    if not image:
        image = _PLACEHOLDER_IMAGE.format(title=quote(title))

    return {
        "title": title,
        "description": description,
        "image": image,
        "servings": servings,
        "prep_time": prep_time,
        "cook_time": cook_time,
        "total_time": prep_time + cook_time,
        "difficulty": difficulty,
        "cuisine": _optional_text(data.get("cuisine")),
        "category": _optional_text(data.get("category")),
        "ingredients": ingredients,
        "instructions": instructions,
        "tags": _clean_tags(data.get("tags")),
        "is_public": bool(data.get("is_public", False)),
        "notes": _optional_text(data.get("notes")),
    }


def _clean_lines(value: object) -> list[str]:
    if not isinstance(value, list | tuple):
        return []
    return [str(line).strip() for line in value if str(line).strip()]


def _clean_tags(value: object) -> list[str]:
    tags: list[str] = []
    for tag in _clean_lines(value):
        if tag not in tags:
            tags.append(tag)
    return tags


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _non_negative_int(value: object, name: str, errors: dict[str, str]) -> int | None:
    if value is None or value == "":
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        errors[name] = f"{name} must be a whole number"
        return None
    if number < 0:
        errors[name] = f"{name} must not be negative"
        return None
    return number
