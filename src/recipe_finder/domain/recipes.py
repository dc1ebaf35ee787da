"""Domain models for remote, cached and user-authored recipes."""

from dataclasses import dataclass, field
from datetime import date, datetime

from recipe_finder.domain.models import RecipeId, UserId

DIFFICULTIES = ("easy", "medium", "hard")


@dataclass(frozen=True)
class CustomRecipe:
    """A recipe authored and owned by a single user."""

    id: RecipeId
    owner_user_id: UserId
    title: str
    description: str
    image: str | None
    servings: int | None
    prep_time: int
    cook_time: int
    total_time: int
    difficulty: str
    cuisine: str | None
    category: str | None
    ingredients: list[str]
    instructions: list[str]
    tags: list[str]
    is_public: bool
    notes: str | None
    created_at: datetime | None
    updated_at: datetime | None

    def to_payload(self) -> dict[str, object]:
        """Return the mutable fields as a store payload."""
        return {
            "owner_user_id": self.owner_user_id,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "servings": self.servings,
            "prep_time": self.prep_time,
            "cook_time": self.cook_time,
            "total_time": self.total_time,
            "difficulty": self.difficulty,
            "cuisine": self.cuisine,
            "category": self.category,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "tags": list(self.tags),
            "is_public": self.is_public,
            "notes": self.notes,
        }

    def matches(self, text: str) -> bool:
        """Case-insensitive match on title, description, ingredients or tags."""
        needle = text.lower()
        if needle in self.title.lower():
            return True
        if self.description and needle in self.description.lower():
            return True
        if any(needle in ingredient.lower() for ingredient in self.ingredients):
            return True
        return any(needle in tag.lower() for tag in self.tags)


@dataclass(frozen=True)
class CachedRecipe:
    """A remote recipe payload persisted verbatim."""

    id: int
    title: str
    payload: dict[str, object]
    cached_at: datetime | None

    def as_recipe(self) -> dict[str, object]:
        """Return the payload the way callers receive remote recipes."""
        recipe = dict(self.payload)
        if self.cached_at is not None:
            recipe["cachedAt"] = self.cached_at.isoformat()
        return recipe

    @property
    def is_valid(self) -> bool:
        """Return True when the entry carries a usable id and title."""
        return bool(self.id) and bool(self.title)


@dataclass(frozen=True)
class DailyRecipe:
    """The recipe pinned for a calendar day."""

    day: date
    recipe: dict[str, object]


@dataclass(frozen=True)
class AdvancedSearchFilters:
    """Filters for the complex recipe search.

    ``diet`` and ``intolerances`` are comma-separated lowercase strings; the
    caller joins its lists before handing the filters over.
    """

    query: str | None = None
    diet: str | None = None
    intolerances: str | None = None
    include_ingredients: list[str] = field(default_factory=list)
    exclude_ingredients: list[str] = field(default_factory=list)
    max_ready_time: int | None = None
    min_calories: int | None = None
    max_calories: int | None = None
    number: int = 12

    def to_params(self) -> dict[str, object]:
        """Return the non-empty filters as Spoonacular query parameters."""
        params: dict[str, object] = {
            "query": self.query,
            "diet": self.diet,
            "intolerances": self.intolerances,
            "includeIngredients": ",".join(self.include_ingredients),
            "excludeIngredients": ",".join(self.exclude_ingredients),
            "maxReadyTime": self.max_ready_time,
            "minCalories": self.min_calories,
            "maxCalories": self.max_calories,
            "number": self.number,
        }
        return {key: value for key, value in params.items() if value not in (None, "")}


def join_tags(values: list[str], *, strip_spaces: bool = False) -> str | None:
    """Join diet or intolerance labels into the comma-separated form."""
    cleaned = [value.strip().lower() for value in values]
    if strip_spaces:
        cleaned = [value.replace(" ", "") for value in cleaned]
    joined = ",".join(value for value in cleaned if value)
    return joined or None
