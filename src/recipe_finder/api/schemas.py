"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from recipe_finder.domain.recipes import AdvancedSearchFilters, join_tags


class RegisterRequest(BaseModel):
    """Registration form."""

    email: str
    password: str
    confirm_password: str | None = None
    first_name: str
    last_name: str


class LoginRequest(BaseModel):
    """Login form."""

    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields."""

    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None


class PasswordChangeRequest(BaseModel):
    """Password change form."""

    current_password: str
    new_password: str


class CustomRecipeRequest(BaseModel):
    """Custom recipe fields; omitted fields are left unchanged on update."""

    title: str | None = None
    description: str | None = None
    image: str | None = None
    servings: int | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    difficulty: str | None = None
    cuisine: str | None = None
    category: str | None = None
    ingredients: list[str] | None = None
    instructions: list[str] | None = None
    tags: list[str] | None = None
    is_public: bool | None = None
    notes: str | None = None


class AdvancedSearchRequest(BaseModel):
    """Advanced search form with list-valued diet and intolerance filters."""

    query: str | None = None
    diets: list[str] = Field(default_factory=list)
    intolerances: list[str] = Field(default_factory=list)
    include_ingredients: list[str] = Field(default_factory=list)
    exclude_ingredients: list[str] = Field(default_factory=list)
    max_ready_time: int | None = Field(default=None, ge=1)
    min_calories: int | None = Field(default=None, ge=0)
    max_calories: int | None = Field(default=None, ge=0)
    number: int = Field(default=12, ge=1, le=100)

    def to_filters(self) -> AdvancedSearchFilters:
        """Join list filters into the comma-separated form the gateway expects."""
        return AdvancedSearchFilters(
            query=(self.query or "").strip() or None,
            diet=join_tags(self.diets, strip_spaces=True),
            intolerances=join_tags(self.intolerances),
            include_ingredients=[
                item.strip() for item in self.include_ingredients if item.strip()
            ],
            exclude_ingredients=[
                item.strip() for item in self.exclude_ingredients if item.strip()
            ],
            max_ready_time=self.max_ready_time,
            min_calories=self.min_calories,
            max_calories=self.max_calories,
            number=self.number,
        )


class RecipeSnapshot(BaseModel):
    """The recipe fields stored with a favorite."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | str
    title: str = ""
    image: str | None = None
    ready_in_minutes: int | None = Field(default=None, alias="readyInMinutes")
    servings: int | None = None
    summary: str | None = None

    def as_recipe(self) -> dict[str, object]:
        """Return the snapshot in the remote recipe shape."""
        return self.model_dump(by_alias=True)


class FavoriteSyncRequest(BaseModel):
    """Recipes favorited before the user logged in."""

    recipes: list[RecipeSnapshot]


class MealPlanRequest(BaseModel):
    """Meal plan form."""

    name: str
    week: str | None = None
    plan_data: dict[str, object] = Field(default_factory=dict)
