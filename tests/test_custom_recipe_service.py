"""Tests for user-authored recipes."""

import pytest

from recipe_finder.domain.errors import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from recipe_finder.services.custom_recipes import CustomRecipeService
from tests.conftest import InMemoryCustomRecipeRepository

OWNER = "user-1"
OTHER = "user-2"


def _recipe_data(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "title": "Grandma's Pie",
        "description": "Apple pie with a lattice crust",
        "ingredients": ["6 apples", "1 pie crust", " "],
        "instructions": ["Slice apples", "Bake for 45 minutes"],
        "tags": ["dessert", "baking", "dessert"],
        "prep_time": 20,
        "cook_time": 45,
    }
    data.update(overrides)
    return data


def test_create_applies_defaults_and_normalizes() -> None:
    service = CustomRecipeService(InMemoryCustomRecipeRepository())

    recipe = service.create(OWNER, _recipe_data())

    assert recipe.owner_user_id == OWNER
    assert recipe.total_time == 65
    assert recipe.servings == 4
    assert recipe.difficulty == "medium"
    assert recipe.category == "main"
    assert recipe.is_public is False
    assert recipe.ingredients == ["6 apples", "1 pie crust"]
    assert recipe.tags == ["dessert", "baking"]
    assert recipe.image.startswith("https://via.placeholder.com/556x370?text=")


def test_create_reports_every_invalid_field() -> None:
    service = CustomRecipeService(InMemoryCustomRecipeRepository())

    with pytest.raises(ValidationError) as exc_info:
        service.create(
            OWNER,
            {"title": " ", "ingredients": [], "difficulty": "extreme", "prep_time": -5},
        )

    assert set(exc_info.value.errors) == {
        "title",
        "description",
        "ingredients",
        "instructions",
        "difficulty",
        "prep_time",
    }


def test_update_merges_patch_over_existing_record() -> None:
    service = CustomRecipeService(InMemoryCustomRecipeRepository())
    recipe = service.create(OWNER, _recipe_data())

    updated = service.update(recipe.id, OWNER, {"cook_time": 30, "is_public": True})

    assert updated.cook_time == 30
    assert updated.total_time == 50
    assert updated.is_public is True
    assert updated.title == recipe.title
    assert updated.owner_user_id == OWNER


def test_update_by_other_user_leaves_record_unmodified() -> None:
    repository = InMemoryCustomRecipeRepository()
    service = CustomRecipeService(repository)
    recipe = service.create(OWNER, _recipe_data())

    with pytest.raises(UnauthorizedError):
        service.update(recipe.id, OTHER, {"title": "Stolen Pie"})

    assert repository.recipes[recipe.id] == recipe


def test_other_user_can_read_but_not_delete() -> None:
    service = CustomRecipeService(InMemoryCustomRecipeRepository())
    recipe = service.create(OWNER, _recipe_data())

    assert service.get_by_id(recipe.id) == recipe
    with pytest.raises(UnauthorizedError):
        service.delete(recipe.id, OTHER)

    assert service.get_by_id(recipe.id) is not None
    service.delete(recipe.id, OWNER)
    assert service.get_by_id(recipe.id) is None


def test_missing_recipe_is_not_found() -> None:
    service = CustomRecipeService(InMemoryCustomRecipeRepository())

    with pytest.raises(NotFoundError):
        service.delete("missing", OWNER)
    with pytest.raises(NotFoundError):
        service.update("missing", OWNER, {"title": "x"})


def test_search_matches_ingredients_and_tags() -> None:
    service = CustomRecipeService(InMemoryCustomRecipeRepository())
    pie = service.create(OWNER, _recipe_data())
    soup = service.create(
        OWNER,
        _recipe_data(
            title="Tomato Soup",
            description="Warm soup",
            ingredients=["4 tomatoes"],
            tags=["vegan"],
        ),
    )
    service.create(OTHER, _recipe_data(title="Apple Crumble"))

    assert service.search(OWNER, "APPLES") == [pie]
    assert service.search(OWNER, "vegan") == [soup]
    assert len(service.search(OWNER, "")) == 2


def test_list_public_returns_shared_recipes_only() -> None:
    service = CustomRecipeService(InMemoryCustomRecipeRepository())
    shared = service.create(OWNER, _recipe_data(is_public=True))
    service.create(OTHER, _recipe_data())

    assert service.list_public() == [shared]
