"""Tests for the favorites ledger."""

import pytest

from recipe_finder.domain.errors import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from recipe_finder.services.favorites import FavoritesLedger
from tests.conftest import InMemoryFavoriteRepository, make_recipe

USER = "user-1"


def test_toggle_parity() -> None:
    ledger = FavoritesLedger(InMemoryFavoriteRepository())
    recipe = make_recipe(716429, "Pasta")

    first = ledger.toggle(USER, recipe)
    second = ledger.toggle(USER, recipe)
    third = ledger.toggle(USER, recipe)

    assert first.status == "added"
    assert second.status == "removed"
    assert third.is_favorited is True
    assert ledger.is_favorited(USER, 716429) is not None


def test_add_twice_keeps_one_record() -> None:
    repository = InMemoryFavoriteRepository()
    ledger = FavoritesLedger(repository)
    recipe = make_recipe(1, "Soup")

    ledger.add(USER, recipe)
    result = ledger.add(USER, recipe)

    assert result.status == "already_favorited"
    assert result.favorite is not None
    assert len(repository.favorites) == 1


def test_remove_when_not_favorited_is_not_an_error() -> None:
    ledger = FavoritesLedger(InMemoryFavoriteRepository())

    result = ledger.remove(USER, 1)

    assert result.status == "not_favorited"
    assert result.is_favorited is False


def test_int_and_string_recipe_ids_refer_to_the_same_favorite() -> None:
    ledger = FavoritesLedger(InMemoryFavoriteRepository())

    ledger.add(USER, make_recipe(42, "Stew"))

    assert ledger.is_favorited(USER, "42") is not None
    assert ledger.remove(USER, "42").status == "removed"


def test_add_stores_snapshot_with_truncated_summary() -> None:
    ledger = FavoritesLedger(InMemoryFavoriteRepository())

    result = ledger.add(
        USER,
        make_recipe(5, "Salad", readyInMinutes=10, servings=2, summary="x" * 500),
    )

    favorite = result.favorite
    assert favorite.ready_in_minutes == 10
    assert favorite.servings == 2
    assert len(favorite.summary) == 200


def test_duplicates_resolve_to_lowest_id() -> None:
    repository = InMemoryFavoriteRepository()
    ledger = FavoritesLedger(repository)
    repository.insert(USER, "9")
    repository.insert(USER, "9")

    favorite = ledger.is_favorited(USER, 9)
    ledger.remove(USER, 9)

    assert favorite.id == "1"
    assert list(repository.favorites) == ["2"]


def test_remove_by_id_checks_owner() -> None:
    repository = InMemoryFavoriteRepository()
    ledger = FavoritesLedger(repository)
    favorite = ledger.add(USER, make_recipe(3, "Tacos")).favorite

    with pytest.raises(UnauthorizedError):
        ledger.remove_by_id("user-2", favorite.id)
    with pytest.raises(NotFoundError):
        ledger.remove_by_id(USER, "999")

    ledger.remove_by_id(USER, favorite.id)
    assert ledger.count_for_user(USER) == 0


def test_sync_adds_only_new_favorites() -> None:
    ledger = FavoritesLedger(InMemoryFavoriteRepository())
    ledger.add(USER, make_recipe(1, "Soup"))

    added = ledger.sync(
        USER, [make_recipe(1, "Soup"), make_recipe(2, "Bread"), make_recipe(3, "Jam")]
    )

    assert added == 2
    assert ledger.count_for_user(USER) == 3


@pytest.mark.parametrize("recipe_id", [" ", "", None])
def test_blank_recipe_id_is_a_validation_error(recipe_id: object) -> None:
    repository = InMemoryFavoriteRepository()
    ledger = FavoritesLedger(repository)

    with pytest.raises(ValidationError) as excinfo:
        ledger.toggle(USER, {"id": recipe_id, "title": "Soup"})

    assert set(excinfo.value.errors) == {"id"}
    assert ledger.list_for_user(USER) == []
