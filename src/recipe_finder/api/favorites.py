"""Favorites endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder

from recipe_finder.api.dependencies import require_user
from recipe_finder.api.schemas import (  # noqa: TC001
    FavoriteSyncRequest,
    RecipeSnapshot,
)
from recipe_finder.domain.models import PublicUser  # noqa: TC001

if TYPE_CHECKING:
    from recipe_finder.containers import AppContainer

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("")
async def list_favorites(
    request: Request, user: PublicUser = Depends(require_user)
) -> dict[str, object]:
    """Return the user's favorites, newest first."""
    container: AppContainer = request.app.state.container
    favorites = container.favorites_ledger.list_for_user(user.id)
    return {"favorites": jsonable_encoder(favorites), "count": len(favorites)}


@router.post("/toggle")
async def toggle_favorite(
    body: RecipeSnapshot,
    request: Request,
    user: PublicUser = Depends(require_user),
) -> dict[str, object]:
    """Flip the favorited state of a recipe."""
    container: AppContainer = request.app.state.container
    result = container.favorites_ledger.toggle(user.id, body.as_recipe())
    return {
        "status": result.status,
        "message": result.message,
        "is_favorited": result.is_favorited,
        "favorite": jsonable_encoder(result.favorite),
    }


@router.post("/sync")
async def sync_favorites(
    body: FavoriteSyncRequest,
    request: Request,
    user: PublicUser = Depends(require_user),
) -> dict[str, int]:
    """Merge favorites collected before login into the user's ledger."""
    container: AppContainer = request.app.state.container
    added = container.favorites_ledger.sync(
        user.id, [recipe.as_recipe() for recipe in body.recipes]
    )
    return {"added": added}


@router.delete("/{favorite_id}")
async def delete_favorite(
    favorite_id: str, request: Request, user: PublicUser = Depends(require_user)
) -> dict[str, str]:
    """Remove a favorite by its own id."""
    container: AppContainer = request.app.state.container
    container.favorites_ledger.remove_by_id(user.id, favorite_id)
    return {"status": "removed"}
