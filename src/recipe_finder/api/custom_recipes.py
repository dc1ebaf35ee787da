"""Endpoints for user-authored recipes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder

from recipe_finder.api.dependencies import require_user
from recipe_finder.api.schemas import CustomRecipeRequest  # noqa: TC001
from recipe_finder.domain.models import PublicUser  # noqa: TC001

if TYPE_CHECKING:
    from recipe_finder.containers import AppContainer

router = APIRouter(prefix="/custom-recipes", tags=["custom-recipes"])


@router.get("")
async def list_custom_recipes(
    request: Request, q: str = "", user: PublicUser = Depends(require_user)
) -> dict[str, object]:
    """Return the user's recipes, optionally filtered by text."""
    container: AppContainer = request.app.state.container
    recipes = container.custom_recipe_service.search(user.id, q.strip())
    return {"recipes": jsonable_encoder(recipes)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_custom_recipe(
    body: CustomRecipeRequest,
    request: Request,
    user: PublicUser = Depends(require_user),
) -> dict[str, object]:
    """Create a recipe owned by the logged-in user."""
    container: AppContainer = request.app.state.container
    recipe = container.custom_recipe_service.create(
        user.id, body.model_dump(exclude_unset=True)
    )
    return {"recipe": jsonable_encoder(recipe)}


@router.get("/public")
async def list_public_recipes(request: Request) -> dict[str, object]:
    """Return recipes their owners chose to share."""
    container: AppContainer = request.app.state.container
    recipes = container.custom_recipe_service.list_public()
    return {"recipes": jsonable_encoder(recipes)}


@router.get("/{recipe_id}")
async def custom_recipe_detail(recipe_id: str, request: Request) -> dict[str, object]:
    """Return one recipe; reads are not restricted to the owner."""
    container: AppContainer = request.app.state.container
    recipe = container.custom_recipe_service.get_by_id(recipe_id)
    if recipe is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found"
        )
    return {"recipe": jsonable_encoder(recipe)}


@router.put("/{recipe_id}")
async def update_custom_recipe(
    recipe_id: str,
    body: CustomRecipeRequest,
    request: Request,
    user: PublicUser = Depends(require_user),
) -> dict[str, object]:
    """Update a recipe owned by the logged-in user."""
    container: AppContainer = request.app.state.container
    recipe = container.custom_recipe_service.update(
        recipe_id, user.id, body.model_dump(exclude_unset=True)
    )
    return {"recipe": jsonable_encoder(recipe)}


@router.delete("/{recipe_id}")
async def delete_custom_recipe(
    recipe_id: str, request: Request, user: PublicUser = Depends(require_user)
) -> dict[str, str]:
    """Delete a recipe owned by the logged-in user."""
    container: AppContainer = request.app.state.container
    container.custom_recipe_service.delete(recipe_id, user.id)
    return {"status": "deleted"}
