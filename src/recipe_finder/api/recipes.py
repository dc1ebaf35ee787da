"""Recipe discovery endpoints backed by the recipe gateway."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from recipe_finder.api.schemas import AdvancedSearchRequest  # noqa: TC001

if TYPE_CHECKING:
    from recipe_finder.containers import AppContainer

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("/random")
async def random_recipe(request: Request) -> dict[str, object]:
    """Return one random recipe, or null when nothing is available."""
    container: AppContainer = request.app.state.container
    gateway = container.recipe_gateway
    return {
        "recipe": await gateway.get_random_recipe(),
        "remote_configured": gateway.is_remote_configured(),
    }


@router.get("/daily")
async def daily_recipe(request: Request) -> dict[str, object]:
    """Return the recipe pinned for today."""
    container: AppContainer = request.app.state.container
    gateway = container.recipe_gateway
    return {
        "recipe": await gateway.get_daily_recipe(),
        "remote_configured": gateway.is_remote_configured(),
    }


@router.get("/search")
async def search_recipes(
    request: Request, q: str = "", number: int = 12
) -> dict[str, object]:
    """Search recipes by free text."""
    container: AppContainer = request.app.state.container
    gateway = container.recipe_gateway
    results = await gateway.search_recipes(q.strip(), limit=max(1, min(number, 100)))
    return {
        "results": results,
        "remote_configured": gateway.is_remote_configured(),
    }


@router.post("/advanced-search")
async def advanced_search(
    body: AdvancedSearchRequest, request: Request
) -> dict[str, object]:
    """Search recipes with diet, intolerance and nutrition filters."""
    container: AppContainer = request.app.state.container
    gateway = container.recipe_gateway
    results = await gateway.advanced_search(body.to_filters())
    return {
        "results": results,
        "remote_configured": gateway.is_remote_configured(),
    }


@router.get("/{recipe_id}")
async def recipe_detail(recipe_id: int, request: Request) -> dict[str, object]:
    """Return full details for one remote recipe."""
    container: AppContainer = request.app.state.container
    recipe = await container.recipe_gateway.get_recipe_by_id(recipe_id)
    if recipe is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found"
        )
    return {"recipe": recipe}
