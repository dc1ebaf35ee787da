"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from recipe_finder.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health(request: Request) -> dict[str, object]:
    """Admin health check with remote API availability."""
    container: AppContainer = request.app.state.container
    return {
        "status": "ok",
        "remote_configured": container.recipe_gateway.is_remote_configured(),
    }


@router.get("/usage", dependencies=[Depends(require_admin)])
async def api_usage(request: Request) -> dict[str, object]:
    """Return today's remote API call counter."""
    container: AppContainer = request.app.state.container
    stats = container.quota_tracker.usage()
    return {
        "day": stats.day.isoformat() if stats.day else None,
        "count": stats.count,
        "limit": stats.limit,
        "remaining": stats.remaining,
        "last_reset": stats.last_reset.isoformat() if stats.last_reset else None,
    }


@router.get("/cache", dependencies=[Depends(require_admin)])
async def list_cache(request: Request) -> dict[str, object]:
    """Return every cached remote recipe."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_cache.list_all()
    return {"recipes": recipes, "count": len(recipes)}


@router.delete("/cache", dependencies=[Depends(require_admin)])
async def clear_cache(request: Request) -> dict[str, int]:
    """Remove every cached remote recipe."""
    container: AppContainer = request.app.state.container
    return {"removed": container.recipe_cache.clear()}
