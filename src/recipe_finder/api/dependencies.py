"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from recipe_finder.domain.models import PublicUser  # noqa: TC001

if TYPE_CHECKING:
    from recipe_finder.containers import AppContainer


async def require_user(
    request: Request,
    x_session_token: str | None = Header(default=None),
) -> PublicUser:
    """Resolve the session header to a logged-in user."""
    container: AppContainer = request.app.state.container
    user = container.session_manager.current_user(x_session_token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Please log in"
        )
    return user
