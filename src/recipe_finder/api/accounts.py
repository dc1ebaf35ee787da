"""Account endpoints: auth, profile dashboard and meal plans."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.encoders import jsonable_encoder

from recipe_finder.api.dependencies import require_user
from recipe_finder.api.schemas import (  # noqa: TC001
    LoginRequest,
    MealPlanRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)
from recipe_finder.domain.models import PublicUser  # noqa: TC001

if TYPE_CHECKING:
    from recipe_finder.containers import AppContainer
    from recipe_finder.domain.sessions import AuthSession

router = APIRouter(tags=["accounts"])


@router.post("/auth/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an account and open a session for it."""
    container: AppContainer = request.app.state.container
    session = container.session_manager.register(body.model_dump())
    return _session_response(session)


@router.post("/auth/login")
async def login(body: LoginRequest, request: Request) -> dict[str, object]:
    """Open a session for valid credentials."""
    container: AppContainer = request.app.state.container
    session = container.session_manager.login(body.email, body.password)
    return _session_response(session)


@router.post("/auth/logout")
async def logout(
    request: Request, x_session_token: str | None = Header(default=None)
) -> dict[str, str]:
    """Close the current session."""
    container: AppContainer = request.app.state.container
    container.session_manager.logout(x_session_token)
    return {"status": "ok"}


@router.get("/auth/me")
async def me(user: PublicUser = Depends(require_user)) -> dict[str, object]:
    """Return the logged-in user."""
    return {"user": jsonable_encoder(user)}


@router.patch("/auth/me")
async def update_me(
    body: ProfileUpdateRequest,
    request: Request,
    x_session_token: str | None = Header(default=None),
) -> dict[str, object]:
    """Update the logged-in user's names."""
    container: AppContainer = request.app.state.container
    user = container.session_manager.update_profile(
        x_session_token or "", body.model_dump(exclude_unset=True)
    )
    return {"user": jsonable_encoder(user)}


@router.post("/auth/password")
async def change_password(
    body: PasswordChangeRequest,
    request: Request,
    x_session_token: str | None = Header(default=None),
) -> dict[str, str]:
    """Change the logged-in user's password."""
    container: AppContainer = request.app.state.container
    container.session_manager.change_password(
        x_session_token or "", body.current_password, body.new_password
    )
    return {"status": "ok"}


@router.get("/profile")
async def profile(
    request: Request, user: PublicUser = Depends(require_user)
) -> dict[str, object]:
    """Return the dashboard for the logged-in user."""
    container: AppContainer = request.app.state.container
    dashboard = container.profile_service.dashboard(user.id)
    return {
        "user": jsonable_encoder(dashboard.user),
        "favorites": jsonable_encoder(dashboard.favorites),
        "custom_recipes": jsonable_encoder(dashboard.custom_recipes),
        "meal_plans": jsonable_encoder(dashboard.meal_plans),
        "counts": dashboard.counts,
    }


@router.get("/meal-plans")
async def list_meal_plans(
    request: Request, user: PublicUser = Depends(require_user)
) -> dict[str, object]:
    """Return the user's meal plans."""
    container: AppContainer = request.app.state.container
    plans = container.meal_plan_service.list_for_user(user.id)
    return {"meal_plans": jsonable_encoder(plans)}


@router.post("/meal-plans", status_code=status.HTTP_201_CREATED)
async def create_meal_plan(
    body: MealPlanRequest,
    request: Request,
    user: PublicUser = Depends(require_user),
) -> dict[str, object]:
    """Create a meal plan."""
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.create(
        user.id, body.name, week=body.week, plan_data=body.plan_data
    )
    return {"meal_plan": jsonable_encoder(plan)}


@router.delete("/meal-plans/{plan_id}")
async def delete_meal_plan(
    plan_id: str, request: Request, user: PublicUser = Depends(require_user)
) -> dict[str, str]:
    """Delete one of the user's meal plans."""
    container: AppContainer = request.app.state.container
    container.meal_plan_service.delete(plan_id, user.id)
    return {"status": "deleted"}


def _session_response(session: AuthSession) -> dict[str, object]:
    return {
        "token": session.token,
        "expires_at": session.expires_at.isoformat(),
        "user": jsonable_encoder(session.user),
    }
