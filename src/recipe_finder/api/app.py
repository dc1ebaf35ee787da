"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from recipe_finder.api.accounts import router as accounts_router
from recipe_finder.api.admin import router as admin_router
from recipe_finder.api.custom_recipes import router as custom_recipes_router
from recipe_finder.api.favorites import router as favorites_router
from recipe_finder.api.recipes import router as recipes_router
from recipe_finder.app_logging import configure_logging
from recipe_finder.containers import AppContainer
from recipe_finder.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    RecipeFinderError,
    UnauthorizedError,
    ValidationError,
)

_ERROR_STATUS: dict[type[RecipeFinderError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ConflictError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not app.state.container.recipe_gateway.is_remote_configured():
            logger.warning("Spoonacular API key not set, serving cached recipes only")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)
    app.include_router(recipes_router)
    app.include_router(accounts_router)
    app.include_router(custom_recipes_router)
    app.include_router(favorites_router)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "errors": exc.errors},
        )

    @app.exception_handler(RecipeFinderError)
    async def domain_error(request: Request, exc: RecipeFinderError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc))
        if status_code is None:
            logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url, exc)
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
