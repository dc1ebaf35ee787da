"""Tests for container wiring."""

import asyncio

from recipe_finder.config import Settings
from recipe_finder.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)
    assert container.recipe_gateway.is_remote_configured() is True
    assert container.session_manager.user_service is container.user_service
    asyncio.run(container.close_resources())


def test_placeholder_api_key_leaves_gateway_cache_only(settings: Settings) -> None:
    container = build_container(
        settings.model_copy(update={"spoonacular_api_key": "YOUR_SPOONACULAR_API_KEY"})
    )
    assert container.recipe_gateway.is_remote_configured() is False
    asyncio.run(container.close_resources())
