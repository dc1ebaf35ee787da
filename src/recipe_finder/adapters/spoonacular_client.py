"""Spoonacular recipe API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from recipe_finder.domain.errors import RemoteUnavailableError


class RecipeApiClient(Protocol):
    """Interface for remote recipe API interactions."""

    async def random_recipes(self, number: int = 1) -> dict[str, object]:
        """Return random recipes with nutrition as raw API data."""

    async def complex_search(self, params: dict[str, object]) -> dict[str, object]:
        """Run a complex search and return raw API data."""

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Fetch a recipe with nutrition and return raw API data."""


@dataclass
class HttpxSpoonacularClient(RecipeApiClient):
    """HTTPX-backed Spoonacular client.

    Network errors, timeouts and non-2xx responses surface as
    ``RemoteUnavailableError``.
    """

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxSpoonacularClient":
        """Create a Spoonacular client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def random_recipes(self, number: int = 1) -> dict[str, object]:
        """Fetch random recipes."""
        return await self._get(
            "/recipes/random",
            {"number": number, "includeNutrition": "true"},
        )

    async def complex_search(self, params: dict[str, object]) -> dict[str, object]:
        """Search recipes with full information and nutrition."""
        return await self._get(
            "/recipes/complexSearch",
            {
                **params,
                "addRecipeInformation": "true",
                "addRecipeNutrition": "true",
            },
        )

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Fetch a single recipe by id."""
        return await self._get(
            f"/recipes/{recipe_id}/information",
            {"includeNutrition": "true"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, path: str, params: dict[str, object]) -> dict[str, object]:
        try:
            response = await self.http_client.get(
                f"{self.base_url}{path}",
                params={"apiKey": self.api_key, **params},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            # httpx messages embed the request URL, which carries the key.
            raise RemoteUnavailableError(
                f"GET {path} failed with status {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise RemoteUnavailableError(
                f"GET {path} failed: {type(exc).__name__}"
            ) from exc
