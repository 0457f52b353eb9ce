"""
USDA FoodData Central provider for nutrition lookup.

Uses the USDA FDC search API to resolve a food name to macro values.
API Documentation: https://fdc.nal.usda.gov/api-guide.html
"""

import logging
from typing import Any

import httpx

from nutriscan_api.core.exceptions import TransportError
from nutriscan_api.models.food_scan import FoodNutrition
from nutriscan_api.utils.rounding import round1

from .base import NutritionLookupService

logger = logging.getLogger(__name__)


# Substrings matched (case-insensitively) against USDA nutrientName
NUTRIENT_NAMES = {
    "calories": "Energy",
    "protein": "Protein",
    "carbs": "Carbohydrate",
    "fat": "Total lipid",
}


def get_nutrient_value(nutrients: list[dict[str, Any]], name: str) -> float:
    """Return the first nutrient value whose name contains ``name``, else 0."""
    needle = name.lower()
    for nutrient in nutrients:
        nutrient_name = str(nutrient.get("nutrientName", ""))
        if needle in nutrient_name.lower():
            value = nutrient.get("value")
            return float(value) if value is not None else 0.0
    return 0.0


def scale_per_100g(per_100g: float, grams: float) -> float:
    """Scale a per-100g value to ``grams``, rounded to one decimal."""
    return round1(per_100g * grams / 100)


class USDANutritionLookup(NutritionLookupService):
    """
    Nutrition lookup using USDA FoodData Central API.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.nal.usda.gov/fdc/v1",
        timeout: float = 30.0,
    ):
        """
        Initialize USDA provider.

        Args:
            api_key: USDA FoodData Central API key
            base_url: API base URL
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def provider_name(self) -> str:
        return "usda"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    async def search(self, query: str, page_size: int = 1) -> list[dict[str, Any]]:
        """
        Run a FoodData Central search and return the raw ``foods`` list.

        Raises:
            TransportError: On connection failure or a non-2xx response
        """
        params = {
            "query": query,
            "pageSize": page_size,
            "api_key": self.api_key,
        }

        client = await self._get_client()
        try:
            response = await client.get("/foods/search", params=params)
        except httpx.RequestError as e:
            logger.error(f"USDA request failed: {e}")
            raise TransportError(
                message=f"Failed to connect to USDA API: {e}",
                provider=self.provider_name,
            ) from e

        if not response.is_success:
            logger.error(f"USDA search failed: {response.status_code} - {response.text[:200]}")
            raise TransportError(
                message=f"USDA API error: {response.status_code}",
                provider=self.provider_name,
                details={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, dict):
            logger.error(f"USDA search returned a non-object body: {response.text[:200]}")
            raise TransportError(
                message="USDA API returned an unexpected response body",
                provider=self.provider_name,
                details={"status_code": response.status_code},
            )

        return data.get("foods") or []

    async def lookup(self, name: str, estimated_grams: float) -> FoodNutrition:
        """
        Look up the single best USDA match and scale it to ``estimated_grams``.

        USDA search values are per 100 g.
        """
        logger.info(f"Searching USDA for: {name} ({estimated_grams}g)")

        foods = await self.search(name, page_size=1)

        if not foods:
            logger.warning(f"No USDA results for: {name}")
            return FoodNutrition.empty(name, estimated_grams)

        nutrients = foods[0].get("foodNutrients") or []

        return FoodNutrition(
            name=name,
            estimated_grams=estimated_grams,
            **{
                field: scale_per_100g(get_nutrient_value(nutrients, label), estimated_grams)
                for field, label in NUTRIENT_NAMES.items()
            },
        )

    async def health_check(self) -> bool:
        """Check if USDA API is available."""
        try:
            await self.search("apple", page_size=1)
            return True
        except TransportError as e:
            logger.error(f"USDA health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
