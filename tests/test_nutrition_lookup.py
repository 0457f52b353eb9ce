"""Unit tests for the USDA nutrition lookup client."""

import httpx
import pytest

from nutriscan_api.core.exceptions import TransportError
from nutriscan_api.services.nutrition_lookup.usda_provider import (
    USDANutritionLookup,
    get_nutrient_value,
    scale_per_100g,
)


BASE_URL = "https://api.nal.usda.gov/fdc/v1"

WHITE_RICE_FOOD = {
    "fdcId": 168878,
    "description": "Rice, white, long-grain, regular, cooked",
    "foodNutrients": [
        {"nutrientId": 1003, "nutrientName": "Protein", "value": 2.7},
        {"nutrientId": 1004, "nutrientName": "Total lipid (fat)", "value": 0.3},
        {"nutrientId": 1005, "nutrientName": "Carbohydrate, by difference", "value": 28},
        {"nutrientId": 1008, "nutrientName": "Energy", "value": 130},
    ],
}


def make_provider(handler) -> USDANutritionLookup:
    """Provider whose HTTP client is served by ``handler``."""
    provider = USDANutritionLookup(api_key="test-key", base_url=BASE_URL, timeout=5.0)
    provider._client = httpx.AsyncClient(
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )
    return provider


def foods_response(*foods: dict) -> httpx.Response:
    return httpx.Response(200, json={"totalHits": len(foods), "foods": list(foods)})


class TestHelpers:
    """Tests for nutrient extraction and scaling."""

    def test_get_nutrient_value_matches_substring_case_insensitively(self):
        """Nutrient names match by case-insensitive substring."""
        nutrients = [{"nutrientName": "ENERGY", "value": 52}]

        assert get_nutrient_value(nutrients, "Energy") == 52.0

    def test_get_nutrient_value_defaults_to_zero(self):
        """A missing nutrient reads as zero."""
        assert get_nutrient_value([{"nutrientName": "Protein", "value": 3}], "Total lipid") == 0.0

    def test_get_nutrient_value_takes_first_match(self):
        """The first matching nutrient wins."""
        nutrients = [
            {"nutrientName": "Energy", "value": 130},
            {"nutrientName": "Energy (Atwater General Factors)", "value": 140},
        ]

        assert get_nutrient_value(nutrients, "Energy") == 130.0

    def test_scale_per_100g_rounds_to_one_decimal(self):
        """Per-100g values scale and round to one decimal."""
        assert scale_per_100g(2.7, 150) == 4.1
        assert scale_per_100g(0.3, 150) == 0.5


class TestUSDANutritionLookup:
    """Tests for USDANutritionLookup."""

    @pytest.mark.asyncio
    async def test_lookup_scales_white_rice_to_150g(self):
        """Per-100g values are scaled to the estimated mass."""
        provider = make_provider(lambda request: foods_response(WHITE_RICE_FOOD))

        result = await provider.lookup("white rice", 150)

        assert result.name == "white rice"
        assert result.estimated_grams == 150
        assert result.calories == 195.0
        assert result.protein == 4.1
        assert result.carbs == 42.0
        assert result.fat == 0.5

    @pytest.mark.asyncio
    async def test_lookup_sends_search_query_with_page_size_one(self):
        """Search sends the query, pageSize=1 and the API key."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return foods_response(WHITE_RICE_FOOD)

        provider = make_provider(handler)

        await provider.lookup("grilled chicken & rice", 100)

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/fdc/v1/foods/search"
        assert request.url.params["query"] == "grilled chicken & rice"
        assert request.url.params["pageSize"] == "1"
        assert request.url.params["api_key"] == "test-key"
        assert "grilled+chicken+%26+rice" in str(request.url) or "grilled%20chicken%20%26%20rice" in str(request.url)

    @pytest.mark.asyncio
    async def test_lookup_zero_grams_returns_zeros(self):
        """Zero grams scales every value to zero."""
        provider = make_provider(lambda request: foods_response(WHITE_RICE_FOOD))

        result = await provider.lookup("white rice", 0)

        assert (result.calories, result.protein, result.carbs, result.fat) == (0, 0, 0, 0)

    @pytest.mark.asyncio
    async def test_lookup_scaling_is_linear(self):
        """Doubling the mass doubles the calories."""
        apple = {
            "description": "Apples, raw",
            "foodNutrients": [{"nutrientName": "Energy", "value": 52}],
        }
        provider = make_provider(lambda request: foods_response(apple))

        single = await provider.lookup("apple", 100)
        double = await provider.lookup("apple", 200)

        assert double.calories == pytest.approx(2 * single.calories, abs=0.1)

    @pytest.mark.asyncio
    async def test_lookup_no_match_returns_zero_record(self):
        """A food the database does not know is not an error."""
        provider = make_provider(lambda request: foods_response())

        result = await provider.lookup("dragon fruit salsa", 80)

        assert result.name == "dragon fruit salsa"
        assert result.estimated_grams == 80
        assert (result.calories, result.protein, result.carbs, result.fat) == (0, 0, 0, 0)

    @pytest.mark.asyncio
    async def test_lookup_missing_foods_key_returns_zero_record(self):
        """A body without foods returns a zero record."""
        provider = make_provider(lambda request: httpx.Response(200, json={}))

        result = await provider.lookup("water", 250)

        assert result.calories == 0

    @pytest.mark.asyncio
    async def test_lookup_non_2xx_raises_transport_error(self):
        """Non-2xx responses raise TransportError with the status."""
        provider = make_provider(lambda request: httpx.Response(429, text="rate limited"))

        with pytest.raises(TransportError) as exc_info:
            await provider.lookup("white rice", 150)

        assert exc_info.value.error_code == "TRANSPORT_ERROR"
        assert exc_info.value.details["status_code"] == 429

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, json=[1, 2]),
            httpx.Response(200, text="<html>Service Unavailable</html>"),
        ],
    )
    async def test_lookup_non_object_body_raises_transport_error(self, response):
        """A 200 whose body is not a JSON object raises TransportError."""
        provider = make_provider(lambda request: response)

        with pytest.raises(TransportError) as exc_info:
            await provider.lookup("white rice", 150)

        assert exc_info.value.details["status_code"] == 200

    @pytest.mark.asyncio
    async def test_lookup_connection_failure_raises_transport_error(self):
        """Connection failures raise TransportError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = make_provider(handler)

        with pytest.raises(TransportError):
            await provider.lookup("white rice", 150)

    @pytest.mark.asyncio
    async def test_health_check_reports_failure(self):
        """Health check is False when USDA rejects the request."""
        provider = make_provider(lambda request: httpx.Response(403))

        assert await provider.health_check() is False

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        """Close drops the HTTP client."""
        provider = make_provider(lambda request: foods_response())

        await provider.close()

        assert provider._client is None
