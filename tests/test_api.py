"""Tests for the HTTP routes."""

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient

from fakes import FakeNutrition, FakeRecognizer
from nutriscan_api.api.dependencies import get_nutrition, get_profile_service, get_recognizer
from nutriscan_api.core.exceptions import TransportError
from nutriscan_api.main import app
from nutriscan_api.models.food_scan import GENERIC_SCAN_MESSAGE, NO_FOOD_MESSAGE
from nutriscan_api.models.profile import UserProfile


JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


def use_clients(recognizer, nutrition) -> None:
    app.dependency_overrides[get_recognizer] = lambda: recognizer
    app.dependency_overrides[get_nutrition] = lambda: nutrition


def upload(content: bytes = JPEG_BYTES, content_type: str = "image/jpeg") -> dict:
    return {"image": ("meal.jpg", content, content_type)}


class TestFoodScanRoute:
    """Tests for POST /food/scan."""

    @pytest.mark.asyncio
    async def test_scan_returns_camel_case_result(self, client: AsyncClient, rice_recognizer, rice_nutrition):
        """A successful scan returns camelCase per-item and total nutrition."""
        use_clients(rice_recognizer, rice_nutrition)

        response = await client.post("/food/scan", files=upload())

        assert response.status_code == 200
        data = response.json()
        assert data["totalCalories"] == 195.0
        assert data["totalProtein"] == 4.1
        assert data["items"][0] == {
            "name": "white rice",
            "estimatedGrams": 150.0,
            "calories": 195.0,
            "protein": 4.1,
            "carbs": 42.0,
            "fat": 0.5,
        }
        assert rice_recognizer.calls == [base64.b64encode(JPEG_BYTES).decode("utf-8")]

    @pytest.mark.asyncio
    async def test_no_food_is_422(self, client: AsyncClient, rice_nutrition):
        """An image with no food maps to 422 NO_FOOD_DETECTED."""
        use_clients(FakeRecognizer(items=[]), rice_nutrition)

        response = await client.post("/food/scan", files=upload())

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error_code"] == "NO_FOOD_DETECTED"
        assert detail["message"] == NO_FOOD_MESSAGE

    @pytest.mark.asyncio
    async def test_lookup_failure_is_502(self, client: AsyncClient, rice_recognizer):
        """A failed nutrition lookup maps to 502 with the generic message."""
        use_clients(rice_recognizer, FakeNutrition(failing={"white rice"}))

        response = await client.post("/food/scan", files=upload())

        assert response.status_code == 502
        assert response.json()["detail"]["message"] == GENERIC_SCAN_MESSAGE

    @pytest.mark.asyncio
    async def test_identification_failure_is_502(self, client: AsyncClient, rice_nutrition):
        """A failed identification call maps to 502 TRANSPORT_ERROR."""
        use_clients(FakeRecognizer(error=TransportError("quota", provider="fake")), rice_nutrition)

        response = await client.post("/food/scan", files=upload())

        assert response.status_code == 502
        assert response.json()["detail"]["error_code"] == "TRANSPORT_ERROR"

    @pytest.mark.asyncio
    async def test_rejects_non_jpeg(self, client: AsyncClient, rice_recognizer, rice_nutrition):
        """Non-JPEG uploads are rejected before identification runs."""
        use_clients(rice_recognizer, rice_nutrition)

        response = await client.post("/food/scan", files=upload(b"\x89PNG", "image/png"))

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "INVALID_IMAGE"
        assert rice_recognizer.calls == []

    @pytest.mark.asyncio
    async def test_rejects_empty_image(self, client: AsyncClient, rice_recognizer, rice_nutrition):
        """An empty upload is rejected with 400."""
        use_clients(rice_recognizer, rice_nutrition)

        response = await client.post("/food/scan", files=upload(b""))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unconfigured_identification_is_503(self, client: AsyncClient, rice_nutrition):
        """Missing LLM credentials give 503."""
        app.dependency_overrides[get_nutrition] = lambda: rice_nutrition

        with patch(
            "nutriscan_api.api.dependencies.get_food_identification_service",
            return_value=None,
        ):
            response = await client.post("/food/scan", files=upload())

        assert response.status_code == 503
        assert response.json()["details"] == {"service": "Food identification"}


class TestNutritionHealthRoute:
    """Tests for GET /food/nutrition/health."""

    @pytest.mark.asyncio
    async def test_reports_provider_health(self, client: AsyncClient, rice_nutrition):
        """A configured provider is probed and reported."""
        with patch(
            "nutriscan_api.api.routes.food_scan.get_nutrition_lookup_service",
            return_value=rice_nutrition,
        ):
            response = await client.get("/food/nutrition/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "provider": rice_nutrition.provider_name,
            "available": True,
        }

    @pytest.mark.asyncio
    async def test_reports_unhealthy_provider(self, client: AsyncClient):
        """A failing health check is reported as unavailable."""
        nutrition = FakeNutrition()
        nutrition.health_check = AsyncMock(return_value=False)

        with patch(
            "nutriscan_api.api.routes.food_scan.get_nutrition_lookup_service",
            return_value=nutrition,
        ):
            response = await client.get("/food/nutrition/health")

        assert response.json()["status"] == "unhealthy"
        nutrition.health_check.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reports_unconfigured(self, client: AsyncClient):
        """Without a USDA key the provider is reported as unconfigured."""
        with patch(
            "nutriscan_api.api.routes.food_scan.get_nutrition_lookup_service",
            return_value=None,
        ):
            response = await client.get("/food/nutrition/health")

        assert response.json()["available"] is False
        assert response.json()["status"] == "unconfigured"


class TestOnboardingRoutes:
    """Tests for /onboarding."""

    @pytest.fixture
    def service(self) -> MagicMock:
        service = MagicMock()
        service.save_profile = AsyncMock()
        service.fetch_is_onboarded = AsyncMock(return_value=True)
        service.get_profile = AsyncMock(return_value=None)
        app.dependency_overrides[get_profile_service] = lambda: service
        return service

    @pytest.mark.asyncio
    async def test_complete_onboarding(self, client: AsyncClient, service):
        """Posting a questionnaire returns the stored profile with BMI."""
        payload = {
            "userId": "user-1",
            "height": 175,
            "weight": 70,
            "age": 30,
            "gender": "female",
            "activityLevel": "high",
        }
        service.save_profile.return_value = UserProfile(
            **payload, bmi=22.86, health_status="normal"
        )

        response = await client.post("/onboarding", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["bmi"] == 22.86
        assert data["healthStatus"] == "normal"
        saved = service.save_profile.await_args.args[0]
        assert saved.user_id == "user-1"
        assert saved.activity_level.value == "high"

    @pytest.mark.asyncio
    async def test_complete_onboarding_missing_fields(self, client: AsyncClient, service):
        """Incomplete questionnaires fail validation and are not saved."""
        response = await client.post("/onboarding", json={"userId": "user-1", "height": 175})

        assert response.status_code == 422
        service.save_profile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_onboarding_status(self, client: AsyncClient, service):
        """Onboarding status is returned in camelCase."""
        response = await client.get("/onboarding/user-1")

        assert response.status_code == 200
        assert response.json() == {"userId": "user-1", "isOnboarded": True}

    @pytest.mark.asyncio
    async def test_missing_profile_is_404(self, client: AsyncClient, service):
        """Fetching a profile that does not exist gives 404."""
        response = await client.get("/onboarding/user-1/profile")

        assert response.status_code == 404
        assert response.json()["details"] == {"resource": "Profile", "id": "user-1"}


class TestHealth:
    """Tests for service info endpoints."""

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        """Root endpoint links to the health check."""
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        """Health endpoint reports healthy with LLM info."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "llm" in response.json()
