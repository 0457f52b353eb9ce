"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fakes import WHITE_RICE_PER_100G, FakeNutrition, FakeRecognizer
from nutriscan_api.main import app


@pytest.fixture
def rice_recognizer() -> FakeRecognizer:
    """Recognizer that sees 150 g of white rice."""
    return FakeRecognizer(items=[{"name": "white rice", "estimatedGrams": 150}])


@pytest.fixture
def rice_nutrition() -> FakeNutrition:
    """Nutrition lookup that knows white rice per 100 g."""
    return FakeNutrition(per_100g={"white rice": WHITE_RICE_PER_100G})


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
