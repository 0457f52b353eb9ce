"""
Factory for creating food identification service instances.

Reads configuration from settings and returns the appropriate provider.
"""

import logging
from functools import lru_cache

from nutriscan_api.agents.llm import get_llm
from nutriscan_api.core.config import get_settings

from .base import FoodIdentificationService
from .llm_provider import LLMFoodIdentification

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_food_identification_service() -> FoodIdentificationService | None:
    """
    Get the configured food identification service.

    Configuration is read from settings:
    - llm_provider: "gemini" (default) or "openai"
    - google_api_key / gemini_model
    - openai_api_key / openai_model

    Returns:
        Configured FoodIdentificationService instance, or None if the
        selected LLM provider has no API key
    """
    settings = get_settings()

    if not settings.is_llm_configured:
        logger.warning(
            f"Food identification not configured (missing {settings.llm_provider.value} API key)"
        )
        return None

    logger.info(f"Initializing food identification provider: {settings.llm_provider.value}")

    return LLMFoodIdentification(llm=get_llm(settings))


def clear_service_cache():
    """Clear the cached service instance (useful for testing)."""
    get_food_identification_service.cache_clear()
