"""
Base class for nutrition lookup services.

Defines the abstract interface that all providers must implement.
"""

from abc import ABC, abstractmethod

from nutriscan_api.models.food_scan import FoodNutrition


class NutritionLookupService(ABC):
    """
    Abstract base class for nutrition lookup services.

    A lookup resolves a food name plus estimated mass to a ``FoodNutrition``.
    "No match" is a zero-valued record, never an exception; only transport
    failures raise.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        ...

    @abstractmethod
    async def lookup(self, name: str, estimated_grams: float) -> FoodNutrition:
        """
        Resolve nutrition for a food scaled to ``estimated_grams``.

        Args:
            name: Food name to search for
            estimated_grams: Mass to scale the per-100g values to

        Returns:
            FoodNutrition for the best match, or a zero record if none

        Raises:
            TransportError: If the HTTP call does not complete successfully
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is available and healthy.

        Returns:
            True if the provider is ready to accept requests
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""
        return None
