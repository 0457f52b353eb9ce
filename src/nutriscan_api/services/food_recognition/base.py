"""
Base class for food identification services.

Defines the abstract interface that all providers must implement.
"""

from abc import ABC, abstractmethod

from nutriscan_api.models.food_scan import IdentifiedFoodItem


class FoodIdentificationService(ABC):
    """
    Abstract base class for food identification services.

    All providers (Gemini, OpenAI, ...) must implement this interface.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        ...

    @abstractmethod
    async def identify(self, image_b64: str) -> list[IdentifiedFoodItem]:
        """
        Identify foods in an image.

        Args:
            image_b64: Base64-encoded JPEG

        Returns:
            Identified items; an empty list means no food was found

        Raises:
            TransportError: If the remote call fails
            ParseError: If the response is not the expected JSON array
        """
        ...
