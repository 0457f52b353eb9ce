"""
Nutrition Lookup Service - Facade over nutrition database APIs.

USDA FoodData Central is the only provider.
"""

from .base import NutritionLookupService
from .factory import get_nutrition_lookup_service
from .usda_provider import USDANutritionLookup

__all__ = [
    "NutritionLookupService",
    "USDANutritionLookup",
    "get_nutrition_lookup_service",
]
