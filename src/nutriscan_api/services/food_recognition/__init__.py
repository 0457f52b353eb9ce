"""
Food Recognition Service - Facade over vision LLM food identification.
"""

from .base import FoodIdentificationService
from .factory import get_food_identification_service
from .llm_provider import LLMFoodIdentification, parse_identified_items, strip_code_fences

__all__ = [
    "FoodIdentificationService",
    "LLMFoodIdentification",
    "get_food_identification_service",
    "parse_identified_items",
    "strip_code_fences",
]
