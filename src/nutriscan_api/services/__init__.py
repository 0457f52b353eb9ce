"""Business logic services."""

from .food_scan import FoodScanSession, aggregate_nutrition, scan_food
from .profile import ProfileService

__all__ = [
    "FoodScanSession",
    "ProfileService",
    "aggregate_nutrition",
    "scan_food",
]
