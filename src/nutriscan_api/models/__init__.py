"""Pydantic models for API schemas."""

from .food_scan import (
    FoodNutrition,
    FoodScanError,
    IdentifiedFoodItem,
    ScanError,
    ScanErrorCode,
    ScanOutcome,
    ScanResult,
    ScanState,
    ScanStatus,
)
from .profile import (
    ActivityLevel,
    Gender,
    HealthStatus,
    OnboardingStatus,
    UserProfile,
    UserProfileCreate,
)

__all__ = [
    # Food scan
    "FoodNutrition",
    "FoodScanError",
    "IdentifiedFoodItem",
    "ScanError",
    "ScanErrorCode",
    "ScanOutcome",
    "ScanResult",
    "ScanState",
    "ScanStatus",
    # Profile
    "ActivityLevel",
    "Gender",
    "HealthStatus",
    "OnboardingStatus",
    "UserProfile",
    "UserProfileCreate",
]
