"""Pydantic models for the food scan pipeline and its API contract.

Wire format is camelCase (matching the mobile client); Python attributes are
snake_case. Both spellings are accepted on input.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from nutriscan_api.core.exceptions import InvalidScanTransitionError


class CamelModel(BaseModel):
    """Base model serialising to camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Pipeline records
# =============================================================================


class IdentifiedFoodItem(CamelModel):
    """A food name and estimated mass extracted from an image."""

    name: str = Field(..., min_length=1, description="Lowercase free-form food name")
    estimated_grams: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Estimated mass in grams"
    )

    @field_validator("name")
    @classmethod
    def normalise_name(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("name must not be blank")
        return value


class FoodNutrition(CamelModel):
    """Nutrition for one identified item, scaled to its estimated mass."""

    name: str
    estimated_grams: float = Field(..., ge=0)
    calories: float = Field(0.0, ge=0, description="Energy in kcal")
    protein: float = Field(0.0, ge=0, description="Protein in grams")
    carbs: float = Field(0.0, ge=0, description="Carbohydrates in grams")
    fat: float = Field(0.0, ge=0, description="Total fat in grams")

    @classmethod
    def empty(cls, name: str, estimated_grams: float) -> "FoodNutrition":
        """Zero-valued record used when the database has no match."""
        return cls(name=name, estimated_grams=estimated_grams)


class ScanResult(CamelModel):
    """Per-item nutrition plus totals for one scan."""

    items: list[FoodNutrition] = Field(default_factory=list)
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0


# =============================================================================
# Lifecycle
# =============================================================================


class ScanStatus(str, Enum):
    """Lifecycle of a single scan."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


# Any state may also return to IDLE via reset.
ALLOWED_TRANSITIONS: dict[ScanStatus, set[ScanStatus]] = {
    ScanStatus.IDLE: {ScanStatus.LOADING},
    ScanStatus.LOADING: {ScanStatus.SUCCESS, ScanStatus.ERROR},
    ScanStatus.SUCCESS: {ScanStatus.LOADING},
    ScanStatus.ERROR: {ScanStatus.LOADING},
}


class ScanState(CamelModel):
    """Observable scan state: idle, loading, success(result) or error(message)."""

    model_config = ConfigDict(frozen=True)

    status: ScanStatus = ScanStatus.IDLE
    result: ScanResult | None = None
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.status == ScanStatus.LOADING

    @classmethod
    def idle(cls) -> "ScanState":
        return cls(status=ScanStatus.IDLE)

    @classmethod
    def loading(cls) -> "ScanState":
        return cls(status=ScanStatus.LOADING)

    @classmethod
    def succeeded(cls, result: ScanResult) -> "ScanState":
        return cls(status=ScanStatus.SUCCESS, result=result)

    @classmethod
    def failed(cls, message: str) -> "ScanState":
        return cls(status=ScanStatus.ERROR, error=message)

    def can_transition_to(self, target: ScanStatus) -> bool:
        """Check whether moving to ``target`` is part of the lifecycle."""
        if target == ScanStatus.IDLE:
            return True
        return target in ALLOWED_TRANSITIONS[self.status]

    def transition(self, new_state: "ScanState") -> "ScanState":
        """
        Validate and return ``new_state``.

        Raises:
            InvalidScanTransitionError: If the move is not allowed
        """
        if not self.can_transition_to(new_state.status):
            raise InvalidScanTransitionError(self.status.value, new_state.status.value)
        return new_state


# =============================================================================
# Errors and outcomes
# =============================================================================


class ScanErrorCode(str, Enum):
    """Why a scan failed."""

    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    NO_FOOD_DETECTED = "NO_FOOD_DETECTED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


NO_FOOD_MESSAGE = "No food items detected in the image. Please try again."
GENERIC_SCAN_MESSAGE = "Something went wrong while scanning. Please try again."


class ScanError(CamelModel):
    """User-facing scan failure. ``message`` never carries internal detail."""

    code: ScanErrorCode
    message: str


class ScanOutcome(CamelModel):
    """Result of ``scan_food``: exactly one of ``result`` or ``error`` is set."""

    result: ScanResult | None = None
    error: ScanError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None


class FoodScanError(BaseModel):
    """Error response body for the scan endpoint."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="Additional error details")
