"""Pydantic models for onboarding profiles."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HealthStatus(str, Enum):
    """BMI classification stored with the profile."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"
    SEVERELY_OBESE = "severely_obese"


class UserProfileCreate(BaseModel):
    """Finished onboarding questionnaire for one user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str = Field(..., min_length=1, description="Identity provider user ID")
    height: float = Field(..., gt=0, description="Height in centimetres")
    weight: float = Field(..., gt=0, description="Weight in kilograms")
    age: int = Field(..., gt=0, description="Age in years")
    gender: Gender
    activity_level: ActivityLevel


class UserProfile(UserProfileCreate):
    """Persisted profile with derived BMI classification."""

    bmi: float = Field(..., description="Body mass index, two decimals")
    health_status: HealthStatus
    updated_at: datetime | None = None


class OnboardingStatus(BaseModel):
    """Whether a user has completed onboarding."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
    is_onboarded: bool
