"""Onboarding API routes.

Persist a finished onboarding questionnaire and report onboarding status.
"""

from fastapi import APIRouter

from nutriscan_api.api.dependencies import ProfileServiceDep
from nutriscan_api.core.exceptions import NotFoundError
from nutriscan_api.models.profile import OnboardingStatus, UserProfile, UserProfileCreate

router = APIRouter()


@router.post("", response_model=UserProfile)
async def complete_onboarding(
    request: UserProfileCreate,
    service: ProfileServiceDep,
):
    """
    Save the user's profile and mark onboarding complete.

    Request body:
    - **userId**: Identity provider user ID
    - **height**: Height in cm
    - **weight**: Weight in kg
    - **age**: Age in years
    - **gender**: male, female or other
    - **activityLevel**: low, medium or high
    """
    return await service.save_profile(request)


@router.get("/{user_id}", response_model=OnboardingStatus)
async def get_onboarding_status(
    user_id: str,
    service: ProfileServiceDep,
):
    """Whether the user has completed onboarding."""
    is_onboarded = await service.fetch_is_onboarded(user_id)
    return OnboardingStatus(user_id=user_id, is_onboarded=is_onboarded)


@router.get("/{user_id}/profile", response_model=UserProfile)
async def get_profile(
    user_id: str,
    service: ProfileServiceDep,
):
    """Get the stored profile with its BMI classification."""
    profile = await service.get_profile(user_id)
    if profile is None:
        raise NotFoundError("Profile", user_id)
    return profile
