"""Onboarding profile service."""

import logging

from pymongo.errors import PyMongoError

from nutriscan_api.core.exceptions import DatabaseError
from nutriscan_api.db.unit_of_work import UnitOfWork
from nutriscan_api.models.profile import UserProfile, UserProfileCreate
from nutriscan_api.utils.bmi import calculate_bmi, get_health_status

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Persists finished onboarding questionnaires.

    The BMI and health status are derived once, here, from height and weight.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def save_profile(self, data: UserProfileCreate) -> UserProfile:
        """
        Compute BMI, store the profile and mark the user onboarded.

        Raises:
            DatabaseError: If either write fails
        """
        bmi = calculate_bmi(data.height, data.weight)
        profile = UserProfile(
            **data.model_dump(),
            bmi=bmi,
            health_status=get_health_status(bmi),
        )

        try:
            await self.uow.profiles.upsert(profile)
            await self.uow.users.mark_onboarded(data.user_id)
        except PyMongoError as e:
            logger.exception(f"Failed to save profile for user {data.user_id}")
            raise DatabaseError(
                f"Failed to save profile: {e}",
                details={"user_id": data.user_id},
            ) from e

        logger.info(
            f"Saved profile for user {data.user_id}: bmi={bmi} ({profile.health_status.value})"
        )
        return profile

    async def fetch_is_onboarded(self, user_id: str) -> bool:
        """Whether the user has completed onboarding (False if unknown)."""
        try:
            return await self.uow.users.is_onboarded(user_id)
        except PyMongoError as e:
            logger.exception(f"Failed to read onboarding status for user {user_id}")
            raise DatabaseError(
                f"Failed to read onboarding status: {e}",
                details={"user_id": user_id},
            ) from e

    async def get_profile(self, user_id: str) -> UserProfile | None:
        """Stored profile for ``user_id``, or None if never onboarded."""
        try:
            return await self.uow.profiles.find_by_user_id(user_id)
        except PyMongoError as e:
            logger.exception(f"Failed to read profile for user {user_id}")
            raise DatabaseError(
                f"Failed to read profile: {e}",
                details={"user_id": user_id},
            ) from e
