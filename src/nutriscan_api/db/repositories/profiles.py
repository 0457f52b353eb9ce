"""Repository for the user_profiles collection."""

from nutriscan_api.models.profile import UserProfile

from .base import BaseRepository


class ProfileRepository(BaseRepository[UserProfile]):
    """Onboarding profiles, one document per user (``_id`` = user ID)."""

    model_class = UserProfile

    async def upsert(self, profile: UserProfile) -> bool:
        """Insert or replace the stored profile fields for ``profile.user_id``."""
        fields = profile.model_dump(mode="json", exclude={"updated_at"})
        return await self.upsert_by_id(profile.user_id, fields)

    async def find_by_user_id(self, user_id: str) -> UserProfile | None:
        return await self.find_by_id(user_id)
