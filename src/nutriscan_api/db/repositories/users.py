"""Repository for the users collection."""

from .base import BaseRepository


class UserRepository(BaseRepository):
    """User records (``_id`` = identity provider user ID)."""

    async def mark_onboarded(self, user_id: str) -> bool:
        return await self.upsert_by_id(user_id, {"is_onboarded": True})

    async def is_onboarded(self, user_id: str) -> bool:
        """Missing users count as not onboarded."""
        doc = await self.collection.find_one({"_id": user_id}, {"is_onboarded": 1})
        return bool(doc and doc.get("is_onboarded", False))
