"""Unit of Work pattern for managing repository access."""

from motor.motor_asyncio import AsyncIOMotorDatabase

from .repositories.profiles import ProfileRepository
from .repositories.users import UserRepository


class UnitOfWork:
    """
    Groups repository access and provides a single injection point for services.

    Usage:
        uow = UnitOfWork(db)
        await uow.profiles.upsert(profile)
        await uow.users.mark_onboarded(user_id)
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self._db = db
        self._profiles: ProfileRepository | None = None
        self._users: UserRepository | None = None

    @property
    def profiles(self) -> ProfileRepository:
        """Get user_profiles repository (lazy loaded)."""
        if self._profiles is None:
            self._profiles = ProfileRepository(self._db["user_profiles"])
        return self._profiles

    @property
    def users(self) -> UserRepository:
        """Get users repository (lazy loaded)."""
        if self._users is None:
            self._users = UserRepository(self._db["users"])
        return self._users
