"""Repository implementations."""

from .profiles import ProfileRepository
from .users import UserRepository

__all__ = ["ProfileRepository", "UserRepository"]
