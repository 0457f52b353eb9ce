"""FastAPI dependency injection factories."""

from typing import Annotated

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from nutriscan_api.core.config import Settings, get_settings
from nutriscan_api.core.exceptions import ServiceUnavailableError
from nutriscan_api.db.mongo import MongoDB
from nutriscan_api.db.unit_of_work import UnitOfWork
from nutriscan_api.services.food_recognition import (
    FoodIdentificationService,
    get_food_identification_service,
)
from nutriscan_api.services.nutrition_lookup import (
    NutritionLookupService,
    get_nutrition_lookup_service,
)
from nutriscan_api.services.profile import ProfileService


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_database() -> AsyncIOMotorDatabase:
    """Get the MongoDB database instance."""
    settings = get_settings()
    return MongoDB.get_database(settings.db_name)


def get_uow(db: AsyncIOMotorDatabase = Depends(get_database)) -> UnitOfWork:
    """Get Unit of Work instance."""
    return UnitOfWork(db)


def get_profile_service(uow: UnitOfWork = Depends(get_uow)) -> ProfileService:
    """Get ProfileService instance."""
    return ProfileService(uow)


def get_recognizer() -> FoodIdentificationService:
    """
    Get the food identification client.

    Raises:
        ServiceUnavailableError: If no LLM API key is configured
    """
    service = get_food_identification_service()
    if service is None:
        raise ServiceUnavailableError("Food identification")
    return service


def get_nutrition() -> NutritionLookupService:
    """
    Get the nutrition lookup client.

    Raises:
        ServiceUnavailableError: If no USDA API key is configured
    """
    service = get_nutrition_lookup_service()
    if service is None:
        raise ServiceUnavailableError("Nutrition lookup")
    return service


# Type aliases for service dependencies
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
RecognizerDep = Annotated[FoodIdentificationService, Depends(get_recognizer)]
NutritionDep = Annotated[NutritionLookupService, Depends(get_nutrition)]
