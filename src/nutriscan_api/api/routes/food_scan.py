"""Food Scan API routes.

Upload a food photo, get back per-item and total calories/macros.
"""

import base64
import logging
from typing import Annotated

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from nutriscan_api.api.dependencies import NutritionDep, RecognizerDep, SettingsDep
from nutriscan_api.models.food_scan import FoodScanError, ScanErrorCode, ScanResult
from nutriscan_api.services.food_scan import scan_food
from nutriscan_api.services.nutrition_lookup import get_nutrition_lookup_service

router = APIRouter()
logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = {"image/jpeg", "image/jpg"}

ERROR_STATUS = {
    ScanErrorCode.NO_FOOD_DETECTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ScanErrorCode.TRANSPORT_ERROR: status.HTTP_502_BAD_GATEWAY,
    ScanErrorCode.PARSE_ERROR: status.HTTP_502_BAD_GATEWAY,
    ScanErrorCode.UNKNOWN_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _bad_image(message: str, **details) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=FoodScanError(
            error_code="INVALID_IMAGE",
            message=message,
            details=details or None,
        ).model_dump(),
    )


@router.post(
    "/scan",
    response_model=ScanResult,
    responses={
        400: {"model": FoodScanError, "description": "Invalid image upload"},
        422: {"model": FoodScanError, "description": "No food detected"},
        500: {"model": FoodScanError, "description": "Unexpected scan failure"},
        502: {"model": FoodScanError, "description": "Upstream provider failure"},
        503: {"description": "Food identification or nutrition lookup not configured"},
    },
    summary="Scan food image for nutritional analysis",
)
async def scan_food_image(
    image: Annotated[UploadFile, File(description="Food photo (JPEG)")],
    settings: SettingsDep,
    recognizer: RecognizerDep,
    nutrition: NutritionDep,
) -> ScanResult:
    """
    Identify the foods in a JPEG and estimate their nutrition.

    **Error Codes:**
    - `NO_FOOD_DETECTED`: The model found no food in the image
    - `TRANSPORT_ERROR`: Vision model or USDA call failed
    - `PARSE_ERROR`: Vision model returned an unexpected response
    - `UNKNOWN_ERROR`: Anything else
    """
    if image.content_type not in ACCEPTED_CONTENT_TYPES:
        raise _bad_image("Image must be JPEG format", received_type=image.content_type)

    content = await image.read()
    max_size = settings.max_image_size_mb * 1024 * 1024

    if not content:
        raise _bad_image("Image is empty")
    if len(content) > max_size:
        raise _bad_image(
            f"Image exceeds maximum size of {settings.max_image_size_mb} MB",
            size=len(content),
            max_size=max_size,
        )

    logger.info(
        "Food scan request",
        extra={"size_bytes": len(content), "provider": recognizer.provider_name},
    )

    outcome = await scan_food(
        base64.b64encode(content).decode("utf-8"),
        recognizer=recognizer,
        nutrition=nutrition,
    )

    if not outcome.ok:
        raise HTTPException(
            status_code=ERROR_STATUS[outcome.error.code],
            detail=FoodScanError(
                error_code=outcome.error.code.value,
                message=outcome.error.message,
            ).model_dump(),
        )

    return outcome.result


@router.get(
    "/nutrition/health",
    summary="Check nutrition lookup service health",
    description="Check if the nutrition lookup service (USDA FoodData Central) is reachable.",
)
async def check_nutrition_health() -> dict:
    """
    Check if the nutrition lookup service is healthy and available.

    Returns:
        dict with status, provider, and availability
    """
    service = get_nutrition_lookup_service()
    if service is None:
        return {"status": "unconfigured", "provider": None, "available": False}

    is_healthy = await service.health_check()
    return {
        "status": "healthy" if is_healthy else "unhealthy",
        "provider": service.provider_name,
        "available": is_healthy,
    }
