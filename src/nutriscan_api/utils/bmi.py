"""BMI calculation and health status classification."""

from nutriscan_api.models.profile import HealthStatus
from nutriscan_api.utils.rounding import round2


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """
    Calculate body mass index.

    Args:
        height_cm: Height in centimetres (must be > 0)
        weight_kg: Weight in kilograms

    Returns:
        BMI rounded to two decimals
    """
    height_m = height_cm / 100
    return round2(weight_kg / (height_m * height_m))


def get_health_status(bmi: float) -> HealthStatus:
    """Classify a BMI value."""
    if bmi < 18.5:
        return HealthStatus.UNDERWEIGHT
    if bmi < 25:
        return HealthStatus.NORMAL
    if bmi < 30:
        return HealthStatus.OVERWEIGHT
    if bmi < 35:
        return HealthStatus.OBESE
    return HealthStatus.SEVERELY_OBESE
