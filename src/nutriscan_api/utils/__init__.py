"""Utility functions."""

from .bmi import calculate_bmi, get_health_status
from .rounding import round1, round2

__all__ = ["calculate_bmi", "get_health_status", "round1", "round2"]
