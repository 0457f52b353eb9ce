"""API routes."""

from . import food_scan, onboarding

__all__ = ["food_scan", "onboarding"]
