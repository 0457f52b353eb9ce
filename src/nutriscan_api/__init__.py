"""NutriScan API - food photo scanning and onboarding profiles."""

__version__ = "1.0.0"
