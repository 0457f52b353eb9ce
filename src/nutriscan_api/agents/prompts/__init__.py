"""Prompt templates."""

from .food_identification import FOOD_IDENTIFICATION_PROMPT

__all__ = ["FOOD_IDENTIFICATION_PROMPT"]
