"""Decimal rounding helpers for nutrition and BMI values."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int) -> float:
    """
    Round to a fixed number of decimal places, halves away from zero.

    Works on the shortest decimal repr of the float, so 4.05 becomes 4.1
    even though the binary value sits just below 4.05.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def round1(value: float) -> float:
    """Round to one decimal place."""
    return round_half_up(value, 1)


def round2(value: float) -> float:
    """Round to two decimal places."""
    return round_half_up(value, 2)
