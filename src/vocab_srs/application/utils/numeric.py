"""Rounding helpers shared by the scheduler and the load recommender."""

import math
from decimal import ROUND_HALF_UP, Decimal

from vocab_srs.domain.constants import MAX_EASINESS_FACTOR, MIN_EASINESS_FACTOR


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties toward positive infinity.

    Python's round() uses banker's rounding (round(4.5) == 4); intervals
    must round 4.5 up to 5.
    """
    return math.floor(value + 0.5)


def round_to_cents(value: float) -> float:
    """Round to 2 decimals, ties away from zero, on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def clamp_easiness(value: float) -> float:
    """Clamp into [MIN_EASINESS_FACTOR, MAX_EASINESS_FACTOR] then round to 2 decimals."""
    clamped = max(MIN_EASINESS_FACTOR, min(MAX_EASINESS_FACTOR, value))
    return round_to_cents(clamped)
