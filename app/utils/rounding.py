"""
Rounding helpers shared by the statistics engine.
"""
import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with halves rounded towards +infinity.

    Unlike round(), 2.5 -> 3 and 0.5 -> 1.

    Args:
        value: Number to round

    Returns:
        Rounded integer
    """
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int) -> float:
    """Round half-up to a fixed number of decimal places."""
    factor = 10 ** digits
    return round_half_up(value * factor) / factor
