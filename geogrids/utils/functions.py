"""Module for miscellaneous multi-use functions"""

__all__ = [
    'round_half_up', 'sec', 'sin_squared', 'tan_squared'
]

import math


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)


def sin_squared(x: float) -> float:
    """Square of the sine of an angle in radians"""
    return math.sin(x) ** 2


def tan_squared(x: float) -> float:
    """Square of the tangent of an angle in radians"""
    return math.tan(x) ** 2


def sec(x: float) -> float:
    """Secant of an angle in radians"""
    return 1.0 / math.cos(x)
