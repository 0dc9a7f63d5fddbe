"""
Easing functions

Map normalized time t (0.0-1.0) to a progress factor. Used by EasedCurve and
its subclasses.
"""

from typing import Callable

EaseFunction = Callable[[float], float]


def ease_linear(t: float) -> float:
    """
    Linear easing (constant speed)

    Args:
        t: Normalized time (0.0 = start, 1.0 = end)

    Returns:
        Progress factor
    """
    return t


def ease_in_quad(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease-in-out (slow start → fast middle → slow end)"""
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


def ease_in_cubic(t: float) -> float:
    """Cubic ease-in (very slow start)"""
    return t * t * t


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out (very slow end)"""
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out (very smooth acceleration/deceleration)"""
    return 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


def ease_out_bounce(t: float) -> float:
    """Bounce at the end, like a ball dropped onto the destination"""
    n1, d1 = 7.5625, 2.75
    if t < 1 / d1:
        return n1 * t * t
    elif t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    elif t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def ease_out_back(t: float) -> float:
    """Overshoots the destination by ~10% then settles back"""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * (t - 1) ** 3 + c1 * (t - 1) ** 2
