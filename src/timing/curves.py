"""
Timing curves

Duration-based curves built on the easing functions. All of them complete
the first tick at or after duration_ms, reporting progress exactly 1.0.
"""

from typing import Tuple

from timing.base import TimingCurve
from timing.easing import (
    EaseFunction,
    ease_linear,
    ease_in_quad,
    ease_out_quad,
    ease_in_out_cubic,
    ease_out_bounce,
    ease_out_back,
)


class EasedCurve(TimingCurve):
    """
    Timing curve for a fixed duration shaped by an easing function

    Args:
        duration_ms: Total duration in milliseconds (<= 0 completes on the first tick)
        ease_function: Normalized time (0.0-1.0) → progress factor

    Example:
        curve = EasedCurve(400, ease_out_cubic)
        curve.on_tick(200)  # (0.875, False)
        curve.on_tick(400)  # (1.0, True)
    """

    def __init__(self, duration_ms: float, ease_function: EaseFunction = ease_linear):
        self.duration_ms = duration_ms
        self.ease_function = ease_function

    def on_tick(self, elapsed_ms: float) -> Tuple[float, bool]:
        if self.duration_ms <= 0 or elapsed_ms >= self.duration_ms:
            return 1.0, True

        t = max(0.0, elapsed_ms / self.duration_ms)
        return self.ease_function(t), False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.duration_ms}ms)"


class LinearCurve(EasedCurve):
    """Constant speed"""
    def __init__(self, duration_ms: float):
        super().__init__(duration_ms, ease_linear)


class EaseInEaseOutCurve(EasedCurve):
    """Accelerates from rest, decelerates into the destination"""
    def __init__(self, duration_ms: float):
        super().__init__(duration_ms, ease_in_out_cubic)


class AccelerationCurve(EasedCurve):
    """Starts at rest and speeds up"""
    def __init__(self, duration_ms: float):
        super().__init__(duration_ms, ease_in_quad)


class DecelerationCurve(EasedCurve):
    """Starts fast and slows to rest"""
    def __init__(self, duration_ms: float):
        super().__init__(duration_ms, ease_out_quad)


class BounceCurve(EasedCurve):
    """Bounces into the destination"""
    def __init__(self, duration_ms: float):
        super().__init__(duration_ms, ease_out_bounce)


class OvershootCurve(EasedCurve):
    """Passes the destination (progress > 1.0) before settling"""
    def __init__(self, duration_ms: float):
        super().__init__(duration_ms, ease_out_back)
