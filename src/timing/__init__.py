"""
Timing curves - elapsed time → (progress, completed)
"""

from .base import TimingCurve
from .curves import (
    EasedCurve,
    LinearCurve,
    EaseInEaseOutCurve,
    AccelerationCurve,
    DecelerationCurve,
    BounceCurve,
    OvershootCurve,
)

__all__ = [
    'TimingCurve',
    'EasedCurve',
    'LinearCurve',
    'EaseInEaseOutCurve',
    'AccelerationCurve',
    'DecelerationCurve',
    'BounceCurve',
    'OvershootCurve',
]
