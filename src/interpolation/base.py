"""
Interpolator contract

A ManagedType knows how to copy and interpolate values of one semantic type.
"""

from abc import ABC, abstractmethod
from typing import Any


def lerp(start: float, end: float, progress: float) -> float:
    """
    Linear interpolation between start and end

    Exact at both endpoints and monotonic in progress, so values never leave
    [start, end] for progress in [0, 1] (same scheme as C++ std::lerp).
    Progress outside [0, 1] extrapolates.

    Example:
        lerp(100, 500, 0.5)   # 300.0
        lerp(100, 500, 1.25)  # 600.0
    """
    if (start <= 0 and end >= 0) or (start >= 0 and end <= 0):
        return progress * end + (1.0 - progress) * start

    if progress == 1:
        return end

    value = start + progress * (end - start)
    if (progress > 1) == (end > start):
        return max(end, value)
    return min(end, value)


class ManagedType(ABC):
    """
    Interpolation strategy for one value type

    Subclasses MUST define:
        value_type          (class attribute, the registry key)
        value_at()          intermediate value for a progress fraction

    copy() defaults to returning the value itself, which is correct for
    immutable types (int, float, str, tuple). Mutable types must override it.
    """

    value_type: type = object

    def copy(self, value: Any) -> Any:
        """Return a value independent of the live property value"""
        return value

    @abstractmethod
    def value_at(self, start: Any, end: Any, progress: float) -> Any:
        """
        Value between start and end for the given progress

        Args:
            start: Value recorded when the binding was created
            end: Destination value
            progress: Fraction, nominally 0.0-1.0 but may overshoot either way

        Returns:
            Value of value_type
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value_type.__name__})"
