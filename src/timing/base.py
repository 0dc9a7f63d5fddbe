"""
Timing Curve contract

Converts the time elapsed since a transition started into a progress
fraction and a completion flag.
"""

from abc import ABC, abstractmethod
from typing import Tuple


class TimingCurve(ABC):
    """
    Base class for timing curves

    Subclasses MUST implement on_tick(elapsed_ms). It must be deterministic
    in elapsed_ms, and the tick that reports completed=True must report
    progress 1.0 exactly so destination values land without drift.

    A curve instance belongs to one Transition; it may keep state captured at
    construction (e.g. a duration) but nothing that depends on tick history.
    """

    @abstractmethod
    def on_tick(self, elapsed_ms: float) -> Tuple[float, bool]:
        """
        Args:
            elapsed_ms: Milliseconds since the transition's clock started

        Returns:
            (progress, completed)
        """
        raise NotImplementedError
