"""
Transition engine - controller and clock
"""

from .clock import PeriodicClock, Stopwatch
from .transition import Transition

__all__ = [
    'PeriodicClock',
    'Stopwatch',
    'Transition',
]
