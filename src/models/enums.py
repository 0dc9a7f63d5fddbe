"""
Enums for the transition engine
"""

from enum import Enum, auto


class TransitionState(Enum):
    """
    Transition controller lifecycle

    IDLE: Bindings may be added, clock not started
    RUNNING: Clock active, periodic ticks
    COMPLETED: Terminal (single-use controller)
    """
    IDLE = auto()
    RUNNING = auto()
    COMPLETED = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()         # Configuration loading, validation
    TRANSITION = auto()     # Transition lifecycle (add/go/stop/complete)
    CLOCK = auto()          # Periodic clock threads
    INTERPOLATION = auto()  # Interpolator registration and lookup
    PROPERTY = auto()       # Property resolution on targets
    DISPATCH = auto()       # Property writes, event loop marshaling
    SYSTEM = auto()         # Process-wide settings changes
