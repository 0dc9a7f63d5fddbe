"""
Models package - Data models for the transition engine
"""

from .enums import TransitionState, LogLevel, LogCategory
from .color import Color
from .errors import (
    TransitionError,
    NoSuchPropertyError,
    UnsupportedTypeError,
    NotAccessibleError,
    InvalidStateError,
    PropertyWriteError,
    TimingCurveError,
)

__all__ = [
    'TransitionState',
    'LogLevel',
    'LogCategory',
    'Color',
    'TransitionError',
    'NoSuchPropertyError',
    'UnsupportedTypeError',
    'NotAccessibleError',
    'InvalidStateError',
    'PropertyWriteError',
    'TimingCurveError',
]
