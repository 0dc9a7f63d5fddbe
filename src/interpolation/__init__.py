"""
Value interpolation - interpolator contract, default types and registry

Importing this package populates the process-wide registry with the
built-in interpolators.
"""

from .base import ManagedType, lerp
from .managed_types import (
    IntManagedType,
    FloatManagedType,
    ColorManagedType,
    StringManagedType,
    TupleManagedType,
    lerp_int,
)
from .registry import InterpolatorRegistry, get_registry, register_default_interpolators

register_default_interpolators(get_registry())

__all__ = [
    'ManagedType',
    'lerp',
    'lerp_int',
    'IntManagedType',
    'FloatManagedType',
    'ColorManagedType',
    'StringManagedType',
    'TupleManagedType',
    'InterpolatorRegistry',
    'get_registry',
    'register_default_interpolators',
]
