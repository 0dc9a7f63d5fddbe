"""
Value Interpolator Registry

Maps a value type to its ManagedType. The process-wide instance is populated
once by register_default_interpolators() (done on first import of the
interpolation package) and must be complete before any Transition is
constructed. Applications add their own types with get_registry().register().
"""

import threading
from typing import Dict, List, Optional

from interpolation.base import ManagedType
from interpolation.managed_types import (
    IntManagedType,
    FloatManagedType,
    ColorManagedType,
    StringManagedType,
    TupleManagedType,
)
from models.errors import UnsupportedTypeError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.INTERPOLATION)


class InterpolatorRegistry:
    """
    Type → interpolator map

    Lookup is an exact type comparison: subclasses are not matched to their
    base type's interpolator (bool is not animated as int).

    Example:
        registry = InterpolatorRegistry()
        registry.register(int, IntManagedType())
        registry.lookup(int).value_at(0, 10, 0.5)  # 5
        registry.lookup(bool)                      # raises UnsupportedTypeError
    """

    def __init__(self):
        self._types: Dict[type, ManagedType] = {}
        self._lock = threading.Lock()

    def register(self, value_type: type, interpolator: ManagedType) -> None:
        """
        Register an interpolator for a value type (last registration wins)

        Args:
            value_type: Type key
            interpolator: Strategy used for values of that type
        """
        with self._lock:
            replaced = self._types.get(value_type)
            self._types[value_type] = interpolator

        if replaced is not None:
            log.debug(
                "Interpolator replaced",
                value_type=value_type.__name__,
                old=repr(replaced),
                new=repr(interpolator)
            )
        else:
            log.debug("Interpolator registered", value_type=value_type.__name__)

    def register_managed_type(self, interpolator: ManagedType) -> None:
        """Register an interpolator under its own value_type"""
        self.register(interpolator.value_type, interpolator)

    def unregister(self, value_type: type) -> Optional[ManagedType]:
        with self._lock:
            return self._types.pop(value_type, None)

    def lookup(self, value_type: type) -> ManagedType:
        """
        Get the interpolator for a value type

        Raises:
            UnsupportedTypeError: No interpolator registered for value_type
        """
        interpolator = self._types.get(value_type)
        if interpolator is None:
            raise UnsupportedTypeError(value_type)
        return interpolator

    def is_supported(self, value_type: type) -> bool:
        return value_type in self._types

    def registered_types(self) -> List[type]:
        with self._lock:
            return list(self._types.keys())

    def __len__(self) -> int:
        return len(self._types)


def register_default_interpolators(registry: InterpolatorRegistry) -> InterpolatorRegistry:
    """Register the built-in interpolators (int, float, Color, str, tuple)"""
    for managed_type in (
        IntManagedType(),
        FloatManagedType(),
        ColorManagedType(),
        StringManagedType(),
        TupleManagedType(),
    ):
        registry.register_managed_type(managed_type)

    return registry


# === Global instance helpers ===
_registry = InterpolatorRegistry()

def get_registry() -> InterpolatorRegistry:
    return _registry
