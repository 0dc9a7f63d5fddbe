"""
Property accessors

Resolve a named property on a target once, then read/write it on every tick.
AttributeAccessorResolver is the default resolver, based on Python attribute
lookup. Callers with other object models (dict-backed scene nodes, generated
bindings) supply their own AccessorResolver.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any

from models.errors import NoSuchPropertyError, NotAccessibleError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PROPERTY)

_MISSING = object()


class PropertyAccessor:
    """Reads and writes one named attribute"""

    def __init__(self, name: str, readable: bool = True, writable: bool = True):
        self.name = name
        self.readable = readable
        self.writable = writable

    def get(self, target: Any) -> Any:
        return getattr(target, self.name)

    def set(self, target: Any, value: Any) -> None:
        setattr(target, self.name, value)

    def __repr__(self) -> str:
        return f"PropertyAccessor({self.name!r})"


class AccessorResolver(ABC):
    """Resolves (target, name) into an accessor, failing fast at binding time"""

    @abstractmethod
    def resolve(self, target: Any, name: str) -> PropertyAccessor:
        """
        Raises:
            NoSuchPropertyError: Target has no such property
            NotAccessibleError: Property is not both readable and writable
        """
        raise NotImplementedError


class AttributeAccessorResolver(AccessorResolver):
    """
    Resolves Python attributes

    Classification (data descriptors first, as in attribute lookup):
    - property: readable with a getter, writable with a setter
    - other data descriptors (__slots__ members, custom descriptors): read/write
    - instance attributes: read/write
    - class attributes: methods are not accessible, plain values are
      read/write (setting shadows them on the instance)

    Example:
        accessor = AttributeAccessorResolver().resolve(panel, "width")
        accessor.set(panel, accessor.get(panel) + 10)
    """

    def resolve(self, target: Any, name: str) -> PropertyAccessor:
        readable, writable = self._classify(target, name)

        if not (readable and writable):
            log.debug(
                "Property not accessible",
                target=type(target).__name__,
                name=name,
                readable=readable,
                writable=writable
            )
            raise NotAccessibleError(target, name, readable, writable)

        return PropertyAccessor(name, readable, writable)

    def _classify(self, target: Any, name: str):
        class_attr = inspect.getattr_static(type(target), name, _MISSING)

        if isinstance(class_attr, property):
            return class_attr.fget is not None, class_attr.fset is not None

        if class_attr is not _MISSING and hasattr(type(class_attr), '__set__'):
            return hasattr(type(class_attr), '__get__'), True

        if name in getattr(target, '__dict__', {}):
            return True, True

        if class_attr is _MISSING:
            raise NoSuchPropertyError(target, name)

        if callable(class_attr) or isinstance(class_attr, (staticmethod, classmethod)):
            return True, False

        return True, True
