"""
Dispatch Guard

Applies a property write either in place or on the target's owning
execution context, never concurrently with that context's own work.
"""

from typing import Any, Callable, Optional, TYPE_CHECKING

from dispatch.affinity import ContextAffinity, get_default_affinity
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from properties.accessor import PropertyAccessor

log = get_logger().for_category(LogCategory.DISPATCH)

WriteErrorHandler = Callable[[Any, 'PropertyAccessor', BaseException], None]


class DispatchGuard:
    """
    Routes property writes through a ContextAffinity

    Foreign-context writes are fire-and-forget: apply() returns as soon as
    the write is queued, so the clock never waits on the owner. A queued
    write that fails is reported through on_error (it has no caller to
    raise into); without a handler it propagates into the owner's loop.
    Local writes happen synchronously and raise directly.
    """

    def __init__(self, affinity: Optional[ContextAffinity] = None):
        self.affinity = affinity or get_default_affinity()

    def apply(
        self,
        target: Any,
        accessor: 'PropertyAccessor',
        value: Any,
        on_error: Optional[WriteErrorHandler] = None
    ) -> bool:
        """
        Write value to target's property

        Returns:
            True if the write was marshaled to a foreign context, False if
            it was applied in place
        """
        if not self.affinity.is_foreign_context(target):
            accessor.set(target, value)
            return False

        def write():
            try:
                accessor.set(target, value)
            except Exception as ex:
                log.error(
                    "Marshaled property write failed",
                    target=type(target).__name__,
                    property=accessor.name,
                    error=str(ex)
                )
                if on_error is None:
                    raise
                on_error(target, accessor, ex)

        self.affinity.marshal(target, write)
        return True
