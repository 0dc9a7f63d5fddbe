"""
Execution-context affinity

Decides whether a target belongs to a single-threaded owner (an asyncio
event loop) other than the caller's, and schedules work onto that owner.
"""

import asyncio
import weakref
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.DISPATCH)


class ContextAffinity(ABC):
    """Affinity check + marshaling capability used by DispatchGuard"""

    @abstractmethod
    def is_foreign_context(self, target: Any) -> bool:
        """True if target is owned by a context other than the calling one"""
        raise NotImplementedError

    @abstractmethod
    def marshal(self, target: Any, action: Callable[[], None]) -> None:
        """Schedule action on the target's owning context and return immediately"""
        raise NotImplementedError


class NoAffinity(ContextAffinity):
    """Every target is local; writes always happen in place"""

    def is_foreign_context(self, target: Any) -> bool:
        return False

    def marshal(self, target: Any, action: Callable[[], None]) -> None:
        action()


class EventLoopAffinity(ContextAffinity):
    """
    Targets owned by asyncio event loops

    A target's owner is the loop registered with attach(), or the loop in its
    `owner_loop` attribute. Writes from any thread other than the one running
    that loop are queued with loop.call_soon_threadsafe().

    attach() holds targets weakly, so targets must support weak references;
    objects that don't can expose `owner_loop` instead.

    Example:
        affinity = EventLoopAffinity()
        affinity.attach(widget, asyncio.get_running_loop())

        guard = DispatchGuard(affinity)
        transition = Transition(LinearCurve(300), dispatch_guard=guard)
    """

    OWNER_ATTRIBUTE = "owner_loop"

    def __init__(self):
        self._owners: "weakref.WeakKeyDictionary[Any, asyncio.AbstractEventLoop]" = weakref.WeakKeyDictionary()

    def attach(self, target: Any, loop: asyncio.AbstractEventLoop) -> None:
        """Register loop as the owner of target"""
        self._owners[target] = loop
        log.debug("Target attached to event loop", target=type(target).__name__)

    def detach(self, target: Any) -> None:
        self._owners.pop(target, None)

    def owner_loop(self, target: Any) -> Optional[asyncio.AbstractEventLoop]:
        try:
            loop = self._owners.get(target)
        except TypeError:
            # Unhashable or not weak-referenceable: can only be attached by attribute
            loop = None
        if loop is None:
            loop = getattr(target, self.OWNER_ATTRIBUTE, None)
        return loop

    def is_foreign_context(self, target: Any) -> bool:
        loop = self.owner_loop(target)
        if loop is None:
            return False

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        return running is not loop

    def marshal(self, target: Any, action: Callable[[], None]) -> None:
        loop = self.owner_loop(target)
        if loop is None:
            action()
            return
        # Raises RuntimeError once the owner loop is closed
        loop.call_soon_threadsafe(action)


# === Global instance helpers ===
_affinity = EventLoopAffinity()

def get_default_affinity() -> EventLoopAffinity:
    """Process-wide affinity used by transitions built without a DispatchGuard"""
    return _affinity
