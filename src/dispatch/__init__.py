"""
Dispatch - safe delivery of property writes to their owning context
"""

from .affinity import ContextAffinity, NoAffinity, EventLoopAffinity, get_default_affinity
from .guard import DispatchGuard

__all__ = [
    'ContextAffinity',
    'NoAffinity',
    'EventLoopAffinity',
    'get_default_affinity',
    'DispatchGuard',
]
