"""
Property access on arbitrary target objects
"""

from .accessor import PropertyAccessor, AccessorResolver, AttributeAccessorResolver

__all__ = [
    'PropertyAccessor',
    'AccessorResolver',
    'AttributeAccessorResolver',
]
