"""
Utility functions for the transition engine
"""

from .colors import clamp_channel

__all__ = [
    'clamp_channel',
]
