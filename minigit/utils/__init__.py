"""Utilities module for common helper functions.

This module contains:
- Atomic file replacement for objects, the index and refs
"""

from minigit.utils.fs import atomic_write

__all__ = [
    'atomic_write',
]
