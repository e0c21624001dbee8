"""Core utilities shared across the keys, translation and workspace layers.

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded
    RWLock: Readers-writer lock used by the document cache

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError
from .rwlock import RWLock

__all__ = ["DepthGuard", "DepthLimitExceededError", "RWLock"]
