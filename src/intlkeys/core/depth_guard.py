"""Depth limiting for message tree walks.

Provides reusable depth tracking to prevent stack overflow from:
- Absurdly deep JSON nesting in translation files
- Cyclic trees built programmatically (a dict that contains itself)

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from intlkeys.constants import MAX_DEPTH
from intlkeys.diagnostics import MalformedTranslationTreeError

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(MalformedTranslationTreeError):
    """Raised when a message tree nests deeper than the allowed maximum.

    This error indicates either:
    - A generated or corrupted translation file
    - A cyclic structure handed to the flattener directly
    """


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage:
        guard = DepthGuard()
        with guard.at(path):
            yield from _walk(child, path, guard)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)
    _entry_path: str = field(default="", init=False, repr=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def at(self, path: str) -> DepthGuard:
        """Name the key path entered by the next ``with`` (reported on overflow)."""
        self._entry_path = path
        return self

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Checks the limit BEFORE incrementing: __exit__ is not called when
        __enter__ raises, so incrementing first would leave the guard
        permanently elevated.
        """
        path, self._entry_path = self._entry_path, ""
        self.check(path)
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    def check(self, path: str = "") -> None:
        """Explicitly check depth and raise if exceeded.

        Args:
            path: Dotted key path being entered (for the error message)

        Raises:
            DepthLimitExceededError: If depth limit exceeded
        """
        if self.current_depth >= self.max_depth:
            msg = (
                f"Message tree nesting exceeds {self.max_depth} levels"
                " (cyclic or generated structure?)"
            )
            raise DepthLimitExceededError(msg, path=path)


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary
    """
    max_safe_depth = sys.getrecursionlimit() - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). Clamping to %d.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
