"""Diagnostic codes and data structures.

Defines diagnostic codes, source ranges, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from intlkeys.constants import SOURCE_TAG

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "Position",
    "Range",
]


class DiagnosticCode(Enum):
    """Diagnostic codes with unique identifiers.

    Organized by category:
        1000-1999: Cross-locale findings (missing translations)
        2000-2999: Structural findings within one locale
    """

    # Cross-locale findings (1000-1999)
    MISSING_TRANSLATION = 1001
    MISSING_NESTED_KEYS = 1002

    # Structural findings (2000-2999)
    MISSING_PARENT_KEY = 2001


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based line/character position in a document.

    Follows the editor protocol convention: both ``line`` and ``character``
    start at 0, and ``character`` counts Unicode code points (Python string
    indices), not bytes.

    Attributes:
        line: Line number (0-indexed)
        character: Column within the line (0-indexed)
    """

    line: int
    character: int

    def __post_init__(self) -> None:
        """Validate Position invariants.

        Raises:
            ValueError: If line or character is negative.
        """
        if self.line < 0:
            msg = f"Position.line must be >= 0, got {self.line}"
            raise ValueError(msg)
        if self.character < 0:
            msg = f"Position.character must be >= 0, got {self.character}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open text range ``[start, end)`` in a document.

    Carries both line/character positions (for the host's rendering surface)
    and the raw character offsets they were computed from.

    Attributes:
        start: First position covered
        end: Position just past the last covered character
        start_offset: Character offset of start (0-indexed)
        end_offset: Character offset of end (exclusive)
    """

    start: Position
    end: Position
    start_offset: int = 0
    end_offset: int = 0

    def __post_init__(self) -> None:
        """Validate Range invariants.

        Raises:
            ValueError: If end precedes start.
        """
        if self.end < self.start:
            msg = f"Range.end ({self.end}) must not precede start ({self.start})"
            raise ValueError(msg)
        if self.end_offset < self.start_offset:
            msg = (
                f"Range.end_offset ({self.end_offset}) must be >= "
                f"start_offset ({self.start_offset})"
            )
            raise ValueError(msg)

    def contains(self, position: Position) -> bool:
        """Check whether a position falls inside the range.

        The end position is included so that a cursor placed right after the
        last character of a key (the usual hover spot) still matches.
        """
        return self.start <= position <= self.end


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured annotation produced for one document.

    Attributes:
        code: Unique diagnostic code
        message: Human-readable description
        range: Anchor in the document (None for document-level problems)
        severity: Severity level; reconciliation findings are always warnings
        source: Tag identifying the tool, used by hosts for filtering
        key: Dotted key path the diagnostic is about (if any)
        hint: Suggestion for fixing the problem
    """

    code: DiagnosticCode
    message: str
    range: Range | None = None
    severity: Literal["error", "warning"] = "warning"
    source: str = SOURCE_TAG
    key: str | None = None
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            warning[MISSING_TRANSLATION]: Missing translations for key "nav.home" in:
            de, fr
              --> line 3, column 5

        Returns:
            Formatted diagnostic message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
