"""Key locator: map dotted key paths back to document text.

Locating is a regex scan of the raw document text, not a structural parse.
Only the LAST segment of a path is searched, as a quoted JSON member name
followed by a colon, and the first match in the whole document wins:

    {"a": {"title": "A"}, "b": {"title": "B"}}

    locate(text, "b.title")  -> range of the FIRST "title" (under "a")

Two leaves sharing a name under different parents therefore anchor to the
same, textually first, occurrence. Hosts only need a plausible anchor for
the annotation; when no occurrence exists the key is simply not rendered.

The returned range covers the bare key name between the quotes.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from intlkeys.constants import KEY_SEPARATOR

from .position import LineOffsetCache

if TYPE_CHECKING:
    from intlkeys.diagnostics import Range
    from intlkeys.translation.types import KeyPath

__all__ = [
    "KeyPosition",
    "key_pattern",
    "locate",
    "locate_all",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class KeyPosition:
    """Location of one key path in one document.

    Attributes:
        path: Dotted key path that was searched
        range: Range of the bare key name (quotes excluded)
    """

    path: KeyPath
    range: Range


@lru_cache(maxsize=1024)
def key_pattern(segment: str) -> re.Pattern[str]:
    """Compile the pattern matching ``"<segment>"`` used as a member name.

    The segment is written the way ``json.dumps`` writes it (quotes, control
    characters and backslashes escaped), so keys that need escaping are found
    in files produced by standard JSON serializers. The name itself is
    captured as group 1.
    """
    encoded = json.dumps(segment, ensure_ascii=False)[1:-1]
    return re.compile(rf'"({re.escape(encoded)})"\s*:')


def _last_segment(path: KeyPath) -> str:
    return path.rpartition(KEY_SEPARATOR)[2]


def locate(
    document_text: str,
    path: KeyPath,
    *,
    lines: LineOffsetCache | None = None,
) -> Range | None:
    """Find the range of a key's name token in a document.

    Args:
        document_text: Raw text of the document
        path: Dotted key path; only its last segment is searched
        lines: Precomputed line index of ``document_text`` (optional)

    Returns:
        Range of the first matching member name, or None when the name does
        not appear as a member name anywhere in the document

    Example:
        >>> text = '{"a": {"title": "A"}, "b": {"title": "B"}}'
        >>> locate(text, "b.title").start_offset
        8
    """
    match = key_pattern(_last_segment(path)).search(document_text)
    if match is None:
        return None
    if lines is None:
        lines = LineOffsetCache(document_text)
    return lines.range_of(match.start(1), match.end(1))


def locate_all(document_text: str, paths: Iterable[KeyPath]) -> tuple[KeyPosition, ...]:
    """Locate many key paths in one document.

    Paths are processed in the given order; duplicates are located once.
    Paths that cannot be located are left out.

    Args:
        document_text: Raw text of the document
        paths: Dotted key paths to locate

    Returns:
        KeyPosition for every locatable path, in input order
    """
    lines = LineOffsetCache(document_text)
    positions: list[KeyPosition] = []
    for path in dict.fromkeys(paths):
        found = locate(document_text, path, lines=lines)
        if found is None:
            logger.debug("No anchor for key '%s' in document", path)
            continue
        positions.append(KeyPosition(path, found))
    return tuple(positions)
