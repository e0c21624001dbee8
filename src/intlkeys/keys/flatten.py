"""Key flattening for nested JSON message trees.

Turns a nested message mapping into the ordered sequence of dotted leaf paths
that the reconciliation engine compares across locales:

    {"nav": {"home": "Home", "about": ""}, "title": "Site"}
        -> FlatKey("nav.home", "Home"), FlatKey("title", "Site")

Rules:
- Only string values are leaves; mappings are walked, never emitted.
- Depth-first, in the insertion order of the parsed JSON object.
- Leaves whose trimmed value is empty count as absent (strict policy,
  the default); ``skip_empty=False`` keeps them (loose policy).
- Numbers, booleans and null are skipped: they are neither messages nor
  namespaces.
- Arrays, non-object roots, cycles and runaway nesting are malformed.

All functions are pure and return freshly built tuples.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from intlkeys.constants import KEY_SEPARATOR, MAX_SOURCE_SIZE
from intlkeys.core.depth_guard import DepthGuard
from intlkeys.diagnostics import MalformedTranslationTreeError

if TYPE_CHECKING:
    from intlkeys.translation.types import JSONSource, KeyPath, MessageTree

__all__ = [
    "FlatKey",
    "flatten",
    "join_path",
    "namespace_of",
    "namespace_paths",
    "parent_path",
    "parse_message_tree",
    "resolve_path",
    "split_path",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FlatKey:
    """One leaf of a message tree.

    Attributes:
        path: Dotted path of the leaf (segments joined by ".")
        value: Leaf string value
    """

    path: KeyPath
    value: str

    @property
    def segments(self) -> tuple[str, ...]:
        """Path segments, outermost first."""
        return split_path(self.path)


# ============================================================================
# PATH HELPERS
# ============================================================================


def split_path(path: KeyPath) -> tuple[str, ...]:
    """Split a dotted path into its segments."""
    return tuple(path.split(KEY_SEPARATOR))


def join_path(prefix: KeyPath, segment: str) -> KeyPath:
    """Append a segment to a dotted path ("" prefix means top level)."""
    return f"{prefix}{KEY_SEPARATOR}{segment}" if prefix else segment


def parent_path(path: KeyPath) -> KeyPath | None:
    """Return the path without its last segment, or None for top-level keys.

    Example:
        >>> parent_path("nav.home.title")
        'nav.home'
        >>> parent_path("title") is None
        True
    """
    head, separator, _ = path.rpartition(KEY_SEPARATOR)
    return head if separator else None


def namespace_of(path: KeyPath) -> str:
    """Return the first segment of a path (its grouping namespace)."""
    return path.split(KEY_SEPARATOR, 1)[0]


# ============================================================================
# PARSING
# ============================================================================


def parse_message_tree(source: JSONSource) -> dict[str, MessageTree]:
    """Parse JSON text into a message tree.

    A leading UTF-8 byte order mark is ignored.

    Args:
        source: Raw JSON text of a translation file

    Returns:
        Root mapping of the message tree

    Raises:
        MalformedTranslationTreeError: On JSON syntax errors, nesting too deep
            for the decoder, oversized input, or a root that is not a JSON
            object. JSON syntax errors carry 1-indexed line and column.
    """
    if len(source) > MAX_SOURCE_SIZE:
        msg = f"Translation source exceeds {MAX_SOURCE_SIZE} characters"
        raise MalformedTranslationTreeError(msg)

    try:
        tree = json.loads(source.removeprefix("\ufeff"))
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"
        raise MalformedTranslationTreeError(msg, line=e.lineno, column=e.colno) from e
    except RecursionError as e:
        msg = "Invalid JSON: nesting too deep"
        raise MalformedTranslationTreeError(msg) from e

    if not isinstance(tree, dict):
        msg = f"Translation root must be a JSON object, got {type(tree).__name__}"
        raise MalformedTranslationTreeError(msg)
    return tree


# ============================================================================
# TREE WALK
# ============================================================================


def _iter_entries(
    tree: Any,
    prefix: KeyPath,
    guard: DepthGuard,
    ancestors: frozenset[int],
) -> Iterator[tuple[KeyPath, Any]]:
    """Yield (path, value) for every mapping entry, depth-first.

    Mapping values are yielded before their children so callers can collect
    interior paths as well as leaves.
    """
    if id(tree) in ancestors:
        msg = f"Cyclic message tree at '{prefix}'"
        raise MalformedTranslationTreeError(msg, path=prefix)

    with guard.at(prefix):
        inner = ancestors | {id(tree)}
        for segment, value in tree.items():
            if not isinstance(segment, str):
                msg = (
                    f"Message keys must be strings, got {type(segment).__name__}"
                    f" under '{prefix}'"
                )
                raise MalformedTranslationTreeError(msg, path=prefix)
            path = join_path(prefix, segment)
            match value:
                case str():
                    yield path, value
                case dict():
                    yield path, value
                    yield from _iter_entries(value, path, guard, inner)
                case list() | tuple():
                    msg = f"Array value at '{path}' is not a valid message"
                    raise MalformedTranslationTreeError(msg, path=path)
                case _:
                    logger.debug(
                        "Skipping non-string value at '%s' (%s)", path, type(value).__name__
                    )


def _entries(tree: Any) -> Iterator[tuple[KeyPath, Any]]:
    if not isinstance(tree, dict):
        msg = f"Message tree root must be a mapping, got {type(tree).__name__}"
        raise MalformedTranslationTreeError(msg)
    return _iter_entries(tree, "", DepthGuard(), frozenset())


def flatten(tree: MessageTree, *, skip_empty: bool = True) -> tuple[FlatKey, ...]:
    """Flatten a message tree into its ordered leaf keys.

    Args:
        tree: Root mapping of a message tree
        skip_empty: Treat leaves whose trimmed value is empty as absent

    Returns:
        Leaves in depth-first insertion order

    Raises:
        MalformedTranslationTreeError: If the tree is not a mapping of string
            leaves (arrays, cycles, non-string keys, excessive depth)

    Example:
        >>> flatten({"a": "x", "b": {"c": "y", "d": ""}})
        (FlatKey(path='a', value='x'), FlatKey(path='b.c', value='y'))
    """
    return tuple(
        FlatKey(path, value)
        for path, value in _entries(tree)
        if isinstance(value, str) and not (skip_empty and not value.strip())
    )


def namespace_paths(tree: MessageTree) -> tuple[KeyPath, ...]:
    """Return the paths of every interior (mapping) node, depth-first.

    Example:
        >>> namespace_paths({"a": {"b": {"c": "x"}}, "d": "y"})
        ('a', 'a.b')
    """
    return tuple(path for path, value in _entries(tree) if isinstance(value, dict))


def resolve_path(tree: MessageTree, path: KeyPath) -> str | None:
    """Walk a dotted path through a tree.

    Args:
        tree: Root mapping of a message tree
        path: Dotted key path

    Returns:
        The string leaf at ``path``, or None when the path does not end on a
        string (missing segment, interior node, non-string value)
    """
    node: Any = tree
    for segment in split_path(path):
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return node if isinstance(node, str) else None
