"""Key paths: flattening message trees and locating keys in document text.

Python 3.13+.
"""

from .flatten import (
    FlatKey,
    flatten,
    join_path,
    namespace_of,
    namespace_paths,
    parent_path,
    parse_message_tree,
    resolve_path,
    split_path,
)
from .locator import KeyPosition, locate, locate_all
from .position import LineOffsetCache

__all__ = [
    "FlatKey",
    "KeyPosition",
    "LineOffsetCache",
    "flatten",
    "join_path",
    "locate",
    "locate_all",
    "namespace_of",
    "namespace_paths",
    "parent_path",
    "parse_message_tree",
    "resolve_path",
    "split_path",
]
