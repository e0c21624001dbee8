"""Shared constants for intlkeys.

Centralized configuration constants used across the keys, translation,
reconcile and workspace packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for message tree walks
- Input limits: Size constraints for translation files
- Naming: Path separators, suffixes and the annotation source tag

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Naming
    "KEY_SEPARATOR",
    "JSON_SUFFIX",
    "SOURCE_TAG",
    "DEFAULT_TRANSLATIONS_FOLDER",
    "PYPROJECT_TABLE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth of a message tree.
# Real translation files rarely nest beyond 5 levels; anything deeper than
# 100 is either generated garbage or a cyclic structure built in Python.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum translation file size in characters (10 MB).
# Larger files are treated as unreadable for the pass.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# NAMING
# ============================================================================

# Separator between segments of a dotted key path: "nav.home.title"
KEY_SEPARATOR: str = "."

# Suffix of translation documents (single-file: messages/en.json)
JSON_SUFFIX: str = ".json"

# Source tag attached to every annotation so the host can filter/group them
SOURCE_TAG: str = "intlkeys"

# Translations folder relative to the project root when not configured
DEFAULT_TRANSLATIONS_FOLDER: str = "messages"

# pyproject.toml table holding the configuration: [tool.intlkeys]
PYPROJECT_TABLE: str = "intlkeys"
