"""Type aliases for the translation domain.

Provides semantic type aliases used throughout intlkeys and by host code
when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import TypeAlias

__all__ = [
    "DocumentPath",
    "JSONSource",
    "KeyPath",
    "LocaleCode",
    "MessageTree",
]

MessageTree: TypeAlias = "str | dict[str, MessageTree]"
"""Nested message mapping as parsed from a translation file."""

KeyPath: TypeAlias = str
"""Dotted path of a leaf in a message tree (e.g., 'nav.home.title')."""

LocaleCode: TypeAlias = str
"""Locale identifier taken from a file or folder name (e.g., 'en', 'pt-BR')."""

DocumentPath: TypeAlias = str
"""Filesystem path identifying a document, as reported by the host."""

JSONSource: TypeAlias = str
"""Raw JSON text of a translation file."""
