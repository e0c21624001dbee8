"""intlkeys exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ConfigurationError",
    "IntlKeysError",
    "MalformedTranslationTreeError",
    "TranslationLoadError",
    "TranslationNotFoundError",
]


class IntlKeysError(Exception):
    """Base exception for all intlkeys errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize IntlKeysError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class MalformedTranslationTreeError(IntlKeysError):
    """Translation content is not a tree of string leaves.

    Raised for JSON syntax errors, array values, non-object roots, cyclic
    or excessively deep structures. The locale file is unusable for the
    current pass; the pass itself continues with the other locales.

    Attributes:
        line: Line of a JSON syntax error (1-indexed, None otherwise)
        column: Column of a JSON syntax error (1-indexed, None otherwise)
        path: Dotted key path where the tree stopped being well-formed
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        line: int | None = None,
        column: int | None = None,
        path: str = "",
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
        self.path = path


class TranslationLoadError(IntlKeysError):
    """A translation file exists but could not be read.

    Attributes:
        locale: Locale whose file failed to load
        source_path: Path of the file
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale: str = "",
        source_path: str = "",
    ) -> None:
        super().__init__(message)
        self.locale = locale
        self.source_path = source_path


class TranslationNotFoundError(IntlKeysError):
    """Requested locale is not part of the translation family."""


class ConfigurationError(IntlKeysError):
    """Invalid configuration value or unreadable configuration file."""
