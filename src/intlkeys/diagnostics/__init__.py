"""Diagnostic system for intlkeys.

Provides structured annotations with codes, ranges and hints, the exception
hierarchy, message templates and output formatting.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, Position, Range
from .errors import (
    ConfigurationError,
    IntlKeysError,
    MalformedTranslationTreeError,
    TranslationLoadError,
    TranslationNotFoundError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import DiagnosticTemplate

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DiagnosticTemplate",
    "IntlKeysError",
    "MalformedTranslationTreeError",
    "OutputFormat",
    "Position",
    "Range",
    "TranslationLoadError",
    "TranslationNotFoundError",
]
