"""intlkeys - missing-key detection for JSON translation files.

Compares the locales of a translations folder (one ``<locale>.json`` per
locale, or one folder per locale holding namespace files) and reports keys
missing from some locales as warning annotations anchored on the key names
of the checked document.

Public API:
    TranslationChecker - Host-facing checker of open documents
    CheckerConfig, load_config - Settings and their pyproject.toml loader
    flatten - Flatten a message tree into dotted key paths
    locate - Find the range of a key name in document text
    reconcile - Compare a locale against its translation family
    build_report - Turn findings into annotations

Exceptions:
    IntlKeysError - Base exception class
    MalformedTranslationTreeError - Invalid JSON or message tree
    TranslationLoadError - Unreadable translation file
    TranslationNotFoundError - Locale missing from a family
    ConfigurationError - Invalid settings

Submodules:
    intlkeys.keys - Flattening and locating
    intlkeys.translation - Translation model, loading and mode resolution
    intlkeys.reconcile - Reconciliation engine
    intlkeys.report - Annotation and hover text
    intlkeys.diagnostics - Diagnostic data model, templates and formatting
    intlkeys.workspace - Pass orchestration, cache and host hooks
"""

from .config import CheckerConfig, load_config
from .diagnostics import (
    ConfigurationError,
    Diagnostic,
    IntlKeysError,
    MalformedTranslationTreeError,
    Position,
    Range,
    TranslationLoadError,
    TranslationNotFoundError,
)
from .enums import ComparisonPolicy, TranslationsMode
from .keys import flatten, locate
from .reconcile import reconcile
from .report import build as build_report
from .workspace import TranslationChecker

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("intlkeys")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CheckerConfig",
    "ComparisonPolicy",
    "ConfigurationError",
    "Diagnostic",
    "IntlKeysError",
    "MalformedTranslationTreeError",
    "Position",
    "Range",
    "TranslationChecker",
    "TranslationLoadError",
    "TranslationNotFoundError",
    "TranslationsMode",
    "__version__",
    "build_report",
    "flatten",
    "load_config",
    "locate",
    "reconcile",
]
