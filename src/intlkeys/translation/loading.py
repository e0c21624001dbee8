"""Translation loading: files on disk to a TranslationFamily.

Components:
    TranslationFileLoader - Disk loader with path-traversal prevention
    ResourceLoadResult - Immutable result of a single load attempt
    LoadSummary - Immutable aggregate of the load attempts of one pass
    load_family - Build the family compared against one document

Failure handling per locale:
    missing equivalent file  -> NOT_FOUND, empty translation (contributes no keys)
    unreadable file          -> ERROR, locale excluded, warning logged
    malformed JSON / tree    -> ERROR, locale excluded, warning logged

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from intlkeys.constants import JSON_SUFFIX
from intlkeys.diagnostics import (
    IntlKeysError,
    MalformedTranslationTreeError,
    TranslationLoadError,
)
from intlkeys.enums import LoadStatus

from .model import LocaleTranslation, TranslationFamily

if TYPE_CHECKING:
    from .mode import DocumentLocation, ModeResolution
    from .types import JSONSource, LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Concrete loader
    "TranslationFileLoader",
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
    # Family construction
    "load_family",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TranslationFileLoader:
    """File system loader for one translations root.

    Security:
        Locale codes containing path separators or ".." are rejected.
        Relative paths containing ".." or absolute paths are rejected.
        All resolved paths are validated against the translations root.

    Example:
        >>> loader = TranslationFileLoader(Path("messages"), resolution)
        >>> loader.load("de", "common.json")  # folder mode
        # Reads: messages/de/common.json

    Attributes:
        root: Translations root directory
        resolution: Layout of the root
    """

    root: Path
    resolution: ModeResolution
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache the resolved root directory."""
        object.__setattr__(self, "_resolved_root", self.root.resolve())

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        """Validate locale code for path traversal.

        Raises:
            ValueError: If locale contains unsafe path components
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    @staticmethod
    def _validate_relative_path(relative_path: str) -> None:
        """Validate a folder-mode relative path for path traversal.

        Raises:
            ValueError: If the path is absolute or escapes the locale folder
        """
        if Path(relative_path).is_absolute() or relative_path.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in relative path: '{relative_path}'"
            raise ValueError(msg)
        if ".." in Path(relative_path).parts:
            msg = f"Path traversal sequences not allowed in relative path: '{relative_path}'"
            raise ValueError(msg)

    def path_for(self, locale: LocaleCode, relative_path: str | None = None) -> Path:
        """Return the file holding a locale's copy of a document.

        Args:
            locale: Locale code
            relative_path: Path below the locale folder (folder mode only)

        Raises:
            ValueError: On unsafe locale or relative path, or when folder mode
                is used without a relative path
        """
        self._validate_locale(locale)
        if self.resolution.single_file:
            full_path = self._resolved_root / f"{locale}{JSON_SUFFIX}"
        else:
            if relative_path is None:
                msg = "Folder mode requires the relative path of the compared file"
                raise ValueError(msg)
            self._validate_relative_path(relative_path)
            full_path = self._resolved_root / locale / relative_path

        if not full_path.resolve().is_relative_to(self._resolved_root):
            msg = (
                f"Path traversal detected: resolved path escapes translations root. "
                f"locale='{locale}', relative_path='{relative_path}'"
            )
            raise ValueError(msg)
        return full_path

    def load(self, locale: LocaleCode, relative_path: str | None = None) -> JSONSource:
        """Read a locale's translation file.

        Raises:
            ValueError: On unsafe locale or relative path
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not UTF-8
        """
        return self.path_for(locale, relative_path).read_text(encoding="utf-8")

    def discover_locales(self) -> tuple[LocaleCode, ...]:
        """List the locales present under the root, sorted by name.

        Single-file mode lists ``*.json`` file stems, folder mode lists
        subdirectory names. An unreadable root yields no locales.
        """
        try:
            if self.resolution.single_file:
                found = [
                    entry.stem
                    for entry in self._resolved_root.iterdir()
                    if entry.is_file() and entry.suffix == JSON_SUFFIX
                ]
            else:
                found = [entry.name for entry in self._resolved_root.iterdir() if entry.is_dir()]
        except OSError as e:
            logger.warning("Cannot list translations root %s: %s", self.root, e)
            return ()
        return tuple(sorted(found))


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading one locale's translation file.

    Attributes:
        locale: Locale code
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
        source_path: Path of the file (if known)
    """

    locale: LocaleCode
    status: LoadStatus
    error: IntlKeysError | None = None
    source_path: str | None = None

    @property
    def is_success(self) -> bool:
        """Check if the file loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the locale has no equivalent file."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the file could not be read or parsed."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the load results of one pass.

    Attributes:
        results: All individual load results, in family order
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of locales without an equivalent file."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of locales excluded because of load errors."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        """Check if any locale was excluded."""
        return self.errors > 0

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results where no equivalent file exists."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_by_locale(self, locale: LocaleCode) -> ResourceLoadResult | None:
        """Get the result of one locale."""
        return next((r for r in self.results if r.locale == locale), None)


def _family_order(
    current: LocaleCode, declared: Sequence[LocaleCode], discovered: Sequence[LocaleCode]
) -> tuple[LocaleCode, ...]:
    """Locales of a family: declared order when configured, else sorted discovery.

    The current locale is always part of the family.
    """
    if declared:
        order = list(dict.fromkeys(declared))
        if current not in order:
            order.append(current)
        return tuple(order)
    return tuple(sorted({*discovered, current}))


def _load_other(
    loader: TranslationFileLoader,
    locale: LocaleCode,
    relative_path: str | None,
    *,
    skip_empty: bool,
) -> tuple[LocaleTranslation | None, ResourceLoadResult]:
    """Load one non-current locale, converting failures into load results."""
    try:
        path = loader.path_for(locale, relative_path)
    except ValueError as e:
        logger.warning("Skipping locale '%s': %s", locale, e)
        error = TranslationLoadError(str(e), locale=locale)
        return None, ResourceLoadResult(locale, LoadStatus.ERROR, error=error)

    source_path = str(path)
    try:
        source = loader.load(locale, relative_path)
    except FileNotFoundError:
        logger.debug("No equivalent file for locale '%s': %s", locale, source_path)
        translation = LocaleTranslation(locale=locale, source_path=source_path)
        return translation, ResourceLoadResult(
            locale, LoadStatus.NOT_FOUND, source_path=source_path
        )
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s (locale '%s'): %s", source_path, locale, e)
        error = TranslationLoadError(
            f"Cannot read {source_path}: {e}", locale=locale, source_path=source_path
        )
        return None, ResourceLoadResult(
            locale, LoadStatus.ERROR, error=error, source_path=source_path
        )

    try:
        translation = LocaleTranslation.from_source(
            locale, source, skip_empty=skip_empty, source_path=source_path
        )
    except MalformedTranslationTreeError as e:
        logger.warning("Malformed translation file %s (locale '%s'): %s", source_path, locale, e)
        return None, ResourceLoadResult(
            locale, LoadStatus.ERROR, error=e, source_path=source_path
        )
    return translation, ResourceLoadResult(locale, LoadStatus.SUCCESS, source_path=source_path)


def load_family(
    loader: TranslationFileLoader,
    location: DocumentLocation,
    current_source: JSONSource,
    *,
    locales: Sequence[LocaleCode] = (),
    skip_empty: bool = True,
) -> TranslationFamily:
    """Build the translation family compared against one document.

    The current locale is built from the document text (the editor buffer,
    which may differ from the file on disk); every other locale is read from
    its equivalent file.

    Args:
        loader: Loader of the translations root
        location: Locale and relative path of the document
        current_source: Text of the document
        locales: Declared locale order/subset (empty: every locale found)
        skip_empty: Treat blank leaves as absent

    Returns:
        Family in locale order, with the load summary of the pass

    Raises:
        MalformedTranslationTreeError: If the document itself is not a valid
            message tree
    """
    current = location.locale
    current_path = str(loader.path_for(current, location.relative_path))
    translations: list[LocaleTranslation] = []
    results: list[ResourceLoadResult] = []
    discovered = () if locales else loader.discover_locales()

    for locale in _family_order(current, locales, discovered):
        if locale == current:
            translations.append(
                LocaleTranslation.from_source(
                    current, current_source, skip_empty=skip_empty, source_path=current_path
                )
            )
            results.append(
                ResourceLoadResult(current, LoadStatus.SUCCESS, source_path=current_path)
            )
            continue
        translation, result = _load_other(
            loader, locale, location.relative_path, skip_empty=skip_empty
        )
        results.append(result)
        if translation is not None:
            translations.append(translation)

    summary = LoadSummary(tuple(results))
    logger.debug("Loaded family for '%s' (%s): %r", current, location.relative_path, summary)
    return TranslationFamily(
        translations=tuple(translations),
        relative_path=location.relative_path,
        load_summary=summary,
    )
