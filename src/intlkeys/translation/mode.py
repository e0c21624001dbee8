"""Mode resolution for translations folders.

Two layouts are supported:

    single-file                 folder
    messages/                   messages/
        en.json                     en/
        de.json                         common.json
                                        errors.json
                                    de/
                                        common.json

An explicit mode always wins. Under ``auto`` any subdirectory of the root
selects folder mode, even when loose ``.json`` files sit next to it;
otherwise single-file mode is used. A root that cannot be listed falls back
to single-file mode.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from intlkeys.constants import JSON_SUFFIX
from intlkeys.enums import TranslationsMode

if TYPE_CHECKING:
    from .types import LocaleCode

__all__ = [
    "DocumentLocation",
    "ModeResolution",
    "locate_document",
    "resolve_mode",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ModeResolution:
    """Resolved layout of a translations root.

    Attributes:
        single_file: True for one file per locale, False for one folder per locale
        reason: Why this layout was chosen (for logs and the CLI)
    """

    single_file: bool
    reason: str

    @property
    def mode(self) -> TranslationsMode:
        """Concrete mode (never AUTO)."""
        return TranslationsMode.SINGLE_FILE if self.single_file else TranslationsMode.FOLDER


@dataclass(frozen=True, slots=True)
class DocumentLocation:
    """Place of a document inside a translations root.

    Attributes:
        locale: Locale the document belongs to
        relative_path: POSIX path of the document below its locale folder
            (folder mode), or None in single-file mode
    """

    locale: LocaleCode
    relative_path: str | None = None


def resolve_mode(root: Path, mode: TranslationsMode = TranslationsMode.AUTO) -> ModeResolution:
    """Decide whether a translations root uses single-file or folder layout.

    Args:
        root: Translations root directory
        mode: Configured mode; ``single-file`` and ``folder`` are returned as is

    Returns:
        Resolved layout with the reason it was chosen
    """
    match mode:
        case TranslationsMode.SINGLE_FILE:
            return ModeResolution(single_file=True, reason="configured single-file mode")
        case TranslationsMode.FOLDER:
            return ModeResolution(single_file=False, reason="configured folder mode")

    try:
        entries = list(root.iterdir())
        has_folders = any(entry.is_dir() for entry in entries)
        has_json = any(entry.is_file() and entry.suffix == JSON_SUFFIX for entry in entries)
    except OSError as e:
        logger.warning(
            "Cannot list translations root %s (%s); using single-file mode", root, e
        )
        return ModeResolution(single_file=True, reason=f"cannot list translations root: {e}")

    if has_folders:
        resolution = ModeResolution(single_file=False, reason="found locale subfolders")
    elif has_json:
        resolution = ModeResolution(single_file=True, reason="found locale JSON files")
    else:
        resolution = ModeResolution(single_file=True, reason="no locale files found")
    logger.debug("Resolved %s to %s (%s)", root, resolution.mode, resolution.reason)
    return resolution


def locate_document(
    root: Path, document: Path, resolution: ModeResolution
) -> DocumentLocation | None:
    """Find which locale (and relative path) a document belongs to.

    Single-file mode expects ``<root>/<locale>.json``; folder mode expects
    ``<root>/<locale>/<relative path>.json``.

    Args:
        root: Translations root directory
        document: Path of the edited document
        resolution: Layout of the root

    Returns:
        Location of the document, or None when it is not a translation
        document of this root
    """
    if document.suffix != JSON_SUFFIX:
        return None
    try:
        relative = document.resolve().relative_to(root.resolve())
    except ValueError:
        return None

    parts = relative.parts
    if resolution.single_file:
        if len(parts) != 1:
            return None
        return DocumentLocation(locale=relative.stem)

    if len(parts) < 2:
        return None
    return DocumentLocation(locale=parts[0], relative_path=PurePath(*parts[1:]).as_posix())
