"""One reconciliation pass for one document.

    document text ──► load_family ──► reconcile ──► locate_all ──► build
                        (mode, loader)                (positions)    (annotations)

run_pass is free of side effects: it reads translation files but never
touches caches or sinks. Both the workspace checker and the command line
front end are built on it.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from intlkeys.diagnostics import MalformedTranslationTreeError
from intlkeys.keys.locator import locate_all
from intlkeys.reconcile.engine import reconcile
from intlkeys.report.builder import build
from intlkeys.translation.loading import TranslationFileLoader, load_family
from intlkeys.translation.mode import locate_document, resolve_mode

if TYPE_CHECKING:
    from intlkeys.config import CheckerConfig
    from intlkeys.diagnostics import Diagnostic
    from intlkeys.keys.locator import KeyPosition
    from intlkeys.reconcile.engine import ReconciliationResult
    from intlkeys.translation.mode import DocumentLocation, ModeResolution
    from intlkeys.translation.model import TranslationFamily
    from intlkeys.translation.types import JSONSource

__all__ = [
    "CheckResult",
    "run_pass",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Everything one pass computed for a document.

    Attributes:
        document: Path of the checked document
        location: Locale and relative path of the document
        family: Translations compared in the pass
        result: Reconciliation findings
        positions: Located anchors of the findings
        diagnostics: Annotations for the document
        version: Document version the pass ran on (None if unversioned)
    """

    document: Path
    location: DocumentLocation
    family: TranslationFamily
    result: ReconciliationResult
    positions: tuple[KeyPosition, ...]
    diagnostics: tuple[Diagnostic, ...]
    version: int | None = None

    @property
    def has_findings(self) -> bool:
        """Check if the pass produced any annotation."""
        return bool(self.diagnostics)


def run_pass(
    translations_root: Path,
    document: Path,
    text: JSONSource,
    config: CheckerConfig,
    *,
    resolution: ModeResolution | None = None,
    version: int | None = None,
) -> CheckResult | None:
    """Check one document against the other locales of its family.

    Args:
        translations_root: Existing translations root directory
        document: Path of the document
        text: Current text of the document (may be unsaved)
        config: Checker settings
        resolution: Layout of the root (resolved from ``config.mode`` if omitted)
        version: Document version, recorded on the result

    Returns:
        The pass result, or None when the document is not a translation
        document of the root or cannot be parsed
    """
    if resolution is None:
        resolution = resolve_mode(translations_root, config.mode)

    location = locate_document(translations_root, document, resolution)
    if location is None:
        logger.debug("%s is not a translation document of %s", document, translations_root)
        return None

    loader = TranslationFileLoader(translations_root, resolution)
    try:
        family = load_family(
            loader,
            location,
            text,
            locales=config.locales,
            skip_empty=config.empty_values_missing,
        )
    except MalformedTranslationTreeError as e:
        logger.warning("Cannot check %s (locale '%s'): %s", document, location.locale, e)
        return None
    except ValueError as e:
        logger.warning("Refusing to check %s: %s", document, e)
        return None

    result = reconcile(location.locale, family, policy=config.comparison)
    positions = locate_all(text, result.anchor_paths())
    diagnostics = build(result, positions, source=config.source)

    logger.info(
        "Checked %s (locale '%s', %s): %d annotation(s), %r",
        document,
        location.locale,
        resolution.mode,
        len(diagnostics),
        family.load_summary,
    )
    return CheckResult(
        document=document,
        location=location,
        family=family,
        result=result,
        positions=positions,
        diagnostics=diagnostics,
        version=version,
    )
