"""Report builder: reconciliation results to document annotations.

Annotations are emitted in three blocks, always in this order:

1. one MISSING_NESTED_KEYS annotation per namespace, anchored on the
   namespace key;
2. one MISSING_TRANSLATION annotation per flagged key, anchored on the key;
3. one MISSING_PARENT_KEY annotation per structural finding.

Findings whose anchor could not be located are left out of the report.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from intlkeys.constants import SOURCE_TAG
from intlkeys.diagnostics import DiagnosticTemplate
from intlkeys.locale_utils import describe_locale

if TYPE_CHECKING:
    from intlkeys.diagnostics import Diagnostic, Position, Range
    from intlkeys.keys.locator import KeyPosition
    from intlkeys.reconcile.engine import ReconciliationResult
    from intlkeys.translation.types import KeyPath

__all__ = [
    "HoverInfo",
    "build",
    "hover",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HoverInfo:
    """Hover explanation for a flagged key.

    Attributes:
        key: Full dotted key path under the cursor
        range: Range of the key name in the document
        message: Plain per-key message (same text as the annotation)
        markdown: Rich text for hosts that render Markdown
    """

    key: KeyPath
    range: Range
    message: str
    markdown: str


def _anchors(positions: Iterable[KeyPosition]) -> dict[KeyPath, Range]:
    anchors: dict[KeyPath, Range] = {}
    for position in positions:
        anchors.setdefault(position.path, position.range)
    return anchors


def build(
    result: ReconciliationResult,
    positions: Iterable[KeyPosition],
    *,
    source: str = SOURCE_TAG,
) -> tuple[Diagnostic, ...]:
    """Turn reconciliation findings into warning annotations.

    Args:
        result: Findings of the pass
        positions: Located keys of the current document
        source: Tag attached to every annotation

    Returns:
        Annotations in report order
    """
    anchors = _anchors(positions)
    diagnostics: list[Diagnostic] = []
    dropped = 0

    for namespace, locale_keys in result.missing_nested_keys_by_parent.items():
        anchor = anchors.get(namespace)
        if anchor is None:
            dropped += 1
            continue
        diagnostics.append(
            DiagnosticTemplate.missing_nested_keys(namespace, locale_keys, anchor, source=source)
        )

    for key, locales in result.missing_translations_by_key.items():
        anchor = anchors.get(key)
        if anchor is None:
            dropped += 1
            continue
        diagnostics.append(
            DiagnosticTemplate.missing_translation(key, locales, anchor, source=source)
        )

    for finding in result.missing_parent_findings:
        anchor = anchors.get(finding.path)
        if anchor is None:
            dropped += 1
            continue
        diagnostics.append(
            DiagnosticTemplate.missing_parent(
                finding.path, finding.parent_path, anchor, source=source
            )
        )

    if dropped:
        logger.debug("Dropped %d finding(s) without an anchor in the document", dropped)
    return tuple(diagnostics)


def hover(
    result: ReconciliationResult,
    positions: Iterable[KeyPosition],
    position: Position,
    *,
    display_locale: str = "en",
) -> HoverInfo | None:
    """Explain the flagged key under the cursor.

    Several keys can share one anchor (same last segment); the first located
    key at the cursor that has missing locales is explained.

    Args:
        result: Findings of the cached pass
        positions: Located keys of the cached pass
        position: Cursor position (0-based)
        display_locale: Language of the locale display names

    Returns:
        Hover text, or None when no flagged key is under the cursor
    """
    for located in positions:
        if not located.range.contains(position):
            continue
        locales = result.missing_locales(located.path)
        if not locales:
            continue
        names = [describe_locale(locale, display_locale) for locale in locales]
        return HoverInfo(
            key=located.path,
            range=located.range,
            message=DiagnosticTemplate.missing_translation_message(located.path, locales),
            markdown=DiagnosticTemplate.hover_markdown(located.path, names),
        )
    return None
