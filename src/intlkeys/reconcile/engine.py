"""Reconciliation engine: cross-locale key comparison.

Given the translation family of one document, computes three independent
groupings relative to the document's (current) locale:

1. missing_translations_by_key
       full key path -> locales flagged for it
   A key of the current locale absent from locale L is flagged with L.
   Under the symmetric policy (default) a key of L absent from the current
   locale is flagged with L as well, so a key that exists only elsewhere is
   still reported when the document has a matching name to anchor it on.

2. missing_nested_keys_by_parent
       first segment -> locale -> full paths present in L but not in the document
   Grouping is always rooted at the first segment, never at deeper ancestors.

3. missing_parent_findings
   Keys of the current locale whose parent path is neither a present key nor
   an object node of the current tree. This only fires for keys that carry
   dots inside their own name, e.g. {"a.b": "x"} or {"a": "", "a.b": "x"}.
   It is a single-locale structural check and ignores other locales.

Ordering is deterministic: locales in family order, keys in flattening order.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from intlkeys.enums import ComparisonPolicy
from intlkeys.keys.flatten import namespace_of, parent_path

if TYPE_CHECKING:
    from intlkeys.translation.model import LocaleTranslation, TranslationFamily
    from intlkeys.translation.types import KeyPath, LocaleCode

__all__ = [
    "MissingParentFinding",
    "ReconciliationResult",
    "reconcile",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MissingParentFinding:
    """Key whose parent path is absent from its own locale.

    Attributes:
        path: Full dotted key path
        parent_path: Path without the last segment
    """

    path: KeyPath
    parent_path: KeyPath


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Findings of one reconciliation pass.

    All collections are read-only, ordered and free of duplicates.

    Attributes:
        current_locale: Locale the family was reconciled against
        missing_translations_by_key: Key path -> flagged locales
        missing_nested_keys_by_parent: Namespace -> locale -> missing full paths
        missing_parent_findings: Structural findings of the current locale
    """

    current_locale: LocaleCode
    missing_translations_by_key: Mapping[KeyPath, tuple[LocaleCode, ...]] = field(
        default_factory=dict
    )
    missing_nested_keys_by_parent: Mapping[str, Mapping[LocaleCode, tuple[KeyPath, ...]]] = (
        field(default_factory=dict)
    )
    missing_parent_findings: tuple[MissingParentFinding, ...] = ()

    def __post_init__(self) -> None:
        """Freeze the mappings."""
        object.__setattr__(
            self,
            "missing_translations_by_key",
            MappingProxyType(dict(self.missing_translations_by_key)),
        )
        object.__setattr__(
            self,
            "missing_nested_keys_by_parent",
            MappingProxyType(
                {
                    namespace: MappingProxyType(dict(locale_keys))
                    for namespace, locale_keys in self.missing_nested_keys_by_parent.items()
                }
            ),
        )

    @property
    def is_clean(self) -> bool:
        """Check if the pass found nothing to report."""
        return not (
            self.missing_translations_by_key
            or self.missing_nested_keys_by_parent
            or self.missing_parent_findings
        )

    @property
    def finding_count(self) -> int:
        """Number of entries across the three groupings."""
        return (
            len(self.missing_translations_by_key)
            + len(self.missing_nested_keys_by_parent)
            + len(self.missing_parent_findings)
        )

    def missing_locales(self, path: KeyPath) -> tuple[LocaleCode, ...]:
        """Locales flagged for a key (empty when the key is not flagged)."""
        return self.missing_translations_by_key.get(path, ())

    def anchor_paths(self) -> tuple[KeyPath, ...]:
        """Every path the report needs a position for, without duplicates."""
        paths: dict[KeyPath, None] = {}
        paths.update(dict.fromkeys(self.missing_nested_keys_by_parent))
        paths.update(dict.fromkeys(self.missing_translations_by_key))
        paths.update(dict.fromkeys(f.path for f in self.missing_parent_findings))
        return tuple(paths)


def _group_by_namespace(keys: Iterable[KeyPath]) -> dict[str, dict[KeyPath, None]]:
    """Group multi-segment keys by first segment (ordered sets as dict keys)."""
    groups: dict[str, dict[KeyPath, None]] = {}
    for key in keys:
        if parent_path(key) is None:
            continue
        groups.setdefault(namespace_of(key), {})[key] = None
    return groups


def _missing_parents(current: LocaleTranslation) -> tuple[MissingParentFinding, ...]:
    findings: list[MissingParentFinding] = []
    for key in current.keys:
        parent = parent_path(key)
        if parent is None or current.has_key(parent) or current.is_namespace(parent):
            continue
        findings.append(MissingParentFinding(key, parent))
    return tuple(findings)


def reconcile(
    current_locale: LocaleCode,
    family: TranslationFamily,
    *,
    policy: ComparisonPolicy = ComparisonPolicy.SYMMETRIC,
) -> ReconciliationResult:
    """Compare the current locale against every other locale of its family.

    Args:
        current_locale: Locale of the document being checked
        family: Translations compared in this pass
        policy: SYMMETRIC also flags keys that exist only in other locales;
            CURRENT_ONLY checks the current locale's keys only

    Returns:
        The three groupings of findings

    Raises:
        TranslationNotFoundError: If current_locale is not part of the family

    Example:
        >>> en = LocaleTranslation("en", {"greeting": "Hello", "nested.message": "Hi"})
        >>> de = LocaleTranslation("de", {"greeting": "Hallo"})
        >>> result = reconcile("en", TranslationFamily((en, de)))
        >>> dict(result.missing_translations_by_key)
        {'nested.message': ('de',)}
    """
    current = family.get(current_locale)
    current_keys = current.keys
    current_groups = _group_by_namespace(current_keys)

    missing: dict[KeyPath, dict[LocaleCode, None]] = {}
    nested: dict[str, dict[LocaleCode, tuple[KeyPath, ...]]] = {}

    for other in family.others(current_locale):
        locale = other.locale
        for key in current_keys:
            if not other.has_key(key):
                missing.setdefault(key, {})[locale] = None
        if policy == ComparisonPolicy.SYMMETRIC:
            for key in other.keys:
                if not current.has_key(key):
                    missing.setdefault(key, {})[locale] = None

        for namespace, other_keys in _group_by_namespace(other.keys).items():
            present = current_groups.get(namespace, {})
            absent = tuple(key for key in other_keys if key not in present)
            if absent:
                nested.setdefault(namespace, {})[locale] = absent

    result = ReconciliationResult(
        current_locale=current_locale,
        missing_translations_by_key={key: tuple(locales) for key, locales in missing.items()},
        missing_nested_keys_by_parent=nested,
        missing_parent_findings=_missing_parents(current),
    )
    logger.debug(
        "Reconciled '%s' against %d locale(s): %d finding(s)",
        current_locale,
        len(family) - 1,
        result.finding_count,
    )
    return result
