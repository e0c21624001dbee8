"""Translation set model.

A LocaleTranslation is the flattened view of one locale's translation file;
a TranslationFamily is the set of locales compared together in one pass.
Both are immutable and rebuilt wholesale whenever the underlying files or
the document buffer change.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from intlkeys.diagnostics import TranslationNotFoundError
from intlkeys.keys.flatten import flatten, namespace_paths, parse_message_tree

if TYPE_CHECKING:
    from .loading import LoadSummary
    from .types import DocumentPath, JSONSource, KeyPath, LocaleCode, MessageTree

__all__ = [
    "LocaleTranslation",
    "TranslationFamily",
]


@dataclass(frozen=True, slots=True)
class LocaleTranslation:
    """Flattened messages of one locale.

    Attributes:
        locale: Locale identifier (file stem or folder name)
        messages: Read-only ``path -> value`` mapping of present leaves, in
            flattening order
        namespaces: Paths of every interior (object) node of the tree
        source_path: File the translation was read from, if any
    """

    locale: LocaleCode
    messages: Mapping[KeyPath, str] = field(default_factory=dict)
    namespaces: frozenset[KeyPath] = frozenset()
    source_path: DocumentPath | None = None

    def __post_init__(self) -> None:
        """Freeze the messages mapping."""
        if not isinstance(self.messages, MappingProxyType):
            object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @classmethod
    def from_tree(
        cls,
        locale: LocaleCode,
        tree: MessageTree,
        *,
        skip_empty: bool = True,
        source_path: DocumentPath | None = None,
    ) -> LocaleTranslation:
        """Build a translation from a parsed message tree.

        Args:
            locale: Locale identifier
            tree: Root mapping of the message tree
            skip_empty: Treat blank leaves as absent
            source_path: File the tree came from (for diagnostics)

        Raises:
            MalformedTranslationTreeError: If the tree is malformed
        """
        keys = flatten(tree, skip_empty=skip_empty)
        return cls(
            locale=locale,
            messages={key.path: key.value for key in keys},
            namespaces=frozenset(namespace_paths(tree)),
            source_path=source_path,
        )

    @classmethod
    def from_source(
        cls,
        locale: LocaleCode,
        source: JSONSource,
        *,
        skip_empty: bool = True,
        source_path: DocumentPath | None = None,
    ) -> LocaleTranslation:
        """Parse JSON text and build a translation from it.

        Raises:
            MalformedTranslationTreeError: If the text is not a valid message tree
        """
        return cls.from_tree(
            locale,
            parse_message_tree(source),
            skip_empty=skip_empty,
            source_path=source_path,
        )

    @property
    def keys(self) -> tuple[KeyPath, ...]:
        """Present key paths, in flattening order."""
        return tuple(self.messages)

    def has_key(self, path: KeyPath) -> bool:
        """Check whether a leaf is present (non-blank under the strict policy)."""
        return path in self.messages

    def is_namespace(self, path: KeyPath) -> bool:
        """Check whether a path names an interior node of the tree."""
        return path in self.namespaces


@dataclass(frozen=True, slots=True)
class TranslationFamily:
    """Locales compared together in one reconciliation pass.

    In single-file mode the family holds one translation per ``<locale>.json``
    file; in folder mode it holds each locale's copy of one relative path.

    Attributes:
        translations: Translations in load order (declared or sorted by name)
        relative_path: Relative path of the compared file in folder mode
        load_summary: Outcome of every load attempt of the pass (optional)
    """

    translations: tuple[LocaleTranslation, ...]
    relative_path: str | None = None
    load_summary: LoadSummary | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate that every locale appears once.

        Raises:
            ValueError: If two translations share a locale
        """
        seen: set[str] = set()
        for translation in self.translations:
            if translation.locale in seen:
                msg = f"Duplicate locale in translation family: '{translation.locale}'"
                raise ValueError(msg)
            seen.add(translation.locale)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locale identifiers in family order."""
        return tuple(t.locale for t in self.translations)

    def get(self, locale: LocaleCode) -> LocaleTranslation:
        """Get the translation of one locale.

        Raises:
            TranslationNotFoundError: If the locale is not part of the family
        """
        for translation in self.translations:
            if translation.locale == locale:
                return translation
        msg = f"Locale '{locale}' is not part of the translation family {list(self.locales)}"
        raise TranslationNotFoundError(msg)

    def others(self, locale: LocaleCode) -> tuple[LocaleTranslation, ...]:
        """Translations of every locale except ``locale``, in family order."""
        return tuple(t for t in self.translations if t.locale != locale)

    def __contains__(self, locale: object) -> bool:
        return any(t.locale == locale for t in self.translations)

    def __iter__(self) -> Iterator[LocaleTranslation]:
        return iter(self.translations)

    def __len__(self) -> int:
        return len(self.translations)
