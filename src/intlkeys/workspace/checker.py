"""Workspace checker: host-facing entry point.

The host (an editor integration, a language server, the CLI) reports what
happens to documents and files; the checker runs passes and publishes the
annotations to a DiagnosticSink:

    open_document / change_document -> pass for that document
    close_document                  -> annotations and cache entry dropped
    on_files_changed                -> cache cleared, every open document re-checked
    on_config_changed               -> cache cleared, every open document re-checked
    hover                           -> answered from the cached pass

Only ``.json`` documents are tracked; everything else is ignored.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from intlkeys.config import CheckerConfig
from intlkeys.constants import JSON_SUFFIX
from intlkeys.enums import FileChangeKind
from intlkeys.report.builder import hover as build_hover
from intlkeys.translation.mode import resolve_mode

from .cache import DocumentCache
from .pipeline import run_pass

if TYPE_CHECKING:
    from intlkeys.diagnostics import Diagnostic, Position
    from intlkeys.report.builder import HoverInfo
    from intlkeys.translation.types import DocumentPath, JSONSource

    from .pipeline import CheckResult

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Host interfaces
    "DiagnosticSink",
    "InMemoryDiagnosticSink",
    "FileChange",
    # Checker
    "TranslationChecker",
]

logger = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    """Receiver of per-document annotations.

    ``set`` replaces the whole list of a document (idempotent); ``delete``
    removes it.

    Example:
        >>> class EditorSink:
        ...     def set(self, document, diagnostics):
        ...         collection.set(uri_for(document), [to_editor(d) for d in diagnostics])
        ...     def delete(self, document):
        ...         collection.delete(uri_for(document))
    """

    def set(self, document: DocumentPath, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace the annotations of a document."""

    def delete(self, document: DocumentPath) -> None:
        """Remove the annotations of a document."""


class InMemoryDiagnosticSink:
    """DiagnosticSink keeping annotations in a dict (CLI and tests)."""

    __slots__ = ("_published",)

    def __init__(self) -> None:
        """Initialize an empty sink."""
        self._published: dict[DocumentPath, tuple[Diagnostic, ...]] = {}

    def set(self, document: DocumentPath, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace the annotations of a document."""
        self._published[document] = tuple(diagnostics)

    def delete(self, document: DocumentPath) -> None:
        """Remove the annotations of a document."""
        self._published.pop(document, None)

    def get(self, document: DocumentPath) -> tuple[Diagnostic, ...]:
        """Annotations of a document (empty if none were published)."""
        return self._published.get(document, ())

    @property
    def documents(self) -> tuple[DocumentPath, ...]:
        """Documents with published annotations."""
        return tuple(self._published)

    def __contains__(self, document: object) -> bool:
        return document in self._published


@dataclass(frozen=True, slots=True)
class FileChange:
    """File-system change reported by the host.

    Attributes:
        path: Path of the changed file
        kind: Created, changed or deleted
    """

    path: DocumentPath
    kind: FileChangeKind


@dataclass(slots=True)
class _OpenDocument:
    text: JSONSource
    version: int | None


def _document_key(path: DocumentPath | Path) -> DocumentPath:
    return str(Path(path))


def _is_translation_change(change: FileChange, translations_folder: Path) -> bool:
    path = Path(change.path)
    if path.suffix == JSON_SUFFIX:
        return True
    # deleted folders no longer exist, so resolve without strict checks
    return path.resolve().is_relative_to(translations_folder.resolve())


class TranslationChecker:
    """Keeps the annotations of open translation documents up to date.

    Example:
        >>> sink = InMemoryDiagnosticSink()
        >>> checker = TranslationChecker(Path("."), sink=sink)
        >>> checker.open_document("messages/en.json", text)
        >>> sink.get("messages/en.json")
        (Diagnostic(code=<DiagnosticCode.MISSING_TRANSLATION: 1001>, ...),)
        >>> checker.hover("messages/en.json", Position(2, 5)).markdown
        '**Missing Translations**...'
    """

    __slots__ = ("_cache", "_config", "_documents", "_project_root", "_sink")

    def __init__(
        self,
        project_root: Path,
        config: CheckerConfig | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        """Initialize checker.

        Args:
            project_root: Directory the translations folder is relative to
            config: Checker settings (defaults if omitted)
            sink: Receiver of annotations (an InMemoryDiagnosticSink if omitted)
        """
        self._project_root = project_root
        self._config = config if config is not None else CheckerConfig()
        self._sink: DiagnosticSink = sink if sink is not None else InMemoryDiagnosticSink()
        self._cache = DocumentCache()
        self._documents: dict[DocumentPath, _OpenDocument] = {}

    @property
    def config(self) -> CheckerConfig:
        """Current settings."""
        return self._config

    @property
    def sink(self) -> DiagnosticSink:
        """Receiver of annotations."""
        return self._sink

    @property
    def cache(self) -> DocumentCache:
        """Last completed pass per document."""
        return self._cache

    @property
    def open_documents(self) -> tuple[DocumentPath, ...]:
        """Tracked documents, in the order they were opened."""
        return tuple(self._documents)

    # ------------------------------------------------------------------
    # Document events
    # ------------------------------------------------------------------

    def open_document(
        self, path: DocumentPath | Path, text: JSONSource, version: int | None = None
    ) -> None:
        """Start tracking a document and check it."""
        key = _document_key(path)
        if Path(key).suffix != JSON_SUFFIX:
            return
        self._documents[key] = _OpenDocument(text, version)
        self._refresh(key)

    def change_document(
        self, path: DocumentPath | Path, text: JSONSource, version: int | None = None
    ) -> None:
        """Re-check a document after an edit.

        Edits carrying an older version than the tracked one are ignored.
        Untracked documents are opened.
        """
        key = _document_key(path)
        current = self._documents.get(key)
        if (
            current is not None
            and current.version is not None
            and version is not None
            and version < current.version
        ):
            logger.debug("Ignoring stale edit of %s (v%d < v%d)", key, version, current.version)
            return
        self.open_document(key, text, version)

    def close_document(self, path: DocumentPath | Path) -> None:
        """Stop tracking a document; its annotations and cached pass are dropped."""
        key = _document_key(path)
        if self._documents.pop(key, None) is None:
            return
        self._cache.invalidate(key)
        self._sink.delete(key)

    # ------------------------------------------------------------------
    # Workspace events
    # ------------------------------------------------------------------

    def on_files_changed(self, changes: Iterable[FileChange]) -> None:
        """React to translation files being created, changed or deleted.

        Any change can alter the family of every open document (a new locale,
        a removed counterpart), so all open documents are re-checked. Paths
        below the translations folder count as well: hosts report a created or
        deleted locale folder as one directory event.
        """
        folder = self._project_root / self._config.translations_folder
        relevant = [c for c in changes if _is_translation_change(c, folder)]
        if not relevant:
            return
        for change in relevant:
            logger.debug("Translation file %s: %s", change.kind, change.path)
        self._cache.clear()
        self.refresh_all()

    def on_config_changed(self, config: CheckerConfig) -> None:
        """Apply new settings and re-check every open document."""
        self._config = config
        self._cache.clear()
        self.refresh_all()

    def refresh_all(self) -> None:
        """Re-check every open document, one after another."""
        for key in tuple(self._documents):
            self._refresh(key)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def check_document(self, path: DocumentPath | Path, text: JSONSource) -> CheckResult | None:
        """Run a pass without publishing or caching it.

        Returns:
            The pass result, or None when the document is not checked
            (no translations folder, not a translation document, unparseable)
        """
        root = self._config.translations_root(self._project_root)
        if root is None:
            return None
        return run_pass(root, Path(path), text, self._config)

    def hover(self, path: DocumentPath | Path, position: Position) -> HoverInfo | None:
        """Explain the flagged key at a cursor position, from the cached pass."""
        cached = self._cache.get(_document_key(path))
        if cached is None:
            return None
        return build_hover(cached.result, cached.positions, position)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refresh(self, key: DocumentPath) -> None:
        document = self._documents[key]
        root = self._config.translations_root(self._project_root)
        if root is None:
            logger.info("No translations folder; clearing annotations of %s", key)
            self._cache.invalidate(key)
            self._sink.delete(key)
            return

        result = run_pass(
            root,
            Path(key),
            document.text,
            self._config,
            resolution=resolve_mode(root, self._config.mode),
            version=document.version,
        )
        if result is None:
            self._cache.invalidate(key)
            self._sink.delete(key)
            return

        if self._cache.store(key, result):
            self._sink.set(key, result.diagnostics)
