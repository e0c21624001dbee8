"""Diagnostic message templates.

Centralized message templates for testable, consistent annotation and hover
text. Every user-visible string produced by a reconciliation pass is built
here.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable, Mapping

from .codes import Diagnostic, DiagnosticCode, Range

__all__ = ["DiagnosticTemplate"]


class DiagnosticTemplate:
    """Centralized diagnostic templates.

    Message shapes (kept stable, hosts and tests match on them):

        Missing translations for key "nav.home" in:
        de, fr

        Missing nested translations in "nav":
        de - nav.home, nav.about
        fr - nav.about

        Missing parent translation "nav.home" for key "nav.home.title"
    """

    @staticmethod
    def missing_translation_message(key: str, locales: Iterable[str]) -> str:
        """Plain per-key message, shared by annotations and hover text."""
        return f'Missing translations for key "{key}" in:\n{", ".join(locales)}'

    @staticmethod
    def missing_nested_keys_message(
        namespace: str, locale_keys: Mapping[str, Iterable[str]]
    ) -> str:
        """Grouped message listing, per locale, the missing paths of one namespace."""
        lines = [f'Missing nested translations in "{namespace}":']
        for locale, keys in locale_keys.items():
            lines.append(f"{locale} - {', '.join(keys)}")
        return "\n".join(lines)

    @staticmethod
    def missing_parent_message(key: str, parent: str) -> str:
        """Structural message for a key whose parent path does not exist."""
        return f'Missing parent translation "{parent}" for key "{key}"'

    @staticmethod
    def missing_translation(
        key: str, locales: Iterable[str], range_: Range, *, source: str
    ) -> Diagnostic:
        """Key present in some locales but not in others.

        Args:
            key: Full dotted key path
            locales: Locales flagged for the key, in family order
            range_: Anchor of the key's leaf token in the document
            source: Annotation source tag

        Returns:
            Diagnostic for MISSING_TRANSLATION
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_TRANSLATION,
            message=DiagnosticTemplate.missing_translation_message(key, locales),
            range=range_,
            source=source,
            key=key,
            hint="Add the key to every listed locale, or remove it everywhere",
        )

    @staticmethod
    def missing_nested_keys(
        namespace: str,
        locale_keys: Mapping[str, Iterable[str]],
        range_: Range,
        *,
        source: str,
    ) -> Diagnostic:
        """Namespace whose nested keys differ between locales.

        Args:
            namespace: First segment shared by the grouped keys
            locale_keys: Locale -> full paths found there but not in the document
            range_: Anchor of the namespace key in the document
            source: Annotation source tag

        Returns:
            Diagnostic for MISSING_NESTED_KEYS
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_NESTED_KEYS,
            message=DiagnosticTemplate.missing_nested_keys_message(namespace, locale_keys),
            range=range_,
            source=source,
            key=namespace,
        )

    @staticmethod
    def missing_parent(key: str, parent: str, range_: Range, *, source: str) -> Diagnostic:
        """Key whose parent path is not a key of the same document.

        Args:
            key: Full dotted key path
            parent: Parent path that could not be found
            range_: Anchor of the key in the document
            source: Annotation source tag

        Returns:
            Diagnostic for MISSING_PARENT_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_PARENT_KEY,
            message=DiagnosticTemplate.missing_parent_message(key, parent),
            range=range_,
            source=source,
            key=key,
            hint="Nest the key under an object instead of using dots in its name",
        )

    @staticmethod
    def hover_markdown(key: str, locale_names: Iterable[str]) -> str:
        """Markdown shown when hovering a flagged key."""
        return (
            "**Missing Translations**\n\n"
            f"Key: `{key}`\n"
            f"Missing languages: {', '.join(locale_names)}"
        )
