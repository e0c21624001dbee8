"""Tests for the diagnostics package: data model, templates, formatter, errors.

Python 3.13+.
"""

from __future__ import annotations

import json

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from intlkeys.diagnostics import (
    ConfigurationError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    DiagnosticTemplate,
    IntlKeysError,
    MalformedTranslationTreeError,
    OutputFormat,
    Position,
    Range,
    TranslationLoadError,
    TranslationNotFoundError,
)

RANGE = Range(Position(2, 5), Position(2, 10), start_offset=12, end_offset=17)

_paths = st.from_regex(r"[a-z]{1,8}(\.[a-z]{1,8}){0,3}", fullmatch=True)
_locales = st.lists(
    st.from_regex(r"[a-z]{2}(-[A-Z]{2})?", fullmatch=True), min_size=1, max_size=4, unique=True
)

# ============================================================================
# Positions and Ranges
# ============================================================================


class TestPositionAndRange:
    """Test the position data model."""

    def test_positions_are_ordered(self) -> None:
        """Positions compare by line, then character."""
        assert Position(1, 9) < Position(2, 0) < Position(2, 1)

    @pytest.mark.parametrize(("line", "character"), [(-1, 0), (0, -1)])
    def test_negative_position_rejected(self, line: int, character: int) -> None:
        """Positions are zero-based and never negative."""
        with pytest.raises(ValueError, match=">= 0"):
            Position(line, character)

    def test_inverted_range_rejected(self) -> None:
        """A range cannot end before it starts."""
        with pytest.raises(ValueError, match="precede"):
            Range(Position(2, 5), Position(1, 0))

    def test_inverted_offsets_rejected(self) -> None:
        """Offsets follow the same rule as positions."""
        with pytest.raises(ValueError, match="end_offset"):
            Range(Position(0, 0), Position(0, 1), start_offset=5, end_offset=4)

    def test_contains_is_inclusive(self) -> None:
        """Both ends of a range count as inside."""
        assert RANGE.contains(Position(2, 5))
        assert RANGE.contains(Position(2, 10))
        assert not RANGE.contains(Position(2, 11))
        assert not RANGE.contains(Position(1, 7))


# ============================================================================
# Templates
# ============================================================================


class TestDiagnosticTemplate:
    """Test message wording and diagnostic structure."""

    def test_missing_translation(self) -> None:
        """Per-key message lists the locales on a second line."""
        diagnostic = DiagnosticTemplate.missing_translation(
            "nav.home", ["de", "fr"], RANGE, source="intlkeys"
        )

        assert diagnostic.code == DiagnosticCode.MISSING_TRANSLATION
        assert diagnostic.message == 'Missing translations for key "nav.home" in:\nde, fr'
        assert diagnostic.severity == "warning"
        assert diagnostic.range == RANGE
        assert diagnostic.key == "nav.home"
        assert diagnostic.hint is not None

    def test_missing_nested_keys(self) -> None:
        """Grouped message has one line per locale."""
        diagnostic = DiagnosticTemplate.missing_nested_keys(
            "nav",
            {"de": ["nav.home", "nav.about"], "fr": ["nav.about"]},
            RANGE,
            source="intlkeys",
        )

        assert diagnostic.code == DiagnosticCode.MISSING_NESTED_KEYS
        assert diagnostic.message == (
            'Missing nested translations in "nav":\n'
            "de - nav.home, nav.about\n"
            "fr - nav.about"
        )

    def test_missing_parent(self) -> None:
        """Structural message names the parent and the key."""
        diagnostic = DiagnosticTemplate.missing_parent("a.b", "a", RANGE, source="x")

        assert diagnostic.code == DiagnosticCode.MISSING_PARENT_KEY
        assert diagnostic.message == 'Missing parent translation "a" for key "a.b"'
        assert diagnostic.source == "x"

    def test_hover_markdown(self) -> None:
        """Hover text is Markdown with the key in code style."""
        markdown = DiagnosticTemplate.hover_markdown("a.b", ["de (German)"])

        assert markdown == (
            "**Missing Translations**\n\nKey: `a.b`\nMissing languages: de (German)"
        )

    @given(path=_paths, locales=_locales)
    def test_message_names_key_and_every_locale(self, path: str, locales: list[str]) -> None:
        """The key and every flagged locale appear in the message, in order."""
        event(f"locale_count={len(locales)}")
        message = DiagnosticTemplate.missing_translation_message(path, locales)

        header, _, listed = message.partition("\n")
        assert f'"{path}"' in header
        assert listed.split(", ") == locales


# ============================================================================
# Formatter
# ============================================================================


class TestDiagnosticFormatter:
    """Test the output styles."""

    def _diagnostic(self) -> Diagnostic:
        return DiagnosticTemplate.missing_translation("nav.home", ["de"], RANGE, source="intlkeys")

    def test_rust_format(self) -> None:
        """Compiler-style output with a 1-indexed location."""
        output = DiagnosticFormatter().format(self._diagnostic(), document="messages/en.json")

        lines = output.splitlines()
        assert lines[0] == (
            'warning[MISSING_TRANSLATION]: Missing translations for key "nav.home" in:'
        )
        assert lines[1] == "de"
        assert lines[2] == "  --> messages/en.json:3:6"
        assert lines[3].startswith("  = help: ")

    def test_rust_format_without_document(self) -> None:
        """Without a document the location is a line/column pair."""
        output = DiagnosticFormatter().format(self._diagnostic())

        assert "  --> line 3:6" in output

    def test_rust_format_color(self) -> None:
        """Warnings are bold yellow when color is enabled."""
        output = DiagnosticFormatter(color=True).format(self._diagnostic())

        assert output.startswith("\033[1;33mwarning\033[0m[")

    def test_simple_format(self) -> None:
        """Simple output fits on one line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        output = formatter.format(self._diagnostic(), document="messages/en.json")

        assert output == (
            'messages/en.json:3:6: MISSING_TRANSLATION: '
            'Missing translations for key "nav.home" in: de'
        )

    def test_json_format(self) -> None:
        """JSON output keeps 0-indexed positions for tooling."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(formatter.format(self._diagnostic(), document="messages/en.json"))

        assert data["code"] == "MISSING_TRANSLATION"
        assert data["code_value"] == 1001
        assert data["document"] == "messages/en.json"
        assert data["key"] == "nav.home"
        assert (data["line"], data["character"]) == (2, 5)
        assert (data["end_line"], data["end_character"]) == (2, 10)
        assert data["source"] == "intlkeys"

    def test_format_all_separators(self) -> None:
        """JSON lines are newline separated, other styles blank-line separated."""
        diagnostics = [self._diagnostic(), self._diagnostic()]

        json_output = DiagnosticFormatter(output_format=OutputFormat.JSON).format_all(diagnostics)
        rust_output = DiagnosticFormatter().format_all(diagnostics)

        assert len(json_output.splitlines()) == 2
        assert "\n\n" in rust_output

    def test_format_error_uses_rust_style(self) -> None:
        """Diagnostic.format_error() renders compiler-style text."""
        assert self._diagnostic().format_error().startswith("warning[MISSING_TRANSLATION]")

    def test_str_is_message(self) -> None:
        """str() of a diagnostic is its message."""
        diagnostic = self._diagnostic()

        assert str(diagnostic) == diagnostic.message


# ============================================================================
# Errors
# ============================================================================


class TestErrors:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize(
        "error_type",
        [
            ConfigurationError,
            MalformedTranslationTreeError,
            TranslationLoadError,
            TranslationNotFoundError,
        ],
    )
    def test_hierarchy(self, error_type: type[IntlKeysError]) -> None:
        """Every error derives from IntlKeysError."""
        assert issubclass(error_type, IntlKeysError)

    def test_diagnostic_message(self) -> None:
        """Errors built from a Diagnostic keep it."""
        diagnostic = DiagnosticTemplate.missing_parent("a.b", "a", RANGE, source="intlkeys")

        error = IntlKeysError(diagnostic)

        assert error.diagnostic is diagnostic
        assert str(error) == diagnostic.message

    def test_plain_message(self) -> None:
        """Errors built from text have no diagnostic."""
        error = IntlKeysError("boom")

        assert error.diagnostic is None
        assert str(error) == "boom"

    def test_malformed_tree_attributes(self) -> None:
        """Malformed tree errors carry their location."""
        error = MalformedTranslationTreeError("bad", line=3, column=4, path="a.b")

        assert (error.line, error.column, error.path) == (3, 4, "a.b")

    def test_load_error_attributes(self) -> None:
        """Load errors carry the locale and file."""
        error = TranslationLoadError("bad", locale="de", source_path="messages/de.json")

        assert (error.locale, error.source_path) == ("de", "messages/de.json")
