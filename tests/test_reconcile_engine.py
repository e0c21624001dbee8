"""Tests for reconcile/engine.py.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from intlkeys.diagnostics import TranslationNotFoundError
from intlkeys.enums import ComparisonPolicy
from intlkeys.reconcile.engine import MissingParentFinding, ReconciliationResult, reconcile
from intlkeys.translation.model import LocaleTranslation, TranslationFamily


def _family(**trees: dict[str, object]) -> TranslationFamily:
    """Build a family from keyword ``locale=tree`` pairs, in argument order."""
    return TranslationFamily(
        tuple(
            LocaleTranslation.from_tree(locale, tree)  # type: ignore[arg-type]
            for locale, tree in trees.items()
        )
    )


EN = {"greeting": "Hello", "nested": {"message": "Hi"}}
DE = {"greeting": "Hallo"}

# ============================================================================
# Missing Translations By Key
# ============================================================================


class TestMissingTranslations:
    """Test the per-key grouping."""

    def test_key_missing_from_other_locale(self) -> None:
        """A key of the current locale absent elsewhere is flagged with that locale."""
        result = reconcile("en", _family(en=EN, de=DE))

        assert dict(result.missing_translations_by_key) == {"nested.message": ("de",)}

    def test_key_only_in_other_locale_is_flagged_symmetrically(self) -> None:
        """From de's side, en's extra key is flagged with en."""
        result = reconcile("de", _family(en=EN, de=DE))

        assert "greeting" not in result.missing_translations_by_key
        assert result.missing_locales("nested.message") == ("en",)

    def test_current_only_policy(self) -> None:
        """CURRENT_ONLY ignores keys that exist only in other locales."""
        result = reconcile(
            "de", _family(en=EN, de=DE), policy=ComparisonPolicy.CURRENT_ONLY
        )

        assert dict(result.missing_translations_by_key) == {}

    def test_locales_in_family_order(self) -> None:
        """Flagged locales follow family order without duplicates."""
        result = reconcile(
            "en",
            _family(fr={"a": "x"}, en={"a": "x", "b": "y"}, de={}, es={}),
        )

        assert result.missing_locales("b") == ("fr", "de", "es")

    def test_keys_in_flattening_order(self) -> None:
        """Current keys come first, then keys found only elsewhere."""
        result = reconcile(
            "en",
            _family(en={"z": "1", "a": "2"}, de={"m": "3"}),
        )

        assert list(result.missing_translations_by_key) == ["z", "a", "m"]

    def test_blank_values_count_as_missing(self) -> None:
        """A blank leaf in another locale is a missing translation."""
        result = reconcile("en", _family(en={"a": "x"}, de={"a": "  "}))

        assert result.missing_locales("a") == ("de",)

    def test_blank_value_in_current_locale(self) -> None:
        """A blank leaf in the current document is flagged from the other side."""
        result = reconcile("en", _family(en={"a": ""}, de={"a": "x"}))

        assert result.missing_locales("a") == ("de",)

    def test_single_locale_family_is_clean(self) -> None:
        """Nothing to compare against, nothing to report."""
        result = reconcile("en", _family(en=EN))

        assert result.is_clean
        assert result.finding_count == 0

    def test_identical_locales_are_clean(self) -> None:
        """Matching key sets produce no findings."""
        assert reconcile("en", _family(en=EN, de=EN)).is_clean

    def test_unknown_current_locale_raises(self) -> None:
        """The current locale must be part of the family."""
        with pytest.raises(TranslationNotFoundError):
            reconcile("es", _family(en=EN, de=DE))

    def test_missing_locales_of_unflagged_key(self) -> None:
        """Unflagged keys have no missing locales."""
        assert reconcile("en", _family(en=EN, de=DE)).missing_locales("greeting") == ()


# ============================================================================
# Missing Nested Keys By Parent
# ============================================================================


class TestMissingNestedKeys:
    """Test the per-namespace grouping."""

    def test_groups_by_first_segment(self) -> None:
        """Deep keys are grouped under their first segment."""
        result = reconcile(
            "de",
            _family(
                en={"nav": {"home": {"title": "Home"}, "about": "About"}},
                de={"nav": {"about": "Über"}},
            ),
        )

        assert dict(result.missing_nested_keys_by_parent["nav"]) == {
            "en": ("nav.home.title",)
        }

    def test_scenario_from_other_side(self) -> None:
        """Nested keys of another locale missing here are grouped."""
        result = reconcile("de", _family(en=EN, de=DE))

        assert dict(result.missing_nested_keys_by_parent["nested"]) == {
            "en": ("nested.message",)
        }

    def test_current_locale_nesting_is_not_grouped(self) -> None:
        """Keys only the current locale has are reported per key, not per namespace."""
        result = reconcile("en", _family(en=EN, de=DE))

        assert dict(result.missing_nested_keys_by_parent) == {}

    def test_top_level_keys_are_not_grouped(self) -> None:
        """Single-segment keys never form a namespace group."""
        result = reconcile("en", _family(en={}, de={"title": "x"}))

        assert dict(result.missing_nested_keys_by_parent) == {}
        assert result.missing_locales("title") == ("de",)

    def test_groups_per_locale(self) -> None:
        """Each locale lists its own missing paths."""
        result = reconcile(
            "en",
            _family(
                en={"nav": {"a": "1"}},
                de={"nav": {"a": "1", "b": "2"}},
                fr={"nav": {"c": "3"}},
            ),
        )

        assert dict(result.missing_nested_keys_by_parent["nav"]) == {
            "de": ("nav.b",),
            "fr": ("nav.c",),
        }

    def test_grouping_is_independent_of_policy(self) -> None:
        """CURRENT_ONLY does not change the namespace grouping."""
        result = reconcile(
            "de", _family(en=EN, de=DE), policy=ComparisonPolicy.CURRENT_ONLY
        )

        assert "nested" in result.missing_nested_keys_by_parent


# ============================================================================
# Missing Parent Findings
# ============================================================================


class TestMissingParents:
    """Test the structural parent check."""

    def test_nested_objects_have_parents(self) -> None:
        """Ordinary nesting never triggers the check."""
        result = reconcile("en", _family(en={"a": {"b": {"c": "x"}}}))

        assert result.missing_parent_findings == ()

    def test_dotted_key_name_without_parent(self) -> None:
        """A dot inside a key name creates a path with no parent node."""
        result = reconcile("en", _family(en={"a.b": "x"}))

        assert result.missing_parent_findings == (MissingParentFinding("a.b", "a"),)

    def test_blank_parent_value_does_not_count(self) -> None:
        """A blank leaf is absent, so it cannot serve as a parent."""
        result = reconcile("en", _family(en={"a": "", "a.b": "x"}))

        assert result.missing_parent_findings == (MissingParentFinding("a.b", "a"),)

    def test_parent_present_as_key(self) -> None:
        """A non-blank leaf with the parent path satisfies the check."""
        result = reconcile("en", _family(en={"a": "x", "a.b": "y"}))

        assert result.missing_parent_findings == ()

    def test_parent_present_as_object(self) -> None:
        """An object node with the parent path satisfies the check."""
        result = reconcile("en", _family(en={"a": {"c": "x"}, "a.b": "y"}))

        assert result.missing_parent_findings == ()

    def test_other_locales_are_ignored(self) -> None:
        """The check only looks at the current locale."""
        result = reconcile("en", _family(en={"a": "x"}, de={"a.b": "y"}))

        assert result.missing_parent_findings == ()


# ============================================================================
# ReconciliationResult
# ============================================================================


class TestReconciliationResult:
    """Test result accessors and immutability."""

    def test_mappings_are_read_only(self) -> None:
        """Results cannot be mutated after construction."""
        result = reconcile("de", _family(en=EN, de=DE))

        with pytest.raises(TypeError):
            result.missing_translations_by_key["x"] = ()  # type: ignore[index]
        with pytest.raises(TypeError):
            result.missing_nested_keys_by_parent["nested"]["fr"] = ()  # type: ignore[index]

    def test_anchor_paths_order(self) -> None:
        """Namespaces come first, then keys, then structural findings."""
        result = ReconciliationResult(
            current_locale="en",
            missing_translations_by_key={"nav.home": ("de",), "title": ("de",)},
            missing_nested_keys_by_parent={"nav": {"de": ("nav.home",)}},
            missing_parent_findings=(
                MissingParentFinding("x.y", "x"),
                MissingParentFinding("nav.home", "nav"),
            ),
        )

        assert result.anchor_paths() == ("nav", "nav.home", "title", "x.y")

    def test_finding_count(self) -> None:
        """Each grouping entry counts once."""
        result = reconcile("de", _family(en=EN, de=DE))

        assert result.finding_count == 2
        assert not result.is_clean
