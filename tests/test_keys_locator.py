"""Tests for keys/locator.py and keys/position.py.

Covers the first-match global scan, the bare-name range convention, JSON
escaping of key names, and line/character conversion.

Python 3.13+.
"""

from __future__ import annotations

import json

import pytest
from hypothesis import given

from intlkeys.diagnostics import Position
from intlkeys.keys.flatten import flatten
from intlkeys.keys.locator import KeyPosition, key_pattern, locate, locate_all
from intlkeys.keys.position import LineOffsetCache, offset_at, position_at
from tests.strategies import message_trees

DOCUMENT = '{\n  "a": {\n    "title": "A"\n  },\n  "b": {\n    "title": "B"\n  }\n}'

# ============================================================================
# locate()
# ============================================================================


class TestLocate:
    """Test locating a single key."""

    def test_range_covers_bare_key_name(self) -> None:
        """The range spans the name between the quotes."""
        found = locate(DOCUMENT, "a")

        assert found is not None
        assert DOCUMENT[found.start_offset : found.end_offset] == "a"
        assert DOCUMENT[found.start_offset - 1] == '"'
        assert DOCUMENT[found.end_offset] == '"'

    def test_line_and_character_are_zero_based(self) -> None:
        """Positions follow the editor protocol convention."""
        found = locate(DOCUMENT, "a.title")

        assert found is not None
        assert found.start == Position(line=2, character=5)
        assert found.end == Position(line=2, character=10)

    def test_duplicate_names_anchor_to_first_occurrence(self) -> None:
        """Only the last segment is searched; the first textual match wins."""
        first = locate(DOCUMENT, "a.title")
        second = locate(DOCUMENT, "b.title")

        assert second == first
        assert second is not None
        assert second.start.line == 2

    def test_missing_key_returns_none(self) -> None:
        """Absence is not an error."""
        assert locate(DOCUMENT, "c.subtitle") is None

    def test_values_are_not_matched(self) -> None:
        """A quoted string must be followed by a colon to count as a key."""
        text = '{"label": "title", "other": "x"}'

        assert locate(text, "title") is None

    def test_longer_names_are_not_matched(self) -> None:
        """The quote before the name prevents suffix matches."""
        text = '{"subtitle": "x", "title": "y"}'
        found = locate(text, "title")

        assert found is not None
        assert found.start_offset == text.index('"title"') + 1

    def test_whitespace_before_colon(self) -> None:
        """Whitespace between the name and the colon is allowed."""
        text = '{"a"   :\n "x"}'
        found = locate(text, "a")

        assert found is not None
        assert found.start_offset == 2

    def test_escaped_quotes_in_key(self) -> None:
        """Key names are matched in their JSON-escaped form."""
        text = json.dumps({'say "hi"': "x"})
        found = locate(text, 'say "hi"')

        assert found is not None
        assert text[found.start_offset : found.end_offset] == 'say \\"hi\\"'

    def test_regex_metacharacters_are_literal(self) -> None:
        """Key names are not interpreted as patterns."""
        text = '{"a+b": "x", "aab": "y"}'
        found = locate(text, "a+b")

        assert found is not None
        assert found.start_offset == 2

    def test_non_ascii_key_uses_character_offsets(self) -> None:
        """Characters count code points, not bytes."""
        text = '{"ñandú": "x", "título": "y"}'
        found = locate(text, "título")

        assert found is not None
        assert text[found.start_offset : found.end_offset] == "título"
        assert found.start == Position(line=0, character=16)

    def test_crlf_line_endings(self) -> None:
        """CRLF documents report the same characters as LF documents."""
        found = locate('{\r\n  "a": "x"\r\n}', "a")

        assert found is not None
        assert found.start == Position(line=1, character=3)

    def test_key_pattern_is_cached(self) -> None:
        """Patterns are compiled once per segment."""
        assert key_pattern("title") is key_pattern("title")


# ============================================================================
# locate_all()
# ============================================================================


class TestLocateAll:
    """Test locating many keys in one document."""

    def test_keeps_input_order_and_skips_missing(self) -> None:
        """Unlocatable paths are left out, the rest keep their order."""
        positions = locate_all(DOCUMENT, ["b.title", "missing", "a"])

        assert [p.path for p in positions] == ["b.title", "a"]
        assert all(isinstance(p, KeyPosition) for p in positions)

    def test_duplicates_are_located_once(self) -> None:
        """Repeated paths produce one KeyPosition."""
        positions = locate_all(DOCUMENT, ["a", "a", "b"])

        assert [p.path for p in positions] == ["a", "b"]

    def test_empty_input(self) -> None:
        """No paths, no positions."""
        assert locate_all(DOCUMENT, []) == ()

    @given(tree=message_trees())
    def test_every_leaf_of_serialized_tree_is_found(self, tree: dict[str, object]) -> None:
        """Every leaf name of a serialized tree is located on a member name."""
        text = json.dumps(tree, indent=2, ensure_ascii=False)
        paths = [key.path for key in flatten(tree)]  # type: ignore[arg-type]

        positions = locate_all(text, paths)

        assert len(positions) == len(paths)
        for located in positions:
            name = located.path.rpartition(".")[2]
            found = text[located.range.start_offset : located.range.end_offset]
            assert found == json.dumps(name, ensure_ascii=False)[1:-1]


# ============================================================================
# Positions
# ============================================================================


class TestLineOffsetCache:
    """Test offset to line/character conversion."""

    def test_first_character(self) -> None:
        """Offset 0 is line 0, character 0."""
        assert LineOffsetCache("abc").position_at(0) == Position(0, 0)

    def test_positions_after_newlines(self) -> None:
        """Each newline starts a new line."""
        cache = LineOffsetCache("ab\ncd\n\nef")

        assert cache.line_count == 4
        assert cache.position_at(3) == Position(1, 0)
        assert cache.position_at(4) == Position(1, 1)
        assert cache.position_at(6) == Position(2, 0)
        assert cache.position_at(7) == Position(3, 0)

    def test_offsets_are_clamped(self) -> None:
        """Out-of-range offsets clamp to the source bounds."""
        cache = LineOffsetCache("ab\ncd")

        assert cache.position_at(-5) == Position(0, 0)
        assert cache.position_at(100) == Position(1, 2)

    def test_offset_at_inverts_position_at(self) -> None:
        """Converting back yields the original offset."""
        source = '{\n  "a": "x",\n  "b": "y"\n}'
        cache = LineOffsetCache(source)

        for offset in range(len(source) + 1):
            assert cache.offset_at(cache.position_at(offset)) == offset

    def test_offset_at_stays_on_line(self) -> None:
        """Characters past the end of a line clamp to that line."""
        assert offset_at("ab\ncd", Position(0, 10)) == 2

    def test_range_of(self) -> None:
        """Ranges keep both positions and offsets."""
        found = LineOffsetCache("ab\ncd").range_of(3, 5)

        assert found.start == Position(1, 0)
        assert found.end == Position(1, 2)
        assert (found.start_offset, found.end_offset) == (3, 5)

    def test_uncached_position_matches_cache(self) -> None:
        """The one-shot helper agrees with the cache."""
        source = "x\ny\r\nzz"
        cache = LineOffsetCache(source)

        for offset in range(len(source) + 1):
            assert position_at(source, offset) == cache.position_at(offset)

    def test_negative_offset_rejected(self) -> None:
        """The one-shot helper rejects negative offsets."""
        with pytest.raises(ValueError, match=">= 0"):
            position_at("abc", -1)
