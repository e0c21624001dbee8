"""Hypothesis strategies for intlkeys property-based testing.

Usage:
    from tests.strategies import message_trees, key_segments
    from tests.strategies.trees import key_sets, locale_pairs
"""

from .trees import (
    key_segments,
    key_sets,
    leaf_values,
    locale_pairs,
    message_trees,
)

__all__ = [
    "key_segments",
    "key_sets",
    "leaf_values",
    "locale_pairs",
    "message_trees",
]
