"""
Tests for the Damerau–Levenshtein engine (transpositions, custom costs).
"""

import sys
import os
import math
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from seqdist.core import (
    CostConfig, EditKind, EditOp, InvalidCostError, patch, script_cost,
)
from seqdist.damerau import damerau
from seqdist.matrix import wagner_fischer, wagner_fischer_rolling


NO_TRANSPOSE = CostConfig(transpose=math.inf)


# ═══════════════════════════════════════════════════════════════════
#  TRANSPOSITIONS
# ═══════════════════════════════════════════════════════════════════

class TestTransposition:

    def test_single_swap(self):
        result = damerau("ca", "ac")
        assert result.distance == 1
        assert result.script == (EditOp(EditKind.TRANSPOSE, 0, "ca", 0, "ac"),)

    def test_diverges_from_levenshtein(self):
        """The same pair costs 2 without transpositions."""
        assert damerau("ca", "ac").distance == 1
        assert wagner_fischer_rolling("ca", "ac").distance == 2

    def test_swap_inside_word(self):
        result = damerau("the cat", "teh cta")
        assert result.distance == 2
        kinds = [op.kind for op in result.script]
        assert kinds.count(EditKind.TRANSPOSE) == 2
        assert patch("the cat", result.script) == "teh cta"

    def test_transposed_pair_positions(self):
        result = damerau("xcay", "xacy")
        assert result.script == (
            EditOp(EditKind.COPY, 0, "x", 0, "x"),
            EditOp(EditKind.TRANSPOSE, 1, "ca", 1, "ac"),
            EditOp(EditKind.COPY, 3, "y", 3, "y"),
        )

    def test_transpose_with_lists(self):
        result = damerau([1, 2, 3], [2, 1, 3])
        assert result.distance == 1
        assert result.script[0].source_symbol == [1, 2]
        assert patch([1, 2, 3], result.script) == [2, 1, 3]

    def test_needs_two_rows_back(self):
        """Nothing wraps around at the first row or column."""
        assert damerau("a", "ba").distance == 1
        assert damerau("ab", "b").distance == 1

    def test_must_strictly_improve(self):
        """An equal-cost transposition is not taken."""
        result = damerau("ab", "ba", {"trans": 2})
        assert result.distance == 2
        assert EditKind.TRANSPOSE not in [op.kind for op in result.script]


# ═══════════════════════════════════════════════════════════════════
#  LEVENSHTEIN COMPATIBILITY
# ═══════════════════════════════════════════════════════════════════

class TestWithoutTransposition:

    @pytest.mark.parametrize("a,b", [
        ("kitten", "sitting"),
        ("ca", "ac"),
        ("the cat", "teh cta"),
        ("abcdef", "badcfe"),
        ("", "xyz"),
        ("xyz", ""),
    ])
    def test_matches_wagner_fischer(self, a, b):
        result = damerau(a, b, NO_TRANSPOSE)
        assert result.distance == wagner_fischer(a, b).distance
        assert patch(a, result.script) == b

    def test_kitten_sitting(self):
        assert damerau("kitten", "sitting").distance == 3


# ═══════════════════════════════════════════════════════════════════
#  CUSTOM COSTS
# ═══════════════════════════════════════════════════════════════════

class TestCosts:

    def test_first_column_and_row_use_configured_costs(self):
        costs = CostConfig(insert=2, delete=3)
        assert damerau("", "abc", costs).distance == 6
        assert damerau("abc", "", costs).distance == 9

    def test_expensive_substitution(self):
        costs = {"sub": 3}
        result = damerau("abc", "abd", costs)
        assert result.distance == 2
        assert [op.kind for op in result.script if op.kind is not EditKind.COPY] == [
            EditKind.INSERT, EditKind.DELETE]
        assert patch("abc", result.script) == "abd"

    def test_expensive_transposition(self):
        assert damerau("ab", "ba", {"trans": 5}).distance == 2

    def test_free_transposition(self):
        assert damerau("abcd", "badc", {"trans": 0}).distance == 0

    def test_costed_copy(self):
        assert damerau("aaa", "aaa", {"copy": 1, "trans": 5}).distance == 3
        # swapping two equal symbols is now cheaper than copying both
        assert damerau("aaa", "aaa", {"copy": 1}).distance == 2

    def test_all_zero_is_degenerate(self):
        zero = CostConfig(0, 0, 0, 0, 0)
        assert damerau("abc", "xyz", zero).distance == 0
        assert patch("abc", damerau("abc", "xyz", zero).script) == "xyz"

    @pytest.mark.parametrize("a,b,costs", [
        ("kitten", "sitting", {"add": 2, "del": 2}),
        ("abcdef", "badcfe", {"sub": 2, "trans": 1}),
        ("sunday", "saturday", {"add": 1.5, "del": 1.5, "sub": 0.5}),
    ])
    def test_distance_is_script_cost(self, a, b, costs):
        result = damerau(a, b, costs)
        assert script_cost(result.script, costs) == pytest.approx(result.distance)
        assert patch(a, result.script) == b

    @pytest.mark.parametrize("costs", [
        {"del": -1},
        {"trans": float("nan")},
        {"swap": 1},
        {"add": "cheap"},
    ])
    def test_invalid_costs_rejected(self, costs):
        with pytest.raises(InvalidCostError):
            damerau("ab", "ba", costs)

    def test_symmetric_costs_give_symmetric_distance(self):
        costs = CostConfig(insert=2, delete=2, substitute=3, transpose=1)
        for a, b in [("kitten", "sitting"), ("abcd", "bacd"), ("abc", "")]:
            assert damerau(a, b, costs).distance == damerau(b, a, costs).distance
