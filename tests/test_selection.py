"""Tests for vertex selection rules."""

from collections import Counter

import pytest

from chaosgame.patterns.selection import (
    RULES,
    NoNeighborRule,
    NoRepeatRule,
    UniformRule,
    make_rule,
)
from chaosgame.rng import new_rng


def _draws(rule, count, n=3000, seed=5):
    rng = new_rng(seed)
    prev = None
    out = []
    for _ in range(n):
        prev = rule.choose(rng, count, prev)
        out.append(prev)
    return out


class TestUniformRule:
    def test_all_vertices_reachable_and_balanced(self):
        draws = _draws(UniformRule(), 5, n=10000)
        counts = Counter(draws)
        assert set(counts) == set(range(5))
        for c in counts.values():
            assert 0.17 < c / len(draws) < 0.23

    def test_repeats_allowed(self):
        draws = _draws(UniformRule(), 3)
        assert any(a == b for a, b in zip(draws, draws[1:]))


class TestRestrictedRules:
    @pytest.mark.parametrize("count", [3, 4, 8])
    def test_no_repeat_never_repeats(self, count):
        draws = _draws(NoRepeatRule(), count)
        assert all(a != b for a, b in zip(draws, draws[1:]))
        assert set(draws) == set(range(count))

    @pytest.mark.parametrize("count", [4, 5, 12])
    def test_no_neighbor_skips_adjacent(self, count):
        draws = _draws(NoNeighborRule(), count)
        for a, b in zip(draws, draws[1:]):
            assert b not in ((a - 1) % count, (a + 1) % count)

    def test_first_pick_is_unrestricted(self):
        rng = new_rng(0)
        picks = {NoRepeatRule().choose(rng, 4, None) for _ in range(200)}
        assert picks == {0, 1, 2, 3}


class TestRegistry:
    def test_names(self):
        assert set(RULES) == {"uniform", "no-repeat", "no-neighbor"}

    def test_make_rule(self):
        assert isinstance(make_rule("no-repeat"), NoRepeatRule)

    def test_unknown_rule(self):
        with pytest.raises(ValueError, match="Unknown selection rule"):
            make_rule("spiral")
