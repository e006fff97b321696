"""
Vertex selection rules.

A rule decides which polygon vertex the walker jumps toward next. The base
chaos game is UniformRule; the restricted variants forbid some choices
relative to the previous pick and produce different attractors for n >= 4.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Type


class SelectionRule:
    name: str

    def choose(self, rng, count: int, previous: Optional[int]) -> int:
        raise NotImplementedError


class UniformRule(SelectionRule):
    name = "uniform"

    def choose(self, rng, count: int, previous: Optional[int]) -> int:
        """Independent discrete-uniform draw over all vertices."""
        return rng.randrange(count)


class _ExcludingRule(SelectionRule):
    """Uniform over the vertices not excluded by the previous choice."""

    def excluded(self, count: int, previous: int) -> List[int]:
        raise NotImplementedError

    def choose(self, rng, count: int, previous: Optional[int]) -> int:
        if previous is None:
            return rng.randrange(count)
        banned = set(self.excluded(count, previous))
        allowed = [i for i in range(count) if i not in banned]
        return allowed[rng.randrange(len(allowed))]


class NoRepeatRule(_ExcludingRule):
    """Never pick the same vertex twice in a row."""

    name = "no-repeat"

    def excluded(self, count: int, previous: int) -> List[int]:
        return [previous]


class NoNeighborRule(_ExcludingRule):
    """Never pick a vertex adjacent to the previous one (repeats allowed)."""

    name = "no-neighbor"

    def excluded(self, count: int, previous: int) -> List[int]:
        return [(previous - 1) % count, (previous + 1) % count]


RULES: Dict[str, Type[SelectionRule]] = {
    cls.name: cls for cls in (UniformRule, NoRepeatRule, NoNeighborRule)
}


def make_rule(name: str) -> SelectionRule:
    try:
        return RULES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown selection rule {name!r}; expected one of {', '.join(RULES)}"
        ) from None
