"""
Chaos-game engine: pure state plus a step function.

The engine owns the polygon, the walker position and a bounded point
history. It never draws and never schedules itself; a driver (the
SceneManager live loop, or the headless CLI) calls step()/run() and a
renderer reads the history between steps.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from chaosgame.config import (
    DEFAULT_CAPACITY,
    DEFAULT_JUMP_RATIO,
    DEFAULT_RULE,
    DEFAULT_VERTICES,
)
from chaosgame.patterns.polygon import Vec2, polygon_vertices
from chaosgame.patterns.selection import SelectionRule, make_rule
from chaosgame.rng import new_rng

log = logging.getLogger(__name__)

STATE_RUNNING = "running"
STATE_EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class ChaosConfig:
    vertices: int = DEFAULT_VERTICES
    jump_ratio: float = DEFAULT_JUMP_RATIO
    capacity: int = DEFAULT_CAPACITY
    radius: float = 1.0
    rule: str = DEFAULT_RULE


class ChaosGameEngine:
    """
    Polygon chaos game with a one-shot, fixed-capacity history.

    Ages are derived from a per-point birth tick: age(i) = tick - birth[i].
    Reading an age therefore gives the same value a per-step sweep over all
    points would, without the O(n) work on every step.

    xs / ys are list buffers mutated in place; reset() clears them rather
    than rebinding, so a renderer holding a reference keeps seeing the live
    history.
    """

    def __init__(self, config: Optional[ChaosConfig] = None, rng=None) -> None:
        self.rng = rng if rng is not None else new_rng()
        self.xs: List[float] = []
        self.ys: List[float] = []
        self._births: List[int] = []
        self.config: ChaosConfig = config or ChaosConfig()
        self.vertices: List[Vec2] = []
        self.rule: SelectionRule = make_rule(self.config.rule)
        self.current: Vec2 = (0.0, 0.0)
        self.tick = 0
        self.state = STATE_RUNNING
        self.running = True
        self.previous_vertex: Optional[int] = None
        self._configure(self.config)

    # ------------------------------------------------------------------ #
    # Lifecycle

    def _configure(self, config: ChaosConfig) -> None:
        if config.capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {config.capacity}")
        if config.radius <= 0:
            raise ValueError(f"radius must be positive, got {config.radius}")
        rule = make_rule(config.rule)

        self.config = config
        self.rule = rule
        self.vertices = polygon_vertices(config.vertices, config.radius)
        r = config.radius
        self.current = (self.rng.uniform(-r, r), self.rng.uniform(-r, r))

        del self.xs[:]
        del self.ys[:]
        del self._births[:]
        self.tick = 0
        self.previous_vertex = None
        self.state = STATE_RUNNING
        self.running = True

    def reset(self, config: Optional[ChaosConfig] = None) -> None:
        """Clear history and start over, optionally with a new configuration."""
        self._configure(config or self.config)
        log.debug(
            "reset: vertices=%d jump_ratio=%s capacity=%d rule=%s",
            self.config.vertices,
            self.config.jump_ratio,
            self.config.capacity,
            self.config.rule,
        )

    def stop(self) -> None:
        self.running = False

    def resume(self) -> None:
        """Resume stepping. Has no effect once the history is full."""
        if self.state == STATE_RUNNING:
            self.running = True

    @property
    def exhausted(self) -> bool:
        return self.state == STATE_EXHAUSTED

    # ------------------------------------------------------------------ #
    # Stepping

    def step(self) -> Optional[Vec2]:
        """
        Advance one iteration and return the new point, or None if the
        engine is exhausted or stopped.
        """
        if not self.running or self.state == STATE_EXHAUSTED:
            return None

        idx = self.rule.choose(self.rng, len(self.vertices), self.previous_vertex)
        self.previous_vertex = idx
        tx, ty = self.vertices[idx]
        cx, cy = self.current
        ratio = self.config.jump_ratio
        # (current + target) / ratio, not a lerp toward target.
        self.current = ((cx + tx) / ratio, (cy + ty) / ratio)

        # Advancing the tick ages every recorded point by one; the new point
        # is born on the new tick so it reads as age 0.
        self.tick += 1
        self.xs.append(self.current[0])
        self.ys.append(self.current[1])
        self._births.append(self.tick)

        if len(self.xs) >= self.config.capacity:
            self.state = STATE_EXHAUSTED
            self.running = False
            log.info("history full at %d points after %d steps", len(self.xs), self.tick)
        return self.current

    def run(self, steps: int) -> int:
        """Step up to `steps` times; returns how many points were added."""
        added = 0
        for _ in range(steps):
            if self.step() is None:
                break
            added += 1
        return added

    # ------------------------------------------------------------------ #
    # Read-only views

    def __len__(self) -> int:
        return len(self.xs)

    @property
    def last_point(self) -> Optional[Vec2]:
        if not self.xs:
            return None
        return (self.xs[-1], self.ys[-1])

    def age_of(self, index: int) -> int:
        return self.tick - self._births[index]

    def ages(self) -> List[int]:
        tick = self.tick
        return [tick - b for b in self._births]

    def points(self) -> Iterator[Tuple[float, float, int]]:
        """Lazily yield (x, y, age) in insertion order."""
        tick = self.tick
        n = len(self.xs)
        xs, ys, births = self.xs, self.ys, self._births
        for i in range(n):
            yield xs[i], ys[i], tick - births[i]


def chaos_config_for(settings, cfg) -> ChaosConfig:
    """Combine validated user settings with the app-level capacity and radius."""
    return ChaosConfig(
        vertices=settings.vertices,
        jump_ratio=settings.jump_ratio,
        capacity=cfg.capacity,
        radius=cfg.radius,
        rule=settings.rule,
    )
