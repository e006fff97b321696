"""
Caller-side validation for user-supplied chaos-game settings.

The engine assumes it is handed a valid configuration. Everything that
comes from a person (CLI flags, the settings form, preset files) goes
through validate_settings() first; rejected fields are replaced by a
fallback (the last value that was accepted, or the default).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from chaosgame.config import (
    DEFAULT_JUMP_RATIO,
    DEFAULT_RULE,
    DEFAULT_VERTICES,
    MAX_JUMP_RATIO,
    MAX_VERTICES,
    MIN_JUMP_RATIO,
    MIN_VERTICES,
)
from chaosgame.patterns.selection import RULES

RANGES_HELP = (
    f"Vertices must be a whole number from {MIN_VERTICES} to {MAX_VERTICES}; "
    f"jump ratio must be a whole number from {MIN_JUMP_RATIO} to {MAX_JUMP_RATIO}."
)

# ASCII digits only, at most nine of them.
_INT_RE = re.compile(r"[+-]?[0-9]{1,9}")


@dataclass(frozen=True)
class Settings:
    vertices: int = DEFAULT_VERTICES
    jump_ratio: int = DEFAULT_JUMP_RATIO
    rule: str = DEFAULT_RULE


DEFAULT_SETTINGS = Settings()


class ConfigError(ValueError):
    """
    Raised when one or more settings are out of range.

    errors maps field name -> reason; corrected is the settings object with
    each rejected field replaced by its fallback value.
    """

    def __init__(self, errors: Dict[str, str], corrected: Settings) -> None:
        self.errors = dict(errors)
        self.corrected = corrected
        super().__init__(self.user_message())

    def user_message(self) -> str:
        lines = [self.errors[k] for k in ("vertices", "jump_ratio", "rule") if k in self.errors]
        lines.append(RANGES_HELP)
        return "\n".join(lines)


def _as_int(value) -> Optional[int]:
    """Parse a whole number; reject bools, non-integral floats and junk."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.fullmatch(text):
            return int(text)
    return None


def _shown(value) -> str:
    text = repr(value)
    return text if len(text) <= 24 else text[:20] + "..."


def validate_settings(
    vertices,
    jump_ratio,
    rule: str = DEFAULT_RULE,
    *,
    fallback: Settings = DEFAULT_SETTINGS,
) -> Settings:
    """Return validated Settings or raise ConfigError naming every bad field."""
    errors: Dict[str, str] = {}

    v = _as_int(vertices)
    if v is None or not (MIN_VERTICES <= v <= MAX_VERTICES):
        errors["vertices"] = f"Invalid vertex count {_shown(vertices)}."
        v = fallback.vertices

    j = _as_int(jump_ratio)
    if j is None or not (MIN_JUMP_RATIO <= j <= MAX_JUMP_RATIO):
        errors["jump_ratio"] = f"Invalid jump ratio {_shown(jump_ratio)}."
        j = fallback.jump_ratio

    if not isinstance(rule, str) or rule not in RULES:
        errors["rule"] = f"Unknown rule {rule!r} (choose from {', '.join(RULES)})."
        rule = fallback.rule
    elif rule == "no-neighbor" and v < 4:
        # With a triangle every other vertex is a neighbour, so the walker
        # would be pinned to a single corner.
        errors["rule"] = "The no-neighbor rule needs at least 4 vertices."
        rule = fallback.rule if fallback.rule != "no-neighbor" else DEFAULT_RULE

    corrected = Settings(vertices=v, jump_ratio=j, rule=rule)
    if errors:
        raise ConfigError(errors, corrected)
    return corrected
