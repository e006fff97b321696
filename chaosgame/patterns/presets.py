from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass
from typing import Dict, Optional

import yaml

from chaosgame.validation import ConfigError, Settings, validate_settings

log = logging.getLogger(__name__)

PRESETS_PATH = pathlib.Path(__file__).resolve().parent / "presets.yaml"


@dataclass(frozen=True)
class Preset:
    id: str
    settings: Settings
    description: str = ""


def load_presets(path: Optional[pathlib.Path] = None) -> Dict[str, Preset]:
    """
    Load named presets from YAML. Entries that fail validation are logged
    and skipped rather than silently corrected.
    """
    path = path or PRESETS_PATH
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        log.warning("ignoring %s: expected a mapping of presets, got %s", path, type(data).__name__)
        return {}
    out: Dict[str, Preset] = {}
    for pid, spec in data.items():
        spec = spec or {}
        if not isinstance(spec, dict):
            log.warning("skipping preset %r: expected a mapping, got %r", pid, spec)
            continue
        try:
            settings = validate_settings(
                spec.get("vertices"),
                spec.get("jump_ratio"),
                spec.get("rule", "uniform"),
            )
        except ConfigError as e:
            log.warning("skipping preset %r: %s", pid, "; ".join(e.errors.values()))
            continue
        out[str(pid)] = Preset(
            id=str(pid),
            settings=settings,
            description=str(spec.get("description", "")),
        )
    return out
