from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pygame

from chaosgame.config import AppConfig
from chaosgame.patterns.chaos import ChaosGameEngine, chaos_config_for
from chaosgame.patterns.presets import Preset
from chaosgame.validation import Settings

from .base import Scene
from .settings_scene import SettingsScene

log = logging.getLogger(__name__)

MIN_STEPS_PER_FRAME = 1
MAX_STEPS_PER_FRAME = 5000

FOOTER = (
    "Space pause • R restart • S settings • P/Shift+P presets • +/- speed • F11 fullscreen • Esc quit"
)


class ChaosScene(Scene):
    """
    Live view of a ChaosGameEngine.

    Each frame steps the engine steps_per_frame times (while it is running)
    and redraws the faded point cloud. Settings changes and presets reset
    the engine in place.
    """

    def __init__(
        self,
        engine: ChaosGameEngine,
        cfg: AppConfig,
        settings: Settings,
        presets: Optional[Dict[str, Preset]] = None,
        preset_id: Optional[str] = None,
    ) -> None:
        self.engine = engine
        self.cfg = cfg
        self.settings = settings
        self.presets = presets or {}
        self.preset_id = preset_id
        self.steps_per_frame = max(MIN_STEPS_PER_FRAME, min(MAX_STEPS_PER_FRAME, cfg.steps_per_frame))
        self._announced_exhausted = False

    # ------------------------------------------------------------------ #
    # Commands

    def apply_settings(self, settings: Settings, preset_id: Optional[str] = None) -> None:
        self.settings = settings
        self.preset_id = preset_id
        self.engine.reset(chaos_config_for(settings, self.cfg))
        self._announced_exhausted = False
        log.info(
            "applied vertices=%d jump_ratio=%d rule=%s",
            settings.vertices,
            settings.jump_ratio,
            settings.rule,
        )

    def restart(self) -> None:
        self.engine.reset()
        self._announced_exhausted = False

    def toggle_pause(self) -> None:
        if self.engine.running:
            self.engine.stop()
        else:
            self.engine.resume()

    def cycle_preset(self, delta: int) -> Optional[Preset]:
        if not self.presets:
            return None
        ids = list(self.presets)
        if self.preset_id in ids:
            pos = (ids.index(self.preset_id) + delta) % len(ids)
        else:
            pos = 0 if delta > 0 else len(ids) - 1
        preset = self.presets[ids[pos]]
        self.apply_settings(preset.settings, preset_id=preset.id)
        return preset

    def change_speed(self, factor: float) -> None:
        spf = int(round(self.steps_per_frame * factor))
        if spf == self.steps_per_frame:
            spf += 1 if factor > 1 else -1
        self.steps_per_frame = max(MIN_STEPS_PER_FRAME, min(MAX_STEPS_PER_FRAME, spf))

    def open_settings(self, manager) -> None:
        manager.push_scene(SettingsScene(self.settings, on_apply=self.apply_settings))

    # ------------------------------------------------------------------ #
    # Live-loop hooks

    def handle_event(self, event, manager) -> None:
        if event.type != pygame.KEYDOWN:
            return
        key = event.key
        shift = bool(getattr(event, "mod", 0) & pygame.KMOD_SHIFT)
        uni = getattr(event, "unicode", "")

        if key in (pygame.K_ESCAPE, pygame.K_q):
            manager.set_scene(None)
        elif key == pygame.K_SPACE:
            self.toggle_pause()
        elif key == pygame.K_r:
            self.restart()
        elif key in (pygame.K_s, pygame.K_TAB):
            self.open_settings(manager)
        elif key == pygame.K_p:
            preset = self.cycle_preset(-1 if shift else 1)
            if preset is not None:
                manager.renderer.flash(f"{preset.id}: {preset.description}", (120, 200, 240))
        elif uni == "+" or key in (pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.change_speed(2.0)
        elif uni == "-" or key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.change_speed(0.5)

    def update(self, dt_ms: int, manager) -> None:
        if self.engine.running:
            self.engine.run(self.steps_per_frame)
        if self.engine.exhausted and not self._announced_exhausted:
            self._announced_exhausted = True
            manager.renderer.flash("Point buffer full. Press R to restart.", (255, 210, 80))

    def hud_lines(self) -> List[str]:
        eng = self.engine
        s = self.settings
        if eng.exhausted:
            status = "Exhausted"
        elif eng.running:
            status = "Running"
        else:
            status = "Paused"
        lines = [
            f"Vertices {s.vertices}   Jump ratio {s.jump_ratio}   Rule {s.rule}",
            f"Points {len(eng)}/{eng.config.capacity}   Tick {eng.tick}   Speed {self.steps_per_frame}/frame",
            status,
        ]
        if self.preset_id:
            lines.append(f"Preset {self.preset_id}")
        return lines

    def render(self, renderer, manager) -> None:
        renderer.draw_engine(self.engine, self.hud_lines(), FOOTER)
        renderer.present()
