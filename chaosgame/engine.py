from __future__ import annotations

"""
Engine entry point: owns the window and the high-level loop orchestration.

The chaos-game model lives in chaosgame.patterns.chaos; this Engine only
wires it to a renderer and the SceneManager's per-frame driver.
"""

from typing import Dict, Optional

import pygame

from chaosgame import config
from chaosgame.patterns.chaos import ChaosGameEngine, chaos_config_for
from chaosgame.patterns.presets import Preset
from chaosgame.render.points import PointRenderer
from chaosgame.scenes import SceneManager
from chaosgame.scenes.chaos_scene import ChaosScene
from chaosgame.validation import Settings


class Engine:
    def __init__(
        self,
        cfg: config.AppConfig,
        settings: Settings,
        presets: Optional[Dict[str, Preset]] = None,
        preset_id: Optional[str] = None,
    ) -> None:
        pygame.init()
        self.cfg = cfg
        self.renderer = PointRenderer(cfg)
        self.manager = SceneManager(cfg, self.renderer)
        self.chaos = ChaosGameEngine(
            chaos_config_for(settings, cfg), rng=self.manager.rng_factory(cfg.seed)
        )
        self.manager.set_scene(
            ChaosScene(self.chaos, cfg, settings, presets=presets, preset_id=preset_id)
        )

    def run(self) -> None:
        try:
            self.manager.run()
        finally:
            self.renderer.teardown()
