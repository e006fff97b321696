# manager.py
from __future__ import annotations

import logging
from typing import List, Optional

import pygame

from chaosgame import config
from chaosgame.rng import new_rng

from .base import Scene

log = logging.getLogger(__name__)


class SceneManager:
    def __init__(self, cfg: config.AppConfig, renderer) -> None:
        # Store config + renderer from the Engine
        self.cfg = cfg
        self.renderer = renderer
        self.scene_stack: List[Scene] = []

    # ------------------------------------------------------------------ #
    # RNG factory used by scenes to spin up new RNGs.

    def rng_factory(self, seed=None):
        """new_rng() already handles seeding when seed is None."""
        return new_rng(seed)

    # ------------------------------------------------------------------ #
    # Stack operations

    def push_scene(self, scene: Scene) -> None:
        self.scene_stack.append(scene)

    def pop_scene(self) -> None:
        if not self.scene_stack:
            return
        self.scene_stack.pop()

    def set_scene(self, scene: Optional[Scene]) -> None:
        if scene is None:
            self.scene_stack.clear()
        else:
            self.scene_stack = [scene]

    # ------------------------------------------------------------------ #

    def run(self) -> None:
        """Drive whichever scene is on top until the stack empties."""
        while self.scene_stack:
            self._run_live_scene(self.scene_stack[-1])

    def _run_live_scene(self, scene: Scene) -> None:
        renderer = self.renderer
        clock = pygame.time.Clock()
        log.debug("entering %s", type(scene).__name__)

        # Drive events/update/render until the scene stack changes or the
        # app is quit.
        while self.scene_stack and self.scene_stack[-1] is scene:
            dt = clock.tick(self.cfg.fps)

            # Events
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.set_scene(None)
                    return

                # Window resize is purely a view concern; don't forward it.
                if event.type == pygame.VIDEORESIZE:
                    renderer.handle_resize(event.w, event.h)
                    continue

                # Global fullscreen toggle
                if event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                    renderer.toggle_fullscreen()
                    continue

                scene.handle_event(event, self)
                # The handler may have closed this scene; stop feeding it.
                if not self.scene_stack or self.scene_stack[-1] is not scene:
                    return

            scene.update(dt, self)
            scene.render(renderer, self)
