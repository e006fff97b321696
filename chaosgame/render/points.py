"""Pygame renderer for the chaos-game point cloud."""
from typing import Dict, List, Tuple

import pygame

from chaosgame.config import AppConfig
from chaosgame.patterns.chaos import ChaosGameEngine
from chaosgame.patterns.polygon import rotate_point
from chaosgame.render.fade import Color, age_to_alpha, blend_color


class PointRenderer:
    def __init__(self, cfg: AppConfig) -> None:
        pygame.init()
        self.cfg = cfg
        self.width = cfg.view_width
        self.height = cfg.view_height
        self.surface_flags = pygame.RESIZABLE
        # render surface at native resolution; display may be larger in fullscreen
        self.surface = pygame.Surface((self.width, self.height))
        self.fullscreen = False
        self.display = pygame.display.set_mode((self.width, self.height), self.surface_flags)
        self.lb_off = (0, 0)  # letterbox offset when centering
        self.lb_scale = 1.0   # letterbox scale factor
        pygame.display.set_caption("Chaos Game")
        self.font = pygame.font.SysFont("consolas", cfg.font_size)
        self.small_font = pygame.font.SysFont("consolas", 16)
        self.bg = (10, 10, 20)
        self.fg = (220, 230, 240)
        self.dim = (120, 130, 150)
        self.sel = (255, 230, 120)
        self.point_color: Color = cfg.point_color
        self.vertex_color: Color = cfg.vertex_color
        self.fade_window = cfg.fade_window
        self.min_alpha = cfg.min_alpha

        # transient flash message
        self.flash_text: str | None = None
        self.flash_color: Tuple[int, int, int] = (255, 120, 120)
        self.flash_until_ms: int = 0

        # alpha levels are quantized so each frame only blends a handful of colors
        self.alpha_levels = 32
        self._color_cache: Dict[Tuple[Color, int], Color] = {}

    # ------------------------------------------------------------------ #
    # View transform

    def _view_scale(self, radius: float) -> float:
        half = min(self.width, self.height) / 2.0 - self.cfg.view_margin
        return max(1.0, half) / radius

    def engine_to_screen(self, x: float, y: float, radius: float) -> Tuple[int, int]:
        """Rotate, scale and flip y so engine space sits centered on screen."""
        rx, ry = rotate_point(x, y, 0.0, 0.0, self.cfg.rotation_deg)
        scale = self._view_scale(radius)
        return (
            int(round(self.width / 2.0 + rx * scale)),
            int(round(self.height / 2.0 - ry * scale)),
        )

    def _to_surface(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        """Convert display-space mouse coords to surface-space, accounting for letterbox and scale."""
        return (
            int((pos[0] - self.lb_off[0]) / max(1e-6, self.lb_scale)),
            int((pos[1] - self.lb_off[1]) / max(1e-6, self.lb_scale)),
        )

    # ------------------------------------------------------------------ #
    # Drawing

    def _faded(self, color: Color, level: int) -> Color:
        key = (color, level)
        cached = self._color_cache.get(key)
        if cached is None:
            cached = blend_color(self.bg, color, level / self.alpha_levels)
            self._color_cache[key] = cached
        return cached

    def draw_points(self, engine: ChaosGameEngine) -> int:
        """Draw every visible point; returns how many were drawn."""
        radius = engine.config.radius
        r_px = self.cfg.point_radius
        levels = self.alpha_levels
        drawn = 0
        for x, y, age in engine.points():
            alpha = age_to_alpha(age, self.fade_window, self.min_alpha)
            level = int(alpha * levels)
            if level <= 0:
                continue
            col = self._faded(self.point_color, level)
            px, py = self.engine_to_screen(x, y, radius)
            if r_px <= 1:
                self.surface.set_at((px, py), col)
            else:
                pygame.draw.circle(self.surface, col, (px, py), r_px)
            drawn += 1
        return drawn

    def draw_vertices(self, engine: ChaosGameEngine) -> None:
        radius = engine.config.radius
        screen_pts: List[Tuple[int, int]] = [
            self.engine_to_screen(vx, vy, radius) for vx, vy in engine.vertices
        ]
        outline = self._faded(self.vertex_color, self.alpha_levels // 4)
        pygame.draw.polygon(self.surface, outline, screen_pts, 1)
        for i, p in enumerate(screen_pts):
            col = self.sel if i == engine.previous_vertex else self.vertex_color
            pygame.draw.circle(self.surface, col, p, 4)

    def draw_current(self, engine: ChaosGameEngine) -> None:
        cx, cy = engine.current
        pygame.draw.circle(
            self.surface, self.fg, self.engine_to_screen(cx, cy, engine.config.radius), 3, 1
        )

    def draw_hud(self, lines: List[str], footer: str = "") -> None:
        y = 12
        for line in lines:
            text = self.small_font.render(line, True, self.fg)
            self.surface.blit(text, (12, y))
            y += text.get_height() + 2
        if footer:
            hint = self.small_font.render(footer, True, self.dim)
            self.surface.blit(
                hint, ((self.width - hint.get_width()) // 2, self.height - hint.get_height() - 12)
            )

    def flash(self, text: str, color: Tuple[int, int, int] | None = None, ms: int = 2500) -> None:
        self.flash_text = text
        if color is not None:
            self.flash_color = color
        self.flash_until_ms = pygame.time.get_ticks() + ms

    def draw_flash(self) -> None:
        if not self.flash_text:
            return
        if pygame.time.get_ticks() > self.flash_until_ms:
            self.flash_text = None
            return
        text = self.font.render(self.flash_text, True, self.flash_color)
        x = (self.width - text.get_width()) // 2
        self.surface.blit(text, (x, self.height - 80))

    def draw_engine(self, engine: ChaosGameEngine, hud: List[str], footer: str = "") -> None:
        self.surface.fill(self.bg)
        self.draw_vertices(engine)
        self.draw_points(engine)
        self.draw_current(engine)
        self.draw_hud(hud, footer)
        self.draw_flash()

    # ------------------------------------------------------------------ #
    # Display

    def present(self) -> None:
        self._present()

    def toggle_fullscreen(self) -> None:
        flags = self.display.get_flags()
        if flags & pygame.FULLSCREEN:
            self.display = pygame.display.set_mode((self.width, self.height), self.surface_flags)
            self.fullscreen = False
        else:
            self.display = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            self.fullscreen = True

    def handle_resize(self, w: int, h: int) -> None:
        if not self.fullscreen:
            self.display = pygame.display.set_mode((w, h), self.surface_flags)

    def teardown(self) -> None:
        pygame.quit()

    def _present(self) -> None:
        """Blit render surface to display with letterboxing (no stretch, aspect preserved)."""
        dw, dh = self.display.get_size()
        sw, sh = self.surface.get_size()
        scale = min(dw / sw, dh / sh)
        new_w = int(sw * scale)
        new_h = int(sh * scale)
        ox = max(0, (dw - new_w) // 2)
        oy = max(0, (dh - new_h) // 2)

        # Keep letterbox info for mouse unprojection.
        self.lb_off = (ox, oy)
        self.lb_scale = scale

        self.display.fill((0, 0, 0))
        if scale != 1.0:
            panel = pygame.transform.smoothscale(self.surface, (new_w, new_h))
        else:
            panel = self.surface
        self.display.blit(panel, (ox, oy))
        pygame.display.flip()
