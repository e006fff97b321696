from __future__ import annotations

from typing import Optional

import pygame


class Scene:
    """
    One layer of the scene stack.

    The SceneManager drives the top scene once per frame through
    handle_event / update / render. A scene leaves the stack by calling
    manager.pop_scene() or manager.set_scene(...).
    """

    def handle_event(self, event, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        return None

    def update(self, dt_ms: int, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        return None

    def render(self, renderer, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        return None


# ---------------------------------------------------------------------------
# Form / popup navigation
# ---------------------------------------------------------------------------

MENU_ACTION_UP = "up"
MENU_ACTION_DOWN = "down"
MENU_ACTION_LEFT = "left"
MENU_ACTION_RIGHT = "right"
MENU_ACTION_ACTIVATE = "activate"
MENU_ACTION_BACK = "back"

# Arrow keys and the numpad only; letters and digits belong to text entry.
_KEYS_BY_ACTION = {
    MENU_ACTION_UP: (pygame.K_UP, pygame.K_KP8),
    MENU_ACTION_DOWN: (pygame.K_DOWN, pygame.K_KP2),
    MENU_ACTION_LEFT: (pygame.K_LEFT, pygame.K_KP4),
    MENU_ACTION_RIGHT: (pygame.K_RIGHT, pygame.K_KP6),
    MENU_ACTION_ACTIVATE: (pygame.K_RETURN, pygame.K_KP_ENTER),
    MENU_ACTION_BACK: (pygame.K_ESCAPE,),
}
_ACTION_BY_KEY = {key: action for action, keys in _KEYS_BY_ACTION.items() for key in keys}
_REPEATABLE = frozenset((MENU_ACTION_UP, MENU_ACTION_DOWN, MENU_ACTION_LEFT, MENU_ACTION_RIGHT))


class MenuInput:
    """
    Translates keys to MENU_ACTION_* values and re-emits a held arrow key.

    A held key repeats after `initial_delay` ms at `slow_interval`, then at
    `fast_interval` once it has been down for `fast_threshold` ms.
    """

    def __init__(
        self,
        *,
        initial_delay: int = 300,
        slow_interval: int = 120,
        fast_interval: int = 40,
        fast_threshold: int = 900,
    ) -> None:
        self.initial_delay = initial_delay
        self.slow_interval = slow_interval
        self.fast_interval = fast_interval
        self.fast_threshold = fast_threshold
        self.held_key: Optional[int] = None
        self.held_since = 0
        self.last_fire = 0

    @staticmethod
    def map_key(key: int) -> Optional[str]:
        return _ACTION_BY_KEY.get(key)

    def handle_keydown(self, key: int) -> Optional[str]:
        action = self.map_key(key)
        if action in _REPEATABLE:
            self.held_key = key
            self.held_since = self.last_fire = pygame.time.get_ticks()
        else:
            self.held_key = None
        return action

    def handle_keyup(self, key: int) -> None:
        if key == self.held_key:
            self.held_key = None

    def update(self) -> Optional[str]:
        """Once per frame: the repeated action if one is due, else None."""
        if self.held_key is None:
            return None
        now = pygame.time.get_ticks()
        held_for = now - self.held_since
        if held_for < self.initial_delay:
            return None
        interval = self.fast_interval if held_for >= self.fast_threshold else self.slow_interval
        if now - self.last_fire < interval:
            return None
        self.last_fire = now
        return self.map_key(self.held_key)


def draw_panel(rect: pygame.Rect) -> pygame.Surface:
    """Framed translucent panel shared by the settings form and popups."""
    panel = pygame.Surface(rect.size, pygame.SRCALPHA)
    panel.fill((10, 10, 20, 240))
    pygame.draw.rect(panel, (220, 220, 240, 255), panel.get_rect(), 2)
    return panel


def centered_rect(renderer, scale: float) -> pygame.Rect:
    w = int(renderer.width * scale)
    h = int(renderer.height * scale)
    return pygame.Rect((renderer.width - w) // 2, (renderer.height - h) // 2, w, h)
