from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

import pygame

from chaosgame.config import MAX_JUMP_RATIO, MAX_VERTICES, MIN_JUMP_RATIO, MIN_VERTICES
from chaosgame.patterns.selection import RULES
from chaosgame.validation import ConfigError, RANGES_HELP, Settings, validate_settings

from .base import (
    Scene,
    MenuInput,
    MENU_ACTION_UP,
    MENU_ACTION_DOWN,
    MENU_ACTION_LEFT,
    MENU_ACTION_RIGHT,
    MENU_ACTION_ACTIVATE,
    MENU_ACTION_BACK,
    centered_rect,
    draw_panel,
)
from .message_scene import MessageScene

log = logging.getLogger(__name__)

_NUMERIC_FIELDS = ("vertices", "jump_ratio")
_LABELS = {
    "vertices": "Vertices",
    "jump_ratio": "Jump ratio",
    "rule": "Rule",
    "apply": "Apply",
    "cancel": "Cancel",
}
_BOUNDS = {
    "vertices": (MIN_VERTICES, MAX_VERTICES),
    "jump_ratio": (MIN_JUMP_RATIO, MAX_JUMP_RATIO),
}
_MAX_DIGITS = 3
_DIGITS = "0123456789"


class SettingsScene(Scene):
    """
    Form for the chaos-game parameters.

    - Up/Down pick a row; typed digits replace the selected number.
    - Left/Right step a number (clamped) or cycle the rule.
    - Enter validates the whole form. On success on_apply(settings) runs and
      the form closes; otherwise each rejected field snaps back to the last
      accepted value and a popup lists the valid ranges.
    - Esc (or Cancel) closes without applying.
    """

    ROWS = ("vertices", "jump_ratio", "rule", "apply", "cancel")

    def __init__(
        self,
        current: Settings,
        on_apply: Callable[[Settings], None],
    ) -> None:
        self.last_good = current
        self.on_apply = on_apply
        self.fields: Dict[str, str] = {}
        self.rule = current.rule
        self._load(current)
        self.selected_idx = 0
        # True once the user has typed into the selected field; the first
        # digit after selecting a row replaces the old value.
        self._typing = False
        self._menu_input = MenuInput()
        self._background: Optional[pygame.Surface] = None
        self._row_rects: List[pygame.Rect] = []

    def _load(self, settings: Settings) -> None:
        self.fields = {
            "vertices": str(settings.vertices),
            "jump_ratio": str(settings.jump_ratio),
        }
        self.rule = settings.rule

    @property
    def selected_row(self) -> str:
        return self.ROWS[self.selected_idx]

    # ------------------------------------------------------------------ #
    # Events

    def handle_event(self, event, manager) -> None:
        if event.type == pygame.KEYDOWN:
            if self._handle_typing(event):
                return
            self._handle_action(self._menu_input.handle_keydown(event.key), manager)
        elif event.type == pygame.KEYUP:
            self._menu_input.handle_keyup(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            mx, my = manager.renderer._to_surface(event.pos)
            for idx, rect in enumerate(self._row_rects):
                if rect.collidepoint(mx, my):
                    self._select(idx)
                    if self.ROWS[idx] in ("apply", "cancel"):
                        self._handle_action(MENU_ACTION_ACTIVATE, manager)
                    break

    def update(self, dt_ms: int, manager) -> None:
        repeat = self._menu_input.update()
        if repeat is not None:
            self._handle_action(repeat, manager)

    def _select(self, idx: int) -> None:
        self.selected_idx = idx % len(self.ROWS)
        self._typing = False

    def _handle_typing(self, event) -> bool:
        """Digits and Backspace edit the selected numeric field."""
        row = self.selected_row
        if row not in _NUMERIC_FIELDS:
            return False
        uni = getattr(event, "unicode", "")
        if len(uni) == 1 and uni in _DIGITS:
            buf = self.fields[row] if self._typing else ""
            if len(buf) < _MAX_DIGITS:
                self.fields[row] = buf + uni
            self._typing = True
            return True
        if event.key == pygame.K_BACKSPACE:
            self.fields[row] = self.fields[row][:-1]
            self._typing = True
            return True
        return False

    def _step(self, row: str, delta: int) -> None:
        if row == "rule":
            names = list(RULES)
            pos = names.index(self.rule) if self.rule in names else 0
            self.rule = names[(pos + delta) % len(names)]
            return
        lo, hi = _BOUNDS[row]
        text = self.fields[row]
        cur = int(text) if text and all(ch in _DIGITS for ch in text) else getattr(self.last_good, row)
        self.fields[row] = str(max(lo, min(hi, cur + delta)))
        self._typing = False

    def _handle_action(self, action: Optional[str], manager) -> None:
        if action is None:
            return
        row = self.selected_row

        if action == MENU_ACTION_UP:
            self._select(self.selected_idx - 1)
        elif action == MENU_ACTION_DOWN:
            self._select(self.selected_idx + 1)
        elif action in (MENU_ACTION_LEFT, MENU_ACTION_RIGHT):
            if row in _NUMERIC_FIELDS or row == "rule":
                self._step(row, -1 if action == MENU_ACTION_LEFT else 1)
        elif action == MENU_ACTION_BACK:
            manager.pop_scene()
        elif action == MENU_ACTION_ACTIVATE:
            if row == "cancel":
                manager.pop_scene()
            else:
                self.commit(manager)

    def commit(self, manager) -> bool:
        """Validate the form; apply and close on success."""
        try:
            settings = validate_settings(
                self.fields["vertices"],
                self.fields["jump_ratio"],
                self.rule,
                fallback=self.last_good,
            )
        except ConfigError as e:
            log.warning("rejected settings: %s", "; ".join(e.errors.values()))
            self._load(e.corrected)
            self._typing = False
            manager.push_scene(MessageScene(e.user_message(), title="Invalid settings"))
            return False

        self.last_good = settings
        manager.pop_scene()
        self.on_apply(settings)
        return True

    # ------------------------------------------------------------------ #
    # Drawing

    def _value_text(self, row: str) -> str:
        if row in _NUMERIC_FIELDS:
            return self.fields[row] or "_"
        if row == "rule":
            return self.rule
        return ""

    def render(self, renderer, manager) -> None:
        surface = renderer.surface
        if self._background is None:
            self._background = surface.copy()
        surface.blit(self._background, (0, 0))

        rect = centered_rect(renderer, 0.55)
        panel = draw_panel(rect)
        font = renderer.font
        small = renderer.small_font

        y = 16
        title = font.render("Chaos game settings", True, renderer.fg)
        panel.blit(title, ((panel.get_width() - title.get_width()) // 2, y))
        y += title.get_height() + 6
        for part in RANGES_HELP.split("; "):
            hint = small.render(part, True, renderer.dim)
            panel.blit(hint, (24, y))
            y += hint.get_height() + 2
        y += 16

        self._row_rects = []
        for idx, row in enumerate(self.ROWS):
            selected = idx == self.selected_idx
            color = renderer.sel if selected else renderer.fg
            prefix = "▶ " if selected else "  "
            label = font.render(prefix + _LABELS[row], True, color)
            panel.blit(label, (24, y))
            value = self._value_text(row)
            if value:
                value_surf = font.render(value, True, color)
                panel.blit(value_surf, (panel.get_width() - value_surf.get_width() - 32, y))
            self._row_rects.append(
                pygame.Rect(rect.left + 24, rect.top + y, rect.width - 48, label.get_height())
            )
            y += label.get_height() + 10

        footer = small.render(
            "↑/↓ move • type digits or ←/→ to change • Enter apply • Esc cancel",
            True,
            renderer.dim,
        )
        panel.blit(
            footer,
            ((panel.get_width() - footer.get_width()) // 2, panel.get_height() - footer.get_height() - 12),
        )

        surface.blit(panel, rect.topleft)
        renderer.present()
