from __future__ import annotations

from typing import Callable, List, Optional

import pygame

from .base import (
    Scene,
    MenuInput,
    MENU_ACTION_UP,
    MENU_ACTION_DOWN,
    MENU_ACTION_ACTIVATE,
    MENU_ACTION_BACK,
    centered_rect,
    draw_panel,
)


class MessageScene(Scene):
    """
    Popup message dialog drawn over a snapshot of the screen beneath it.

    - Shows an optional title and a multi-line message.
    - Presents one or more choices (default: ["OK"]).
    - Enter picks the highlighted choice; Esc closes without a choice.
    - The popup pops itself before calling on_choice, so anything the
      callback pushes lands on top of the scene that opened the popup.
    """

    def __init__(
        self,
        message: str,
        *,
        title: str = "",
        choices: Optional[List[str]] = None,
        on_choice: Optional[Callable[[int, "SceneManager"], None]] = None,  # type: ignore[name-defined]
        scale: float = 0.6,
    ) -> None:
        self.message = message
        self.title = title
        self.choices = choices or ["OK"]
        self.on_choice = on_choice
        self.popup_scale = scale
        self.selected_idx = 0
        self._menu_input = MenuInput()
        self._background: Optional[pygame.Surface] = None

    # ------------------------------------------------------------------ #
    # Events

    def handle_event(self, event, manager) -> None:
        if event.type == pygame.KEYDOWN:
            self._handle_action(self._menu_input.handle_keydown(event.key), manager)
        elif event.type == pygame.KEYUP:
            self._menu_input.handle_keyup(event.key)

    def update(self, dt_ms: int, manager) -> None:
        repeat = self._menu_input.update()
        if repeat is not None:
            self._handle_action(repeat, manager)

    def _handle_action(self, action: Optional[str], manager) -> None:
        if action is None:
            return
        if action == MENU_ACTION_UP:
            self.selected_idx = (self.selected_idx - 1) % len(self.choices)
        elif action == MENU_ACTION_DOWN:
            self.selected_idx = (self.selected_idx + 1) % len(self.choices)
        elif action == MENU_ACTION_BACK:
            manager.pop_scene()
        elif action == MENU_ACTION_ACTIVATE:
            manager.pop_scene()
            if self.on_choice is not None:
                self.on_choice(self.selected_idx, manager)

    # ------------------------------------------------------------------ #
    # Text layout helpers

    @staticmethod
    def _wrap_text(text: str, font: pygame.font.Font, max_width: int) -> List[str]:
        """
        Simple word-wrapping in pixel space using the given font.
        Respects explicit newlines in `text`.
        """
        lines: List[str] = []

        for raw_line in text.splitlines() or [""]:
            words = raw_line.split()
            if not words:
                # Preserve blank lines
                lines.append("")
                continue

            current = words[0]
            for word in words[1:]:
                test = current + " " + word
                if font.size(test)[0] <= max_width:
                    current = test
                else:
                    lines.append(current)
                    current = word
            lines.append(current)

        return lines

    # ------------------------------------------------------------------ #
    # Drawing

    def render(self, renderer, manager) -> None:
        surface = renderer.surface
        # Snapshot the screen beneath this popup once.
        if self._background is None:
            self._background = surface.copy()
        surface.blit(self._background, (0, 0))

        overlay = pygame.Surface((renderer.width, renderer.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        surface.blit(overlay, (0, 0))

        rect = centered_rect(renderer, self.popup_scale)
        panel = draw_panel(rect)
        padding_x = 24
        y = 16

        if self.title:
            title_surf = renderer.font.render(self.title, True, renderer.sel)
            panel.blit(title_surf, ((panel.get_width() - title_surf.get_width()) // 2, y))
            y += title_surf.get_height() + 8

        body_font = renderer.small_font
        for line in self._wrap_text(self.message, body_font, panel.get_width() - 2 * padding_x):
            body_surf = body_font.render(line or " ", True, renderer.fg)
            panel.blit(body_surf, ((panel.get_width() - body_surf.get_width()) // 2, y))
            y += body_surf.get_height() + 2
        y += 12

        for idx, label in enumerate(self.choices):
            selected = idx == self.selected_idx
            color = renderer.sel if selected else renderer.fg
            prefix = "▶ " if selected else "  "
            text_surf = body_font.render(prefix + label, True, color)
            panel.blit(text_surf, ((panel.get_width() - text_surf.get_width()) // 2, y))
            y += text_surf.get_height() + 4

        surface.blit(panel, rect.topleft)
        renderer.present()
