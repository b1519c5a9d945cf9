"""Main menu, retry menu and pause toggling."""

from __future__ import annotations

from typing import Any, Sequence

import pygame

from .constants import SCREEN_HEIGHT, SCREEN_WIDTH

BUTTON_WIDTH = 192
BUTTON_HEIGHT = 96
BUTTON_STATES = 3
BUTTON_GAP = 32
BACKGROUND_SIZE = (1310, 720)

_PLAY, _EXIT, _RETRY, _RETRY_EXIT = range(4)


def _button_clips(row: int) -> list[pygame.Rect]:
    return [
        pygame.Rect(i * BUTTON_WIDTH, row * BUTTON_HEIGHT, BUTTON_WIDTH, BUTTON_HEIGHT)
        for i in range(BUTTON_STATES)
    ]


class Menu:
    """Buttons of the title and death screens, and the pause state."""

    def __init__(self, button_texture: Any, main_menu_background: Any, retry_background: Any) -> None:
        self.button_texture = button_texture
        self.main_menu_background = main_menu_background
        self.retry_background = retry_background

        self.play_clips = _button_clips(0)
        self.exit_clips = _button_clips(1)
        self.retry_clips = _button_clips(2)

        left = SCREEN_WIDTH // 2 - BUTTON_WIDTH // 2
        self.primary_button = (left, SCREEN_HEIGHT // 2)
        self.secondary_button = (left, SCREEN_HEIGHT // 2 + BUTTON_HEIGHT + BUTTON_GAP)

        self.in_menu = True
        self.paused = False
        self.reset_requested = False
        self.selected = [False] * 4
        self.pressed = [False] * 4

    def is_hovered(self, button: Sequence[int], mouse: Sequence[int]) -> bool:
        """Whether the mouse lies on the button, edges included."""
        bx, by = button
        mx, my = mouse
        return bx <= mx <= bx + BUTTON_WIDTH and by <= my <= by + BUTTON_HEIGHT

    @staticmethod
    def _mouse(event: Any, mouse: Sequence[int] | None) -> Sequence[int]:
        if mouse is not None:
            return mouse
        pos = getattr(event, "pos", None)
        return pos if pos is not None else pygame.mouse.get_pos()

    def handle_event(self, event: Any, player_dead: bool, mouse: Sequence[int] | None = None) -> bool:
        """Update the menu from one event; return True when an exit button was clicked."""
        quit_requested = False

        if event.type == pygame.MOUSEBUTTONDOWN:
            if getattr(event, "button", None) == pygame.BUTTON_LEFT:
                pos = self._mouse(event, mouse)
                if self.in_menu:
                    if self.is_hovered(self.primary_button, pos):
                        self.pressed[_PLAY] = True
                        self.in_menu = False
                    if self.is_hovered(self.secondary_button, pos):
                        self.pressed[_EXIT] = True
                        quit_requested = True
                if player_dead:
                    if self.is_hovered(self.primary_button, pos):
                        self.pressed[_RETRY] = True
                        self.reset_requested = True
                    if self.is_hovered(self.secondary_button, pos):
                        self.pressed[_RETRY_EXIT] = True
                        quit_requested = True

        elif event.type == pygame.MOUSEBUTTONUP:
            self.pressed = [False] * 4

        elif event.type == pygame.MOUSEMOTION:
            pos = self._mouse(event, mouse)
            slots = []
            if self.in_menu:
                slots += [(_PLAY, self.primary_button), (_EXIT, self.secondary_button)]
            if player_dead:
                slots += [(_RETRY, self.primary_button), (_RETRY_EXIT, self.secondary_button)]
            for slot, button in slots:
                self.selected[slot] = self.is_hovered(button, pos) and not self.pressed[slot]

        elif event.type == pygame.KEYDOWN:
            if getattr(event, "repeat", 0) == 0 and event.key == pygame.K_ESCAPE:
                self.paused = not self.paused

        return quit_requested

    def _clip(self, slot: int, clips: Sequence[pygame.Rect]) -> pygame.Rect:
        if self.selected[slot]:
            return clips[1]
        if not self.pressed[slot]:
            return clips[0]
        return clips[2]

    def render_main_menu(self, renderer: Any) -> None:
        """Draw the title background and its buttons while the title is showing."""
        if not self.in_menu:
            return
        renderer.draw_texture(self.main_menu_background, 0, 0, *BACKGROUND_SIZE)
        px, py = self.primary_button
        sx, sy = self.secondary_button
        renderer.draw_texture(self.button_texture, px, py, clip=self._clip(_PLAY, self.play_clips))
        renderer.draw_texture(self.button_texture, sx, sy, clip=self._clip(_EXIT, self.exit_clips))

    def render_retry_menu(self, renderer: Any) -> None:
        """Draw the retry and exit buttons of the death screen."""
        px, py = self.primary_button
        sx, sy = self.secondary_button
        renderer.draw_texture(self.button_texture, px, py, clip=self._clip(_RETRY, self.retry_clips))
        renderer.draw_texture(
            self.button_texture, sx, sy, clip=self._clip(_RETRY_EXIT, self.exit_clips)
        )