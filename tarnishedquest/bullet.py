"""Projectiles fired by the player."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Sequence

import pygame

from .collision import touches_wall
from .entity import Entity, Flip
from .level import LevelPart

DEFAULT_BULLET_W = 128
DEFAULT_BULLET_H = 128
BULLET_SPEED = 1.0
INITIAL_SPEED = 7.0
ANIMATION_FRAMES = 5
FRAME_DELAY = 4
# Animation frames during which the bullet still travels.
ACTIVE_FRAMES = 3
HITBOX_SCALE = 0.7


class BulletType(IntEnum):
    NONE = 0
    NORMAL = 1


class Bullet(Entity):
    """A short-lived shot that speeds up, stops at walls and dies after its animation."""

    def __init__(self, x: float, y: float, texture: Any = None) -> None:
        super().__init__(x, y, texture)
        self.x_vel = INITIAL_SPEED
        self.moving = False
        self.bullet_type = BulletType.NONE
        self.frame_counter = 0
        self._hitbox = pygame.Rect(0, 0, DEFAULT_BULLET_W, DEFAULT_BULLET_H)
        self._sync_hitbox_x()
        self._sync_hitbox_y()
        self.clips = [
            pygame.Rect(i * DEFAULT_BULLET_W, 0, DEFAULT_BULLET_W, DEFAULT_BULLET_H)
            for i in range(ANIMATION_FRAMES)
        ]

    @property
    def collision(self) -> pygame.Rect:
        return self._hitbox.copy()

    def _sync_hitbox_x(self) -> None:
        self._hitbox.x = int(self.x + (DEFAULT_BULLET_W - self._hitbox.w) // 2)

    def _sync_hitbox_y(self) -> None:
        self._hitbox.y = int(self.y + (DEFAULT_BULLET_H - self._hitbox.h) // 2)

    def aim(self, flip: Flip, width: int, height: int, player_x: float, player_y: float) -> None:
        """Face the bullet and place it at the shooter's muzzle."""
        self.flip = flip
        px, py = int(player_x), int(player_y)
        if flip is Flip.HORIZONTAL:
            self.x = float(px - DEFAULT_BULLET_W // 2)
        else:
            self.x = float(px + int(width) - DEFAULT_BULLET_W // 2)
        self.y = float(py + int(height) // 8)
        self._sync_hitbox_x()
        self._sync_hitbox_y()
        self._hitbox.w = int(DEFAULT_BULLET_W * HITBOX_SCALE)
        self._hitbox.h = int(DEFAULT_BULLET_H * HITBOX_SCALE)

    def _step_back(self) -> None:
        if self.flip is Flip.HORIZONTAL:
            self.x += self.x_vel
        else:
            self.x -= self.x_vel
        self._sync_hitbox_x()

    def update(self, level_parts: Sequence[LevelPart]) -> None:
        """Advance one frame; stop moving once the animation has played out."""
        if self.frame_counter // FRAME_DELAY < ACTIVE_FRAMES:
            self.x_vel += BULLET_SPEED
            if self.flip is Flip.HORIZONTAL:
                self.x -= self.x_vel
            else:
                self.x += self.x_vel
            self._sync_hitbox_x()
            self._sync_hitbox_y()

            if self.x < 0:
                self.x = 0.0
                self._sync_hitbox_x()

            if touches_wall(self._hitbox, level_parts):
                self._step_back()

        if self.frame_counter // FRAME_DELAY == ANIMATION_FRAMES:
            self.moving = False

    def render(self, renderer: Any, camera: Any, texture: Any) -> None:
        """Draw the current animation frame and advance the animation."""
        clip = self.clips[self.frame_counter // FRAME_DELAY]
        renderer.draw_animation(texture, self.x, self.y, clip, camera, self.flip)
        self.frame_counter += 1