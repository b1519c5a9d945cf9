"""Positioned, textured game objects and map tiles."""

from __future__ import annotations

from enum import Enum
from typing import Any

import pygame

from .constants import SOLID_TILE_MAX, TILE_HEIGHT, TILE_WIDTH


class Flip(Enum):
    """Horizontal mirroring of a sprite."""

    NONE = 0
    HORIZONTAL = 1


class Entity:
    """Anything drawn in the world: a position, a texture and a facing."""

    def __init__(self, x: float, y: float, texture: Any) -> None:
        self.x = float(x)
        self.y = float(y)
        self.texture = texture
        self.flip = Flip.NONE
        if texture is None:
            self._frame_size = (0, 0)
        else:
            width, height = texture.get_size()
            self._frame_size = (int(width), int(height))

    @property
    def current_frame(self) -> pygame.Rect:
        """The whole texture area, as measured when the entity was made."""
        return pygame.Rect(0, 0, *self._frame_size)


class Tile(Entity):
    """One cell of a level part, with a sprite type from the tileset."""

    def __init__(self, x: float, y: float, texture: Any, tile_type: int) -> None:
        super().__init__(x, y, texture)
        self.tile_type = tile_type

    @property
    def collision(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), TILE_WIDTH, TILE_HEIGHT)

    @property
    def is_solid(self) -> bool:
        return 0 <= self.tile_type <= SOLID_TILE_MAX