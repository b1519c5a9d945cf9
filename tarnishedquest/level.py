"""Level parts: a grid of tiles loaded from a map file."""

from __future__ import annotations

import os
from typing import Any, Sequence

from .constants import (
    LEVEL_WIDTH,
    TILE_HEIGHT,
    TILE_WIDTH,
    TILES_PER_ROW,
    TOTAL_TILE_SPRITES,
    TOTAL_TILES,
)
from .entity import Tile


class MapFormatError(ValueError):
    """A map file is truncated or holds a tile type outside the tileset."""


def read_tile_types(path: str | os.PathLike) -> list[int]:
    """Read the tile types of one level part from a whitespace-separated map file.

    Only the first ``TOTAL_TILES`` values are used; anything after them is ignored.
    """
    with open(path, encoding="utf-8") as handle:
        tokens = handle.read().split()

    types: list[int] = []
    for index, token in enumerate(tokens[:TOTAL_TILES]):
        try:
            value = int(token)
        except ValueError:
            raise MapFormatError(
                f"unexpected token {token!r} at tile {index} in {os.fspath(path)}"
            ) from None
        if not 0 <= value < TOTAL_TILE_SPRITES:
            raise MapFormatError(f"invalid tile type {value} at tile {index} in {os.fspath(path)}")
        types.append(value)

    if len(types) < TOTAL_TILES:
        raise MapFormatError(
            f"unexpected end of file after {len(types)} tiles in {os.fspath(path)}"
        )
    return types


def _column(index: int) -> int:
    return index % TILES_PER_ROW


def _row(index: int) -> int:
    return index // TILES_PER_ROW


class LevelPart:
    """One screen-wide chunk of the world, a fixed grid of tiles."""

    def __init__(self, x: float, y: float, path: str | os.PathLike, texture: Any) -> None:
        self.x = int(x)
        self.y = int(y)
        self.skeleton_positions: tuple[float, ...] = ()
        self.tiles = [
            Tile(
                self.x + _column(index) * TILE_WIDTH,
                self.y + _row(index) * TILE_HEIGHT,
                texture,
                tile_type,
            )
            for index, tile_type in enumerate(read_tile_types(path))
        ]

    def move_to(self, x: float) -> None:
        """Shift the part, and every tile in it, horizontally to ``x``."""
        self.x = int(x)
        for index, tile in enumerate(self.tiles):
            tile.x = _column(index) * TILE_WIDTH + self.x

    def place_after(self, other: "LevelPart") -> None:
        """Move this part so that it starts where ``other`` ends."""
        self.move_to(other.x + LEVEL_WIDTH)

    def load_tile_types(self, path: str | os.PathLike) -> None:
        """Replace the tile types with those of another map file."""
        for tile, tile_type in zip(self.tiles, read_tile_types(path)):
            tile.tile_type = tile_type

    def render(self, renderer: Any, tile_clips: Sequence[Any], camera: Any) -> None:
        """Draw every tile through the renderer, using the clip for its type."""
        for tile in self.tiles:
            renderer.draw_tile(tile.texture, tile.x, tile.y, tile_clips[tile.tile_type], camera)