"""Game-wide dimensions, physics values and map descriptions."""

from __future__ import annotations

import os
from dataclasses import dataclass

GRAVITY = 0.3
MAX_GRAVITY = 15.0

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720

LEVEL_WIDTH = 1344
LEVEL_HEIGHT = 1024

TILE_WIDTH = 64
TILE_HEIGHT = 64
TOTAL_LEVEL_PART = 3
TOTAL_MAP = 15
TOTAL_TILES = 336
TOTAL_TILE_SPRITES = 187

# Tiles laid out per row of one level part.
TILES_PER_ROW = LEVEL_WIDTH // TILE_WIDTH
# Tile types up to and including this value are solid ground or wall.
SOLID_TILE_MAX = 84


@dataclass(frozen=True)
class MapSpec:
    """A map file and the tile coordinates where skeletons spawn on it.

    ``skeleton_positions`` is a flat sequence of alternating column and row
    values, as stored in the map table.
    """

    path: str | os.PathLike
    skeleton_positions: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "skeleton_positions", tuple(self.skeleton_positions))

    def skeleton_tiles(self) -> list[tuple[float, float]]:
        """Return the spawn positions as (column, row) pairs.

        A trailing unpaired value is ignored.
        """
        values = iter(self.skeleton_positions)
        return list(zip(values, values))