"""Rectangle overlap and collision of boxes against level tiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .constants import LEVEL_HEIGHT, LEVEL_WIDTH, TILE_HEIGHT, TILE_WIDTH, TILES_PER_ROW
from .level import LevelPart


@dataclass(frozen=True)
class GroundContact:
    """Outcome of testing a falling or rising box against the level.

    ``ground_index`` and ``level_index`` are ``None`` when the box lies over no
    level part; callers then keep whatever they knew before.
    """

    hit: bool
    grounded: bool
    ground_index: int | None = None
    level_index: int | None = None


def check_collision(a: Any, b: Any) -> bool:
    """Whether two rectangles overlap; shared edges do not count."""
    if a.y + a.h <= b.y:
        return False
    if a.y >= b.y + b.h:
        return False
    if a.x + a.w <= b.x:
        return False
    if a.x >= b.x + b.w:
        return False
    return True


def _in_vertical_range(box: Any) -> bool:
    return 0 <= box.y < LEVEL_HEIGHT - TILE_HEIGHT


def _neighbour_indices(box: Any, part: LevelPart) -> tuple[int, int, int, int]:
    """Indices of the tiles up-right, down-right, up-left and down-left of the box."""
    col_left = int((box.x - part.x) / TILE_WIDTH)
    col_right = col_left + 1
    row_up = int(box.y / TILE_HEIGHT)
    row_down = row_up + 1
    return (
        row_up * TILES_PER_ROW + col_right,
        row_down * TILES_PER_ROW + col_right,
        row_up * TILES_PER_ROW + col_left,
        row_down * TILES_PER_ROW + col_left,
    )


def _hits_tile(box: Any, part: LevelPart, index: int) -> bool:
    tile = part.tiles[index]
    return tile.is_solid and check_collision(box, tile.collision)


def touches_wall(box: Any, level_parts: Sequence[LevelPart]) -> bool:
    """Whether the box overlaps a solid tile of a part it lies well inside."""
    for part in level_parts:
        inside = (
            box.x > part.x
            and box.x + box.w + 13 < part.x + LEVEL_WIDTH
            and _in_vertical_range(box)
        )
        if inside and any(_hits_tile(box, part, i) for i in _neighbour_indices(box, part)):
            return True
    return False


def ground_contact(box: Any, level_parts: Sequence[LevelPart], grounded: bool) -> GroundContact:
    """Test the box against the ground, updating whether it still stands on something."""
    hit = False
    ground_index: int | None = None
    level_index: int | None = None

    for position, part in enumerate(level_parts):
        right = box.x + box.w + 12
        part_end = part.x + LEVEL_WIDTH
        if not (right >= part.x and box.x <= part_end and _in_vertical_range(box)):
            continue

        up_right, down_right, up_left, down_left = _neighbour_indices(box, part)

        on_edge = (box.x <= part.x and right >= part.x) or (
            box.x <= part_end and right >= part_end
        )
        if on_edge:
            grounded = False
        else:
            if any(_hits_tile(box, part, i) for i in (up_right, down_right, up_left, down_left)):
                hit = True

            below_right = part.tiles[down_right]
            below_left = part.tiles[down_left]
            if not below_right.is_solid and not below_left.is_solid:
                grounded = False
            if (
                not below_left.is_solid
                and below_right.is_solid
                and box.x + box.w <= below_right.x
            ):
                grounded = False

        ground_index = down_left
        level_index = position

    return GroundContact(hit, grounded, ground_index, level_index)