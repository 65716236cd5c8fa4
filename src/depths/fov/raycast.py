from __future__ import annotations

import logging
import math
from typing import List, Tuple

from ..dungeon.grid import Grid, Point
from ..dungeon.tiles import TileKind
from ..exceptions import TileOutOfBounds
from .field import LightLevel, VisibilityField

logger = logging.getLogger(__name__)

RAY_COUNT = 360

# Unit direction per integer degree, computed once
_DIRECTIONS: Tuple[Tuple[float, float], ...] = tuple(
    (math.cos(math.radians(deg)), math.sin(math.radians(deg))) for deg in range(RAY_COUNT)
)


def _cast(grid: Grid, cells: List[List[LightLevel]], origin: Point, dx: float, dy: float, radius: int) -> None:
    ox = origin.x + 0.5
    oy = origin.y + 0.5
    for _ in range(radius):
        tx = math.floor(ox)
        ty = math.floor(oy)
        if not grid.in_bounds(tx, ty):
            return
        cells[tx][ty] = LightLevel.VISIBLE
        # The wall itself is lit; nothing behind it is
        if grid.cells[tx][ty].kind is TileKind.WALL:
            return
        ox += dx
        oy += dy


def compute_visibility(grid: Grid, origin: Point, radius: int) -> VisibilityField:
    """
    Compute which tiles are lit from origin by marching 360 rays.

    Each ray starts at the centre of the origin tile and takes ``radius`` unit
    steps along its direction. Every tile it enters becomes VISIBLE; the ray
    stops after a WALL tile or at the grid edge. Tiles no ray reaches are DIM.

    This is an approximation rather than symmetric shadowcasting: light can leak
    through diagonal gaps narrower than the 1-degree angular step.
    """
    if not grid.in_bounds(origin.x, origin.y):
        raise TileOutOfBounds(origin.x, origin.y, grid.width, grid.height)
    if radius < 0:
        raise ValueError("radius must be >= 0")

    cells = [[LightLevel.DIM for _ in range(grid.height)] for _ in range(grid.width)]
    for dx, dy in _DIRECTIONS:
        _cast(grid, cells, origin, dx, dy, radius)

    field = VisibilityField(grid.width, grid.height, origin, radius, cells)
    logger.debug("FOV from (%d,%d) radius %d", origin.x, origin.y, radius)
    return field
