from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..config import Settings
from ..exceptions import GenerationError
from ..rng import RandomSource
from .grid import Grid, Point, Rect
from .tiles import TileKind

logger = logging.getLogger(__name__)

# Half-thickness of tunnel legs; legs cover [c - 1, c + 1) so they are 2 tiles thick
TUNNEL_HALF = 1


def random_empty_coords(grid: Grid, rng: RandomSource, max_attempts: int = 1000) -> Point:
    """
    Sample a uniformly random EMPTY tile.

    Probes random cells up to max_attempts times, then falls back to a uniform
    choice among all EMPTY cells. Raises GenerationError when the grid has no
    EMPTY tile at all.
    """
    for _ in range(max_attempts):
        x = rng.int_in_range(0, grid.width)
        y = rng.int_in_range(0, grid.height)
        if grid.at(x, y) is TileKind.EMPTY:
            return Point(x, y)

    empties = grid.find(TileKind.EMPTY)
    if not empties:
        raise GenerationError(f"No empty tile on {grid!r} after {max_attempts} attempts")
    logger.warning("Random probing found no empty tile after %d attempts; scanning %d candidates", max_attempts, len(empties))
    return empties[rng.int_in_range(0, len(empties))]


class DungeonGenerator:
    """
    Rooms + tunnels floor generator.

    Places a random number of overlapping rectangular rooms and joins every room
    to the room placed immediately before it with a 2-tile-thick L-shaped
    tunnel, so the whole placement chain forms one connected region. Finally one
    EMPTY tile becomes the descending staircase.

    Guarantees:
    - at least one EMPTY tile and exactly one STAIRS_DOWN tile
    - all passable tiles are 4-connected
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()

    def generate(self, width: int, height: int, rng: RandomSource) -> Grid:
        s = self.settings
        limit_w, limit_h = self._size_limits(width, height)

        grid = Grid(width, height, default=TileKind.WALL)
        nrect = rng.int_in_range(s.rooms_min, s.rooms_max)
        logger.info("Floor %dx%d: number of rooms is %d", width, height, nrect)

        rooms: List[Rect] = []
        for _ in range(nrect):
            room = self._sample_room(width, height, limit_w, limit_h, rng)
            grid.carve(room)
            if rooms:
                self._connect(grid, room, rooms[-1])
            rooms.append(room)

        stairs = random_empty_coords(grid, rng, s.empty_coords_attempts)
        grid.set_kind(stairs.x, stairs.y, TileKind.STAIRS_DOWN)
        logger.info("Generated stairs down at (%d,%d)", stairs.x, stairs.y)
        return grid

    def _size_limits(self, width: int, height: int) -> Tuple[int, int]:
        min_size = self.settings.room_min_size
        if width < min_size or height < min_size:
            raise GenerationError(
                f"Grid {width}x{height} cannot hold a {min_size}x{min_size} room"
            )
        limit = self.settings.room_size_limit
        limit_w = max(min_size, min(limit, width))
        limit_h = max(min_size, min(limit, height))
        if (limit_w, limit_h) != (limit, limit):
            logger.warning(
                "Room size limit %d does not fit %dx%d grid; clamped to %dx%d",
                limit,
                width,
                height,
                limit_w,
                limit_h,
            )
        return limit_w, limit_h

    def _sample_room(self, width: int, height: int, limit_w: int, limit_h: int, rng: RandomSource) -> Rect:
        min_size = self.settings.room_min_size
        size_w = rng.int_in_range(min_size, limit_w + 1)
        size_h = rng.int_in_range(min_size, limit_h + 1)
        # Origin anywhere the room still fits inside the grid
        x0 = rng.int_in_range(0, width - size_w + 1)
        y0 = rng.int_in_range(0, height - size_h + 1)
        return Rect(x0, y0, x0 + size_w, y0 + size_h)

    @staticmethod
    def _connect(grid: Grid, new_room: Rect, prev_room: Rect) -> None:
        a = new_room.center()
        b = prev_room.center()
        min_x, max_x = min(a.x, b.x), max(a.x, b.x)
        # The horizontal leg runs at the upper center's y; the vertical leg drops
        # at the lower center's x so the elbow meets both centers.
        upper, lower = (a, b) if a.y <= b.y else (b, a)

        tunnel_x = Rect(min_x, upper.y - TUNNEL_HALF, max_x + 1, upper.y + TUNNEL_HALF)
        grid.carve(tunnel_x)
        tunnel_y = Rect(lower.x - TUNNEL_HALF, upper.y, lower.x + TUNNEL_HALF, lower.y + 1)
        grid.carve(tunnel_y)


def generate(width: int, height: int, rng: RandomSource, settings: Optional[Settings] = None) -> Grid:
    return DungeonGenerator(settings).generate(width, height, rng)
