from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from ..exceptions import TileOutOfBounds
from .tiles import Tile, TileKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with exclusive upper corner (x1, y1)."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    def center(self) -> Point:
        return Point(self.x0 + self.width // 2, self.y0 + self.height // 2)

    def contains(self, p: Point) -> bool:
        return (self.x0 <= p.x < self.x1) and (self.y0 <= p.y < self.y1)

    def clipped(self, width: int, height: int) -> "Rect":
        """Intersect with [0, width) x [0, height); may yield an empty rect."""
        x0, y0 = max(0, self.x0), max(0, self.y0)
        x1, y1 = min(width, self.x1), min(height, self.y1)
        return Rect(x0, y0, max(x0, x1), max(y0, y1))

    def points(self) -> Iterator[Point]:
        for x in range(self.x0, self.x1):
            for y in range(self.y0, self.y1):
                yield Point(x, y)


class Grid:
    """
    Fixed-size 2D array of tiles backing one dungeon floor.

    Cells are stored column-major (``cells[x][y]``). Coordinates are 0-based with
    (0, 0) at top-left; x grows to the right, y grows down. Every accessor checks
    half-open bounds ``[0, width) x [0, height)`` and raises TileOutOfBounds
    instead of reading a neighbouring cell.
    """

    def __init__(self, width: int, height: int, default: TileKind = TileKind.WALL) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Grid width/height must be > 0")
        self.width = width
        self.height = height
        self.cells: List[List[Tile]] = [[Tile(default) for _ in range(height)] for _ in range(width)]

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise TileOutOfBounds(x, y, self.width, self.height)
        return self.cells[x][y]

    # ---- Query -----------------------------------------------------------
    def at(self, x: int, y: int) -> TileKind:
        return self.tile(x, y).kind

    def explored(self, x: int, y: int) -> bool:
        return self.tile(x, y).explored

    def is_passable(self, x: int, y: int) -> bool:
        """Out-of-bounds counts as impassable."""
        return self.in_bounds(x, y) and self.cells[x][y].kind.is_passable

    def neighbors4(self, x: int, y: int) -> Iterator[Point]:
        # Ordered for deterministic traversal
        for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0)):
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield Point(nx, ny)

    def find(self, kind: TileKind) -> List[Point]:
        return [Point(x, y) for x in range(self.width) for y in range(self.height) if self.cells[x][y].kind is kind]

    def count(self, kind: TileKind) -> int:
        return sum(1 for column in self.cells for t in column if t.kind is kind)

    def passable_points(self) -> List[Point]:
        return [Point(x, y) for x in range(self.width) for y in range(self.height) if self.cells[x][y].kind.is_passable]

    # ---- Mutation --------------------------------------------------------
    def set_kind(self, x: int, y: int, kind: TileKind) -> None:
        self.tile(x, y).kind = kind

    def mark_explored(self, x: int, y: int) -> None:
        self.tile(x, y).mark_explored()

    def carve(self, rect: Rect, kind: TileKind = TileKind.EMPTY) -> None:
        """Set every cell covered by rect to kind; parts outside the grid are clipped."""
        clipped = rect.clipped(self.width, self.height)
        if clipped != rect:
            logger.debug("Carve %s clipped to %s", rect, clipped)
        for x in range(clipped.x0, clipped.x1):
            column = self.cells[x]
            for y in range(clipped.y0, clipped.y1):
                column[y].kind = kind

    # ---- Export / Compare -----------------------------------------------
    def to_str_lines(self) -> List[str]:
        return [''.join(self.cells[x][y].kind.glyph for x in range(self.width)) for y in range(self.height)]

    def snapshot(self) -> Tuple[Tuple[TileKind, ...], ...]:
        """Deterministic, hashable snapshot of tile kinds (row-major) for equality tests."""
        return tuple(tuple(self.cells[x][y].kind for x in range(self.width)) for y in range(self.height))

    def explored_mask(self) -> Tuple[Tuple[bool, ...], ...]:
        return tuple(tuple(self.cells[x][y].explored for x in range(self.width)) for y in range(self.height))

    @classmethod
    def from_ascii(cls, rows: Sequence[str]) -> "Grid":
        """
        Build a Grid from ASCII rows for tests/tools, using TileKind glyphs:
        '#' wall, '.' empty, '>' stairs down, '<' stairs up.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must be same width")
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                grid.cells[x][y].kind = TileKind.from_glyph(ch)
        return grid

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
