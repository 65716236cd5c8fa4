from __future__ import annotations

from enum import Enum
from typing import List, Sequence, Tuple

from ..dungeon.grid import Point
from ..exceptions import TileOutOfBounds


class LightLevel(str, Enum):
    INVISIBLE = "invisible"   # reserved for renderers; never produced by raycasting
    DIM = "dim"               # not reached by any ray this turn
    VISIBLE = "visible"       # reached by a ray this turn; full brightness


class VisibilityField:
    """
    Per-tile light classification valid for one turn.

    Built once from a grid and an origin and never mutated afterwards; a new
    origin means a new field. Cells are stored column-major like Grid
    (``light_level(x, y)``).
    """

    __slots__ = ("width", "height", "origin", "radius", "_cells")

    def __init__(self, width: int, height: int, origin: Point, radius: int,
                 cells: Sequence[Sequence[LightLevel]]) -> None:
        self.width = width
        self.height = height
        self.origin = origin
        self.radius = radius
        self._cells: Tuple[Tuple[LightLevel, ...], ...] = tuple(tuple(column) for column in cells)

    def light_level(self, x: int, y: int) -> LightLevel:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise TileOutOfBounds(x, y, self.width, self.height)
        return self._cells[x][y]

    def visible(self, x: int, y: int) -> bool:
        return self.light_level(x, y) is LightLevel.VISIBLE

    def visible_points(self) -> List[Point]:
        return [
            Point(x, y)
            for x in range(self.width)
            for y in range(self.height)
            if self._cells[x][y] is LightLevel.VISIBLE
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VisibilityField):
            return NotImplemented
        return (self.width, self.height, self._cells) == (other.width, other.height, other._cells)

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._cells))

    def __repr__(self) -> str:
        return f"VisibilityField({self.width}x{self.height}, origin={self.origin}, radius={self.radius})"
