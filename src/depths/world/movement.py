from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..dungeon.grid import Grid, Point


class Direction(Enum):
    NONE = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


@dataclass(frozen=True)
class MoveResult:
    new_pos: Point
    moved: bool


def destination(pos: Point, direction: Direction) -> Point:
    dx, dy = direction.delta
    return pos.offset(dx, dy)


def can_move(grid: Grid, pos: Point, direction: Direction) -> bool:
    """True iff the tile one step in direction is inside the grid and not a wall."""
    target = destination(pos, direction)
    return grid.is_passable(target.x, target.y)


def try_move(grid: Grid, pos: Point, direction: Direction) -> MoveResult:
    """
    Attempt to step from pos in direction. Never performs out-of-bounds tile
    access; treats out-of-bounds as a wall. An illegal move leaves the position
    unchanged with moved=False.
    """
    if not can_move(grid, pos, direction):
        return MoveResult(new_pos=pos, moved=False)
    return MoveResult(new_pos=destination(pos, direction), moved=True)
