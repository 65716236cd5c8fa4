from __future__ import annotations

import logging
from typing import Optional

from ..config import Settings
from ..dungeon.generator import DungeonGenerator, random_empty_coords
from ..dungeon.grid import Grid, Point
from ..dungeon.tiles import TileKind
from ..fov.field import LightLevel, VisibilityField
from ..fov.raycast import compute_visibility
from ..rng import RandomSource
from .movement import Direction
from .movement import can_move as _can_move

logger = logging.getLogger(__name__)


class Level:
    """
    One dungeon floor: its grid, the current visibility field, and where its
    staircases are.

    Stair coordinates are stored when the floor is built so that going down and
    straight back up always returns to the same tile.
    """

    def __init__(
        self,
        index: int,
        grid: Grid,
        stairs_down: Point,
        stairs_up: Optional[Point] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.index = index
        self.grid = grid
        self.stairs_down = stairs_down
        self.stairs_up = stairs_up
        self.settings = settings or Settings()
        self.field: Optional[VisibilityField] = None

    @classmethod
    def create(
        cls,
        index: int,
        width: int,
        height: int,
        rng: RandomSource,
        settings: Optional[Settings] = None,
    ) -> "Level":
        """Generate a floor for depth index; floors below the first also get a StairsUp tile."""
        settings = settings or Settings()
        grid = DungeonGenerator(settings).generate(width, height, rng)
        stairs_down = grid.find(TileKind.STAIRS_DOWN)[0]
        stairs_up: Optional[Point] = None
        if index > 0:
            stairs_up = random_empty_coords(grid, rng, settings.empty_coords_attempts)
            grid.set_kind(stairs_up.x, stairs_up.y, TileKind.STAIRS_UP)
            logger.info("Generated stairs up at (%d,%d) on depth %d", stairs_up.x, stairs_up.y, index)
        return cls(index, grid, stairs_down, stairs_up, settings)

    # ---- Tile queries ----------------------------------------------------
    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def at(self, x: int, y: int) -> TileKind:
        return self.grid.at(x, y)

    def explored(self, x: int, y: int) -> bool:
        return self.grid.explored(x, y)

    def can_move(self, pos: Point, direction: Direction) -> bool:
        return _can_move(self.grid, pos, direction)

    def random_empty_coords(self, rng: RandomSource) -> Point:
        return random_empty_coords(self.grid, rng, self.settings.empty_coords_attempts)

    # ---- Visibility ------------------------------------------------------
    def refresh_visibility(self, origin: Point, radius: Optional[int] = None) -> VisibilityField:
        """Replace the visibility field from origin and remember every lit tile as explored."""
        if radius is None:
            radius = self.settings.light_radius
        self.field = compute_visibility(self.grid, origin, radius)
        for p in self.field.visible_points():
            self.grid.mark_explored(p.x, p.y)
        return self.field

    def light_level(self, x: int, y: int) -> LightLevel:
        if self.field is None:
            # Still validate the coordinate before the first refresh
            self.grid.tile(x, y)
            return LightLevel.DIM
        return self.field.light_level(x, y)

    def visible(self, x: int, y: int) -> bool:
        return self.light_level(x, y) is LightLevel.VISIBLE

    # ---- Stairs ----------------------------------------------------------
    def stairs_at(self, pos: Point) -> Optional[int]:
        """Depth reached by the staircase at pos, or None if pos is not a staircase."""
        kind = self.grid.at(pos.x, pos.y)
        if not kind.is_stairs:
            return None
        return self.index + 1 if kind is TileKind.STAIRS_DOWN else self.index - 1

    def stairs_to(self, from_depth: int) -> Point:
        """Arrival tile for an occupant coming from from_depth (the reciprocal staircase)."""
        if from_depth == self.index - 1 and self.stairs_up is not None:
            return self.stairs_up
        if from_depth == self.index + 1:
            return self.stairs_down
        raise ValueError(f"Depth {self.index} has no staircase linked to depth {from_depth}")

    def __repr__(self) -> str:
        return f"Level(index={self.index}, {self.width}x{self.height})"
