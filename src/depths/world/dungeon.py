from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..config import Settings
from ..dungeon.grid import Point
from ..dungeon.tiles import TileKind
from ..events import EventBus, EventType
from ..fov.field import VisibilityField
from ..rng import RandomSource, Seed, derive_seed
from .level import Level
from .movement import Direction, MoveResult, try_move

logger = logging.getLogger(__name__)

# (depth, generation) -> RNG used to build that floor
RngFactory = Callable[[int, int], RandomSource]


@dataclass(frozen=True)
class Transition:
    """Result of taking a staircase: where the occupant now stands."""

    from_depth: int
    to_depth: int
    position: Point


class Dungeon:
    """
    Level manager: owns every materialized floor and tracks the active depth.

    The occupant's position belongs to the caller and is passed in by value;
    movement and stair methods report the new position instead of storing it.

    Floors are built lazily the first time a staircase leads past the deepest
    materialized depth and are kept for the whole run, so revisiting a floor
    keeps its exploration memory. Each depth draws from its own RNG derived from
    the master seed, so a floor's layout does not depend on visit order.
    """

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        *,
        settings: Optional[Settings] = None,
        seed: Seed = None,
        bus: Optional[EventBus] = None,
        rng_factory: Optional[RngFactory] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.width = width if width is not None else self.settings.width
        self.height = height if height is not None else self.settings.height
        self.bus = bus or EventBus()

        master = seed if seed is not None else self.settings.seed
        if master is None:
            master = secrets.randbits(64)
            logger.info("No master seed provided; generated random seed: %d", master)
        self.master_seed: Seed = master
        self._rng_factory: RngFactory = rng_factory or self._default_rng_factory
        self._spawn_rng = RandomSource(derive_seed(master, "spawn"))
        self._generations: Dict[int, int] = {}

        self.levels: List[Level] = []
        self.current = 0
        self._materialize(0)

    def _default_rng_factory(self, depth: int, generation: int) -> RandomSource:
        return RandomSource(derive_seed(self.master_seed, "level", depth, generation))

    def _materialize(self, depth: int) -> Level:
        if depth != len(self.levels):
            raise ValueError(f"Depth {depth} is not the next frontier depth ({len(self.levels)})")
        logger.info("Initializing map level %d", depth)
        level = self._build(depth)
        self.levels.append(level)
        self.bus.publish(EventType.LEVEL_CREATED, {"depth": depth})
        return level

    def _build(self, depth: int) -> Level:
        generation = self._generations.get(depth, 0)
        rng = self._rng_factory(depth, generation)
        return Level.create(depth, self.width, self.height, rng, self.settings)

    # ---- State -----------------------------------------------------------
    @property
    def level(self) -> Level:
        return self.levels[self.current]

    @property
    def depth(self) -> int:
        return self.current

    def spawn_point(self) -> Point:
        """Random empty tile on the active floor, e.g. to place the occupant at the start of a run."""
        pos = self.level.random_empty_coords(self._spawn_rng)
        logger.info("Initializing occupant at (%d,%d) on depth %d", pos.x, pos.y, self.current)
        return pos

    # ---- Movement --------------------------------------------------------
    def can_move(self, pos: Point, direction: Direction) -> bool:
        return self.level.can_move(pos, direction)

    def move(self, pos: Point, direction: Direction) -> MoveResult:
        return try_move(self.level.grid, pos, direction)

    # ---- Stairs ----------------------------------------------------------
    def descend(self, pos: Point) -> Optional[Transition]:
        """Take the StairsDown tile at pos; returns None (no state change) if pos is not one."""
        if self.level.at(pos.x, pos.y) is not TileKind.STAIRS_DOWN:
            return None
        target = self.current + 1
        if target == len(self.levels):
            self._materialize(target)
        return self._change_level(target)

    def ascend(self, pos: Point) -> Optional[Transition]:
        """Take the StairsUp tile at pos; returns None (no state change) if pos is not one."""
        if self.level.at(pos.x, pos.y) is not TileKind.STAIRS_UP:
            return None
        return self._change_level(self.current - 1)

    def take_stairs(self, pos: Point) -> Optional[Transition]:
        target = self.level.stairs_at(pos)
        if target is None:
            return None
        return self.descend(pos) if target > self.current else self.ascend(pos)

    def _change_level(self, target: int) -> Transition:
        origin = self.current
        arrival = self.levels[target].stairs_to(origin)
        self.current = target
        logger.info("Moving to level %d at (%d,%d)", target, arrival.x, arrival.y)
        self.bus.publish(
            EventType.LEVEL_CHANGED,
            {"from_depth": origin, "to_depth": target, "position": arrival},
        )
        self.refresh_visibility(arrival)
        return Transition(from_depth=origin, to_depth=target, position=arrival)

    def regenerate_current(self) -> Point:
        """Rebuild the active floor in place and return a fresh spawn point on it."""
        depth = self.current
        logger.info("Regenerating current level %d", depth)
        self._generations[depth] = self._generations.get(depth, 0) + 1
        self.levels[depth] = self._build(depth)
        self.bus.publish(EventType.LEVEL_REGENERATED, {"depth": depth})
        pos = self.spawn_point()
        self.refresh_visibility(pos)
        return pos

    # ---- Visibility ------------------------------------------------------
    def refresh_visibility(self, pos: Point, radius: Optional[int] = None) -> VisibilityField:
        return self.level.refresh_visibility(pos, radius)

    def visible(self, x: int, y: int) -> bool:
        return self.level.visible(x, y)

    def explored(self, x: int, y: int) -> bool:
        return self.level.explored(x, y)

    def at(self, x: int, y: int) -> TileKind:
        return self.level.at(x, y)
