from dataclasses import dataclass
from enum import Enum, auto


class TileKind(Enum):
    """Basic dungeon tile kinds.

    - WALL: Non-walkable, opaque obstacle
    - EMPTY: Walkable open tile
    - STAIRS_DOWN: Walkable tile leading one depth deeper
    - STAIRS_UP: Walkable tile leading one depth up
    """

    WALL = auto()
    EMPTY = auto()
    STAIRS_DOWN = auto()
    STAIRS_UP = auto()

    @property
    def is_passable(self) -> bool:
        return self is not TileKind.WALL

    @property
    def is_stairs(self) -> bool:
        return self in {TileKind.STAIRS_DOWN, TileKind.STAIRS_UP}

    @property
    def glyph(self) -> str:
        """A single-character visualization useful for logs/debug."""
        return {
            TileKind.WALL: '#',
            TileKind.EMPTY: '.',
            TileKind.STAIRS_DOWN: '>',
            TileKind.STAIRS_UP: '<',
        }[self]

    @classmethod
    def from_glyph(cls, ch: str) -> "TileKind":
        for kind in cls:
            if kind.glyph == ch:
                return kind
        raise ValueError(f"Unknown tile glyph: {ch!r}")


@dataclass
class Tile:
    """One grid cell: its terrain kind plus whether it has ever been seen."""

    kind: TileKind = TileKind.WALL
    explored: bool = False

    def mark_explored(self) -> None:
        # Monotonic: never reset once set
        self.explored = True
