"""
Dungeon floors for Depths.

Contains the tile grid model, room-and-tunnel floor generation, and flood-fill
helpers used to verify that generated floors are connected.
"""
from .tiles import Tile, TileKind
from .grid import Grid, Point, Rect
from .generator import DungeonGenerator, generate, random_empty_coords

__all__ = [
    "Tile",
    "TileKind",
    "Grid",
    "Point",
    "Rect",
    "DungeonGenerator",
    "generate",
    "random_empty_coords",
]
