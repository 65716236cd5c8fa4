from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from .config import build_settings, parse_args
from .dungeon.connectivity import connected_components
from .dungeon.grid import Point
from .world.dungeon import Dungeon

logger = logging.getLogger(__name__)


def render_lines(dungeon: Dungeon, occupant: Optional[Point] = None, lit_only: bool = False) -> List[str]:
    """Debug dump of the active floor; with lit_only, unexplored tiles print as blanks."""
    level = dungeon.level
    lines = []
    for y in range(level.height):
        row = []
        for x in range(level.width):
            if occupant is not None and (occupant.x, occupant.y) == (x, y):
                row.append('@')
            elif lit_only and not level.explored(x, y):
                row.append(' ')
            else:
                row.append(level.at(x, y).glyph)
        lines.append(''.join(row))
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    settings = build_settings(args)
    dungeon = Dungeon(settings=settings)
    pos = dungeon.spawn_point()
    while dungeon.depth < args.depth:
        # Walk straight onto the stairs; generation guarantees they are reachable
        transition = dungeon.descend(dungeon.level.stairs_down)
        pos = transition.position
    if args.fov:
        dungeon.refresh_visibility(pos)

    logger.info(
        "Depth %d: %d passable region(s), seed=%s",
        dungeon.depth,
        len(connected_components(dungeon.level.grid)),
        dungeon.master_seed,
    )
    print("\n".join(render_lines(dungeon, pos, lit_only=args.fov)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
