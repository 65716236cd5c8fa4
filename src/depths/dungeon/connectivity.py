from collections import deque
from typing import List, Optional, Set

from .grid import Grid, Point


def flood_fill(grid: Grid, start: Point) -> Set[Point]:
    """Return every passable tile 4-connected to start (empty set if start is a wall)."""
    if not grid.is_passable(start.x, start.y):
        return set()
    seen = {start}
    q = deque([start])
    while q:
        p = q.popleft()
        for n in grid.neighbors4(p.x, p.y):
            if n not in seen and grid.is_passable(n.x, n.y):
                seen.add(n)
                q.append(n)
    return seen


def connected_components(grid: Grid) -> List[Set[Point]]:
    """All 4-connected regions of passable tiles, largest first."""
    visited: Set[Point] = set()
    components: List[Set[Point]] = []
    for p in grid.passable_points():
        if p in visited:
            continue
        comp = flood_fill(grid, p)
        visited |= comp
        components.append(comp)
    components.sort(key=len, reverse=True)
    return components


def path_length(grid: Grid, start: Point, goal: Point) -> Optional[int]:
    """Breadth-first search shortest path length over passable tiles; None if unreachable.

    Uses 4-directional movement.
    """
    if not grid.is_passable(start.x, start.y) or not grid.is_passable(goal.x, goal.y):
        return None
    q = deque([(start, 0)])
    seen = {start}
    while q:
        p, d = q.popleft()
        if p == goal:
            return d
        for n in grid.neighbors4(p.x, p.y):
            if n not in seen and grid.is_passable(n.x, n.y):
                seen.add(n)
                q.append((n, d + 1))
    return None
