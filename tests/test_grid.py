import pytest

from depths.dungeon.grid import Grid, Point, Rect
from depths.dungeon.tiles import Tile, TileKind
from depths.exceptions import DepthsError, TileOutOfBounds


def test_new_grid_is_all_walls_and_unexplored():
    grid = Grid(4, 3)
    assert grid.count(TileKind.WALL) == 12
    assert not any(grid.explored(x, y) for x in range(4) for y in range(3))


def test_bounds_are_half_open():
    grid = Grid(4, 3)
    assert grid.in_bounds(3, 2)
    assert not grid.in_bounds(4, 2)
    assert not grid.in_bounds(3, 3)
    assert not grid.in_bounds(-1, 0)

    # x == width is the classic off-by-one; it must fail fast
    with pytest.raises(TileOutOfBounds):
        grid.at(4, 0)
    with pytest.raises(IndexError):
        grid.at(0, 3)
    with pytest.raises(DepthsError):
        grid.explored(-1, 0)


def test_explored_is_monotonic():
    tile = Tile(TileKind.EMPTY)
    tile.mark_explored()
    tile.mark_explored()
    assert tile.explored is True

    grid = Grid(2, 2)
    grid.mark_explored(1, 1)
    assert grid.explored(1, 1)
    assert not grid.explored(0, 0)


def test_carve_clips_to_grid():
    grid = Grid(5, 5)
    grid.carve(Rect(3, 3, 8, 8))
    assert grid.count(TileKind.EMPTY) == 4
    assert grid.at(4, 4) is TileKind.EMPTY
    assert grid.at(2, 2) is TileKind.WALL


def test_rect_geometry():
    r = Rect(2, 4, 7, 7)
    assert (r.width, r.height) == (5, 3)
    assert r.center() == Point(4, 5)
    assert r.contains(Point(2, 4))
    assert not r.contains(Point(7, 4))
    assert len(list(r.points())) == 15
    assert Rect(-2, -2, 3, 3).clipped(10, 10) == Rect(0, 0, 3, 3)
    assert Rect(12, 0, 15, 3).clipped(10, 10).width == 0


def test_from_ascii_and_dump_agree():
    rows = [
        "#####",
        "#.>.#",
        "#<..#",
        "#####",
    ]
    grid = Grid.from_ascii(rows)
    assert (grid.width, grid.height) == (5, 4)
    assert grid.at(2, 1) is TileKind.STAIRS_DOWN
    assert grid.at(1, 2) is TileKind.STAIRS_UP
    assert grid.to_str_lines() == rows
    assert grid.find(TileKind.STAIRS_DOWN) == [Point(2, 1)]


def test_from_ascii_rejects_bad_input():
    with pytest.raises(ValueError):
        Grid.from_ascii([])
    with pytest.raises(ValueError):
        Grid.from_ascii(["..", "."])
    with pytest.raises(ValueError):
        Grid.from_ascii([".x."])
    with pytest.raises(ValueError):
        Grid(0, 3)


def test_neighbors4_stay_in_bounds():
    grid = Grid(2, 2)
    assert set(grid.neighbors4(0, 0)) == {Point(1, 0), Point(0, 1)}
    assert set(grid.neighbors4(1, 1)) == {Point(1, 0), Point(0, 1)}


def test_snapshot_is_hashable_and_tracks_changes():
    a = Grid.from_ascii(["#.#", "..."])
    b = Grid.from_ascii(["#.#", "..."])
    assert a.snapshot() == b.snapshot()
    assert hash(a.snapshot()) == hash(b.snapshot())
    b.set_kind(0, 0, TileKind.EMPTY)
    assert a.snapshot() != b.snapshot()


def test_only_staircases_are_stairs():
    assert {kind for kind in TileKind if kind.is_stairs} == {TileKind.STAIRS_DOWN, TileKind.STAIRS_UP}
