import pytest

from depths.dungeon.grid import Grid, Point
from depths.world.movement import Direction, can_move, destination, try_move

CARDINALS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def test_direction_deltas_grow_y_downwards():
    assert Direction.UP.delta == (0, -1)
    assert Direction.DOWN.delta == (0, 1)
    assert Direction.LEFT.delta == (-1, 0)
    assert Direction.RIGHT.delta == (1, 0)
    assert destination(Point(2, 2), Direction.NONE) == Point(2, 2)


def test_boxed_in_position_cannot_move(boxed_grid):
    for pos in (Point(1, 1), Point(3, 1)):
        for d in CARDINALS:
            assert can_move(boxed_grid, pos, d) is False


def test_illegal_move_keeps_position(boxed_grid):
    result = try_move(boxed_grid, Point(1, 1), Direction.RIGHT)
    assert result.moved is False
    assert result.new_pos == Point(1, 1)


def test_legal_move_updates_position():
    grid = Grid.from_ascii([
        "#####",
        "#..>#",
        "#####",
    ])
    result = try_move(grid, Point(1, 1), Direction.RIGHT)
    assert result.moved
    assert result.new_pos == Point(2, 1)
    # Stairs are walkable
    assert can_move(grid, Point(2, 1), Direction.RIGHT)


@pytest.mark.parametrize(
    "pos, direction",
    [
        (Point(0, 0), Direction.LEFT),
        (Point(0, 0), Direction.UP),
        (Point(2, 1), Direction.RIGHT),
        (Point(2, 1), Direction.DOWN),
    ],
)
def test_edges_are_never_read_out_of_bounds(pos, direction):
    grid = Grid.from_ascii(["...", "..."])
    result = try_move(grid, pos, direction)
    assert not result.moved
    assert result.new_pos == pos
