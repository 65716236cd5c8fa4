import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from depths.dungeon.grid import Grid  # noqa: E402


class ScriptedRng:
    """RandomSource stand-in that replays a fixed list of values and checks each is in range."""

    def __init__(self, values):
        self._values = list(values)

    def int_in_range(self, lo: int, hi: int) -> int:
        assert self._values, f"ScriptedRng exhausted (asked for [{lo}, {hi}))"
        v = self._values.pop(0)
        assert lo <= v < hi, f"scripted value {v} outside [{lo}, {hi})"
        return v


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def boxed_grid() -> Grid:
    return Grid.from_ascii([
        "#####",
        "#.#.#",
        "#####",
    ])


@pytest.fixture
def split_room_grid() -> Grid:
    # Two rooms separated by a solid wall column at x=4
    return Grid.from_ascii([
        "#########",
        "#...#...#",
        "#...#...#",
        "#...#...#",
        "#########",
    ])


@pytest.fixture
def open_grid() -> Grid:
    return Grid.from_ascii(["." * 21 for _ in range(21)])
