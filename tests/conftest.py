# tests/conftest.py
import pytest

from maze.maze_core import Grid


def build_grid(rows, cols, walls=(), start=None, end=None):
    """Grid with the given walls; start/end default to the grid's own defaults."""
    grid = Grid(rows, cols)
    if start is not None:
        grid.set_start(*start)
    if end is not None:
        grid.set_end(*end)
    for r, c in walls:
        grid.set_wall(r, c, True)
    return grid


@pytest.fixture
def wall_column_grid():
    """
    5x5 grid with a wall down column 2 on rows 0-3, start top-left and
    end top-right. The only route goes around the bottom of the wall.
    """
    return build_grid(
        5, 5,
        walls=[(0, 2), (1, 2), (2, 2), (3, 2)],
        start=(0, 0),
        end=(0, 4),
    )
