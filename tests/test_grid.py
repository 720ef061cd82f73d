# tests/test_grid.py
import math

import numpy as np
import pytest

from maze.maze_core import Grid, CellRole, manhattan, reconstruct_path
from maze.errors import PathReconstructionError
from utils.constants import CODE_WALL, CODE_START, CODE_END, CODE_PATH, CODE_EMPTY

from conftest import build_grid


def test_initialize_sets_default_endpoints():
    grid = Grid(7, 9)

    assert len(grid.cells) == 63
    assert grid.start_cell.pos == (1, 1)
    assert grid.end_cell.pos == (5, 7)
    assert grid.start_cell.role is CellRole.START
    assert grid.end_cell.role is CellRole.END
    assert not any(c.is_wall for c in grid.cells)


def test_initialize_rejects_single_cell():
    with pytest.raises(ValueError):
        Grid(1, 1)


def test_tiny_grid_still_gets_distinct_endpoints():
    grid = Grid(1, 2)
    assert grid.start_cell.pos != grid.end_cell.pos


def test_set_start_moves_role():
    grid = Grid(5, 5)
    old = grid.start_cell

    grid.set_start(2, 2)

    assert grid.start_cell.pos == (2, 2)
    assert old.role is CellRole.NONE
    assert sum(1 for c in grid.cells if c.is_start) == 1


def test_wall_cannot_become_start_or_end():
    grid = Grid(5, 5)
    grid.set_wall(2, 2, True)

    grid.set_start(2, 2)
    grid.set_end(2, 2)

    assert grid.start_cell.pos == (1, 1)
    assert grid.end_cell.pos == (3, 3)


def test_endpoint_cannot_become_wall():
    grid = Grid(5, 5)
    grid.set_wall(1, 1, True)
    grid.set_wall(3, 3, True)

    assert not grid.cell(1, 1).is_wall
    assert not grid.cell(3, 3).is_wall


def test_start_cannot_take_end_cell():
    grid = Grid(5, 5)
    grid.set_start(3, 3)

    assert grid.start_cell.pos == (1, 1)
    assert grid.end_cell.pos == (3, 3)


def test_neighbor_order_up_down_left_right():
    grid = Grid(3, 3)
    got = [c.pos for c in grid.get_neighbors(1, 1)]
    assert got == [(0, 1), (2, 1), (1, 0), (1, 2)]


def test_neighbors_with_diagonals():
    grid = Grid(3, 3)
    got = [c.pos for c in grid.get_neighbors(1, 1, include_diagonals=True)]
    assert got[:4] == [(0, 1), (2, 1), (1, 0), (1, 2)]
    assert sorted(got[4:]) == [(0, 0), (0, 2), (2, 0), (2, 2)]


def test_corner_neighbors_stay_in_bounds():
    grid = Grid(3, 3)
    assert [c.pos for c in grid.get_neighbors(0, 0)] == [(1, 0), (0, 1)]


def _assert_search_state_clear(grid):
    for c in grid.cells:
        assert not c.visited
        assert not c.frontier
        assert not c.in_path
        assert c.distance == math.inf
        assert c.f_score == math.inf
        assert c.parent is None


def test_reset_visited_is_idempotent():
    grid = build_grid(4, 4, walls=[(2, 2)])
    for i, cell in enumerate(grid.cells):
        cell.visited = True
        cell.frontier = True
        cell.in_path = True
        cell.distance = i
        cell.f_score = i + 1
        cell.parent = 0

    grid.reset_visited()
    first = grid.export_data()
    _assert_search_state_clear(grid)

    grid.reset_visited()
    _assert_search_state_clear(grid)
    assert grid.export_data() == first
    assert grid.cell(2, 2).is_wall


def test_out_of_range_coordinates_raise():
    grid = Grid(5, 5)

    with pytest.raises(IndexError):
        grid.set_wall(-1, 0, True)
    with pytest.raises(IndexError):
        grid.set_wall(0, 5, True)
    with pytest.raises(IndexError):
        grid.set_start(5, 0)
    with pytest.raises(IndexError):
        grid.set_end(0, -1)

    # Nothing wrapped around onto another cell
    assert not grid.cell(4, 0).is_wall
    assert not grid.cell(1, 0).is_wall
    assert grid.start_cell.pos == (1, 1)
    assert grid.end_cell.pos == (3, 3)


def test_clear_wipes_everything():
    grid = build_grid(4, 4, walls=[(0, 0), (2, 2)])
    grid.clear()

    assert grid.start_cell is None
    assert grid.end_cell is None
    assert not any(c.is_wall for c in grid.cells)


def test_reset_keeps_walls_but_drops_endpoints():
    grid = build_grid(4, 4, walls=[(0, 0), (2, 2)])
    grid.reset()

    assert grid.start_cell is None
    assert grid.end_cell is None
    assert grid.cell(0, 0).is_wall
    assert grid.cell(2, 2).is_wall


def test_has_valid_path(wall_column_grid):
    assert wall_column_grid.has_valid_path()

    wall_column_grid.set_wall(4, 2, True)
    assert not wall_column_grid.has_valid_path()


def test_has_valid_path_leaves_no_trace(wall_column_grid):
    wall_column_grid.has_valid_path()
    assert not any(c.visited or c.frontier or c.parent is not None
                   for c in wall_column_grid.cells)


def test_has_valid_path_false_without_endpoints():
    grid = Grid(3, 3)
    grid.reset()
    assert not grid.has_valid_path()


def test_as_array_codes(wall_column_grid):
    wall_column_grid.cell(4, 4).in_path = True
    codes = wall_column_grid.as_array()

    assert codes.shape == (5, 5)
    assert codes.dtype == np.int8
    assert codes[0, 2] == CODE_WALL
    assert codes[0, 0] == CODE_START
    assert codes[0, 4] == CODE_END
    assert codes[4, 4] == CODE_PATH
    assert codes[2, 0] == CODE_EMPTY


def test_manhattan():
    grid = Grid(5, 5)
    assert manhattan(grid.cell(0, 0), grid.cell(3, 4)) == 7


def test_reconstruct_path_unreached_goal():
    grid = Grid(3, 3)
    assert reconstruct_path(grid, grid.end_index) is None


def test_reconstruct_path_detects_cycle():
    grid = Grid(3, 3)
    a = grid.index(0, 1)
    b = grid.index(0, 2)
    grid.cells[a].parent = b
    grid.cells[b].parent = a

    with pytest.raises(PathReconstructionError):
        reconstruct_path(grid, a)
