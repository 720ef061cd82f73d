# tests/test_session.py
import pytest

from app.session import Session, Tool
from maze.maze_core import Grid
from utils.helpers import clamp, pixel_to_cell, format_ms, format_count


def test_speed_is_clamped():
    session = Session(animation_speed=500)
    assert session.animation_speed == 100

    session.set_speed(-3)
    assert session.animation_speed == 1

    session.change_speed(5)
    assert session.animation_speed == 6


@pytest.mark.parametrize("speed, delay", [(100, 0.001), (50, 0.051), (1, 0.1)])
def test_step_delay(speed, delay):
    assert Session(animation_speed=speed).step_delay() == pytest.approx(delay)


def test_tools_edit_the_grid():
    grid = Grid(5, 5)
    session = Session()

    assert session.apply_tool(grid, 0, 0)
    assert grid.cell(0, 0).is_wall

    session.select_tool(Tool.ERASE)
    session.apply_tool(grid, 0, 0)
    assert not grid.cell(0, 0).is_wall

    session.select_tool(Tool.START)
    session.apply_tool(grid, 4, 0)
    assert grid.start_cell.pos == (4, 0)

    session.select_tool(Tool.END)
    session.apply_tool(grid, 0, 4)
    assert grid.end_cell.pos == (0, 4)


def test_edits_refused_while_solving():
    grid = Grid(5, 5)
    session = Session()
    session.start_solving()

    assert not session.can_edit()
    assert not session.apply_tool(grid, 0, 0)
    assert not grid.cell(0, 0).is_wall


def test_out_of_bounds_edit_refused():
    assert not Session().apply_tool(Grid(3, 3), 5, 5)


def test_dark_mode_toggle():
    session = Session()
    session.toggle_dark_mode()
    assert session.dark_mode
    session.toggle_dark_mode()
    assert not session.dark_mode


def test_helpers():
    assert clamp(5, 0, 3) == 3
    assert pixel_to_cell(25, 45, 10, 5, 5) == (4, 2)
    assert pixel_to_cell(25, 55, 10, 5, 5) is None
    assert pixel_to_cell(-1, 0, 10, 5, 5) is None
    assert format_ms(1.5) == "1.50 ms"
    assert format_count(12345) == "12,345"
