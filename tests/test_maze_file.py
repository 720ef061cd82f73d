# tests/test_maze_file.py
import json
from datetime import datetime

import pytest

from app.maze_file import MazeFileManager
from maze.errors import MazeFormatError
from maze.maze_core import Grid


def test_save_and_load(tmp_path, wall_column_grid):
    manager = MazeFileManager(tmp_path / "mazes")
    path = manager.save(wall_column_grid, "demo")

    assert path == tmp_path / "mazes" / "demo.json"
    data = json.loads(path.read_text())
    assert data['metadata']['name'] == "demo"
    assert data['rows'] == 5

    grid = Grid(3, 3)
    manager.load(grid, "demo")
    assert grid.export_data() == wall_column_grid.export_data()


def test_export_name():
    manager = MazeFileManager()
    grid = Grid(5, 7)
    assert manager.export_name(grid, datetime(2024, 3, 1)) == "maze_5x7_2024-03-01"


def test_default_name_and_latest(tmp_path):
    manager = MazeFileManager(tmp_path)
    path = manager.save(Grid(5, 7))

    assert path.stem.startswith("maze_5x7_")
    assert manager.latest() == path.stem
    assert [name for name, _ in manager.list_saves()] == [path.stem]


def test_missing_file(tmp_path):
    manager = MazeFileManager(tmp_path)
    assert manager.latest() is None
    with pytest.raises(MazeFormatError):
        manager.load(Grid(3, 3), "nope")


def test_corrupt_file_leaves_grid_untouched(tmp_path, wall_column_grid):
    (tmp_path / "bad.json").write_text("{not json")
    (tmp_path / "wrong.json").write_text(json.dumps({'rows': 2, 'cols': 2, 'walls': []}))
    manager = MazeFileManager(tmp_path)
    before = wall_column_grid.export_data()

    for name in ("bad", "wrong"):
        with pytest.raises(MazeFormatError):
            manager.load(wall_column_grid, name)
        assert wall_column_grid.export_data() == before

    # Unreadable files are skipped in listings
    assert [name for name, _ in manager.list_saves()] == ["wrong"]


def test_delete(tmp_path):
    manager = MazeFileManager(tmp_path)
    manager.save(Grid(3, 3), "gone")

    assert manager.delete("gone.json")
    assert not manager.delete("gone")
