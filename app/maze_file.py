"""
Maze files - saves and loads mazes as JSON
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from maze.errors import MazeFormatError
from utils.constants import SAVE_DIR, APP_VERSION

logger = logging.getLogger(__name__)


class MazeFileManager:
    """
    Manages maze export/import files in one directory
    """
    def __init__(self, save_dir=SAVE_DIR):
        """
        Args:
            save_dir: Directory to store maze files
        """
        self.save_dir = Path(save_dir)
        self.last_name = None

    def path_for(self, name):
        if name.endswith('.json'):
            name = name[:-5]
        return self.save_dir / f"{name}.json"

    def export_name(self, grid, today=None):
        """File name in the form maze_<rows>x<cols>_<YYYY-MM-DD>"""
        today = today or datetime.now()
        return f"maze_{grid.rows}x{grid.cols}_{today.strftime('%Y-%m-%d')}"

    def save(self, grid, name=None):
        """
        Write the grid's walls and endpoints to a JSON file

        Args:
            grid: Grid to export
            name: File name without extension (defaults to export_name)

        Returns:
            Path: Written file
        """
        name = name or self.export_name(grid)
        data = grid.export_data()
        data['metadata'] = {
            'name': name,
            'timestamp': datetime.now().isoformat(),
            'version': APP_VERSION,
        }

        self.save_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(name)
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

        self.last_name = name
        logger.info("Saved %dx%d maze to %s", grid.rows, grid.cols, path)
        return path

    def load(self, grid, name):
        """
        Replace the grid with the contents of a maze file

        The grid is left untouched when the file is missing or invalid.

        Raises:
            MazeFormatError: file missing, not JSON, or not a valid maze
        """
        path = self.path_for(name)
        if not path.exists():
            raise MazeFormatError(f"Maze file not found: {path}")

        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise MazeFormatError(f"Could not read {path}: {e}") from e

        grid.import_data(data)
        self.last_name = path.stem
        logger.info("Loaded %dx%d maze from %s", grid.rows, grid.cols, path)
        return path

    def list_saves(self):
        """
        Get list of available maze files

        Returns:
            list: (name, metadata) tuples sorted by name
        """
        saves = []
        if not self.save_dir.exists():
            return saves

        for maze_file in sorted(self.save_dir.glob("*.json")):
            try:
                with open(maze_file, 'r') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Skipping unreadable maze file %s: %s", maze_file, e)
                continue
            metadata = data.get('metadata', {}) if isinstance(data, dict) else {}
            saves.append((maze_file.stem, metadata))

        return saves

    def latest(self):
        """Name of the most recently written maze file, or None"""
        if not self.save_dir.exists():
            return None
        files = sorted(self.save_dir.glob("*.json"), key=lambda p: p.stat().st_mtime)
        return files[-1].stem if files else None

    def delete(self, name):
        """
        Delete a maze file

        Returns:
            bool: True if a file was removed
        """
        path = self.path_for(name)
        if path.exists():
            path.unlink()
            logger.info("Deleted maze file %s", path)
            return True
        return False
