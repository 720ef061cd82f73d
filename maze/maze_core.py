"""
Core maze model - cells, grid state, neighbour queries and serialization
"""

import math
from collections import deque
from enum import Enum, auto

import numpy as np

from maze.errors import MazeFormatError, PathReconstructionError
from utils.constants import (
    ORTHOGONAL_DIRS, DIAGONAL_DIRS,
    CODE_EMPTY, CODE_WALL, CODE_START, CODE_END,
    CODE_VISITED, CODE_FRONTIER, CODE_PATH
)


class CellRole(Enum):
    """Special role a cell can hold"""
    NONE = auto()
    START = auto()
    END = auto()


class Cell:
    """
    Single grid cell.

    `parent` is the flat index of the previous cell on a search tree,
    never a reference to another Cell.
    """
    def __init__(self, row, col):
        self.row = row
        self.col = col
        self.is_wall = False
        self.role = CellRole.NONE
        self.reset_search()

    def reset_search(self):
        """Clear all solve-pass state"""
        self.visited = False
        self.frontier = False
        self.in_path = False
        self.distance = math.inf
        self.f_score = math.inf
        self.parent = None

    @property
    def g_score(self):
        """A* name for the accumulated distance"""
        return self.distance

    @g_score.setter
    def g_score(self, value):
        self.distance = value

    @property
    def is_start(self):
        return self.role is CellRole.START

    @property
    def is_end(self):
        return self.role is CellRole.END

    @property
    def pos(self):
        return (self.row, self.col)

    def __repr__(self):
        return f"Cell({self.row}, {self.col})"


class Grid:
    """
    Rows x cols maze grid.

    Cells live in a flat list indexed by row * cols + col. Start and end
    are kept as indices into that list and re-pointed whenever the grid
    is rebuilt.
    """
    def __init__(self, rows, cols):
        self.rows = 0
        self.cols = 0
        self.cells = []
        self.start_index = None
        self.end_index = None
        self.initialize(rows, cols)

    # ========== LIFECYCLE ==========

    def initialize(self, rows, cols):
        """
        Allocate an empty grid with default start and end cells

        Args:
            rows: Number of rows
            cols: Number of columns
        """
        if rows < 1 or cols < 1 or rows * cols < 2:
            raise ValueError(f"Grid must have at least two cells, got {rows}x{cols}")

        self.rows = rows
        self.cols = cols
        self.cells = [Cell(r, c) for r in range(rows) for c in range(cols)]
        self.start_index = None
        self.end_index = None

        # Offset by one from the border so generators keep a solid frame
        start = (min(1, rows - 1), min(1, cols - 1))
        end = (max(rows - 2, 0), max(cols - 2, 0))
        if end == start:
            end = (rows - 1, cols - 1)
        if end == start:
            end = (0, 0)

        self.set_start(*start)
        self.set_end(*end)

    def reset_visited(self):
        """Clear visited/frontier/path/cost fields, keeping walls and roles"""
        for cell in self.cells:
            cell.reset_search()

    def clear(self):
        """Full wipe: no walls, no start/end, no solve state"""
        for cell in self.cells:
            cell.is_wall = False
            cell.role = CellRole.NONE
            cell.reset_search()
        self.start_index = None
        self.end_index = None

    def reset(self):
        """Keep walls, drop start/end and all solve state"""
        for cell in self.cells:
            cell.role = CellRole.NONE
            cell.reset_search()
        self.start_index = None
        self.end_index = None

    # ========== ACCESS ==========

    def index(self, row, col):
        """Convert 2D coordinates to flat index"""
        return row * self.cols + col

    def in_bounds(self, row, col):
        """Check if coordinates are within grid bounds"""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row, col):
        """
        Get cell at (row, col)

        Raises:
            IndexError: coordinates outside the grid
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} grid")
        return self.cells[row * self.cols + col]

    @property
    def start_cell(self):
        if self.start_index is None:
            return None
        return self.cells[self.start_index]

    @property
    def end_cell(self):
        if self.end_index is None:
            return None
        return self.cells[self.end_index]

    def get_neighbors(self, row, col, include_diagonals=False):
        """
        Get in-bounds neighbours in a fixed order

        Order is up, down, left, right, then the diagonals (up-left,
        up-right, down-left, down-right) when requested.
        """
        dirs = ORTHOGONAL_DIRS + DIAGONAL_DIRS if include_diagonals else ORTHOGONAL_DIRS
        res = []
        for dr, dc in dirs:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                res.append(self.cells[nr * self.cols + nc])
        return res

    def open_neighbors(self, cell):
        """Non-wall orthogonal neighbours of a cell"""
        return [n for n in self.get_neighbors(cell.row, cell.col) if not n.is_wall]

    def passage_count(self):
        """Number of non-wall cells"""
        return sum(1 for cell in self.cells if not cell.is_wall)

    # ========== MUTATION ==========

    def set_wall(self, row, col, is_wall):
        """Set or remove a wall; ignored on start/end cells"""
        cell = self.cell(row, col)
        if cell.role is not CellRole.NONE:
            return
        cell.is_wall = is_wall

    def set_start(self, row, col):
        """Move the start role to (row, col) unless it is a wall or the end"""
        self._assign_role(row, col, CellRole.START)

    def set_end(self, row, col):
        """Move the end role to (row, col) unless it is a wall or the start"""
        self._assign_role(row, col, CellRole.END)

    def _assign_role(self, row, col, role):
        cell = self.cell(row, col)
        if cell.is_wall:
            return
        if cell.role is not CellRole.NONE and cell.role is not role:
            return

        attr = 'start_index' if role is CellRole.START else 'end_index'
        previous = getattr(self, attr)
        if previous is not None:
            self.cells[previous].role = CellRole.NONE

        cell.role = role
        setattr(self, attr, self.index(row, col))

    def mark_visited(self, cell):
        cell.visited = True
        cell.frontier = False

    def mark_frontier(self, cell):
        if not cell.visited:
            cell.frontier = True

    def mark_path(self, path):
        for cell in path:
            cell.in_path = True

    # ========== QUERIES ==========

    def has_start_and_end(self):
        """Check that both start and end are set"""
        return self.start_index is not None and self.end_index is not None

    def has_valid_path(self):
        """
        BFS over non-wall cells from start

        Uses a private visited set so no visible solve state changes.

        Returns:
            bool: True if end is reachable from start
        """
        if not self.has_start_and_end():
            return False

        seen = {self.start_index}
        q = deque([self.start_cell])

        while q:
            cur = q.popleft()
            if cur.is_end:
                return True
            for n in self.open_neighbors(cur):
                idx = self.index(n.row, n.col)
                if idx not in seen:
                    seen.add(idx)
                    q.append(n)
        return False

    def as_array(self):
        """
        Display codes as a (rows, cols) int8 matrix

        Precedence matches what is drawn: wall, start, end, path,
        visited, frontier, empty.
        """
        codes = np.full((self.rows, self.cols), CODE_EMPTY, dtype=np.int8)
        for cell in self.cells:
            if cell.is_wall:
                code = CODE_WALL
            elif cell.is_start:
                code = CODE_START
            elif cell.is_end:
                code = CODE_END
            elif cell.in_path:
                code = CODE_PATH
            elif cell.visited:
                code = CODE_VISITED
            elif cell.frontier:
                code = CODE_FRONTIER
            else:
                continue
            codes[cell.row, cell.col] = code
        return codes

    # ========== SERIALIZATION ==========

    def export_data(self):
        """
        Sparse representation of walls and endpoints

        Returns:
            dict: {'rows', 'cols', 'walls': [[r, c], ...], 'start', 'end'}
        """
        start = self.start_cell
        end = self.end_cell
        return {
            'rows': self.rows,
            'cols': self.cols,
            'walls': [[c.row, c.col] for c in self.cells if c.is_wall],
            'start': [start.row, start.col] if start else None,
            'end': [end.row, end.col] if end else None,
        }

    def import_data(self, data):
        """
        Replace the grid with imported data

        Everything is validated before the grid is touched, so a bad
        import leaves the current maze unchanged.

        Args:
            data: dict in export_data() form, or with 'size' for square grids

        Raises:
            MazeFormatError: missing fields or out-of-range coordinates
        """
        rows, cols, walls, start, end = _validate_maze_data(data)

        self.initialize(rows, cols)
        self.reset()
        for r, c in walls:
            self.set_wall(r, c, True)
        self.set_start(*start)
        self.set_end(*end)

    def __repr__(self):
        return f"Grid({self.rows}x{self.cols}, start={self.start_cell}, end={self.end_cell})"


def _validate_maze_data(data):
    """Check imported data and return (rows, cols, walls, start, end)"""
    if not isinstance(data, dict):
        raise MazeFormatError("Maze data must be an object")

    if 'rows' in data or 'cols' in data:
        rows = data.get('rows')
        cols = data.get('cols')
    else:
        rows = cols = data.get('size')

    for name, value in (('rows', rows), ('cols', cols)):
        if not _is_int(value) or value < 1:
            raise MazeFormatError(f"Missing or invalid '{name}'")
    if rows * cols < 2:
        raise MazeFormatError("Maze must have at least two cells")

    raw_walls = data.get('walls')
    if not isinstance(raw_walls, list):
        raise MazeFormatError("Missing or invalid 'walls'")
    walls = [_coord(w, rows, cols, 'walls') for w in raw_walls]

    if data.get('start') is None or data.get('end') is None:
        raise MazeFormatError("Both 'start' and 'end' are required")
    start = _coord(data['start'], rows, cols, 'start')
    end = _coord(data['end'], rows, cols, 'end')

    if start == end:
        raise MazeFormatError("'start' and 'end' must be different cells")
    wall_set = set(walls)
    if start in wall_set or end in wall_set:
        raise MazeFormatError("'start' and 'end' cannot be walls")

    return rows, cols, walls, start, end


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _coord(value, rows, cols, field):
    if (not isinstance(value, (list, tuple)) or len(value) != 2
            or not all(_is_int(v) for v in value)):
        raise MazeFormatError(f"Invalid coordinate in '{field}': {value!r}")
    r, c = value
    if not (0 <= r < rows and 0 <= c < cols):
        raise MazeFormatError(f"Coordinate out of bounds in '{field}': {value!r}")
    return (r, c)


# ========== PATHFINDING HELPERS ==========

def manhattan(a, b):
    """Manhattan distance heuristic"""
    return abs(a.row - b.row) + abs(a.col - b.col)


def reconstruct_path(grid, goal_index):
    """
    Walk parent links from goal back to start

    Args:
        grid: Grid whose cells carry parent indices
        goal_index: Flat index of the goal cell

    Returns:
        list: Cells from start to goal inclusive, or None if goal was
        never reached

    Raises:
        PathReconstructionError: parent links loop or never reach start
    """
    start_index = grid.start_index
    if goal_index != start_index and grid.cells[goal_index].parent is None:
        return None

    path = []
    cur = goal_index
    limit = grid.rows * grid.cols
    while cur is not None:
        path.append(grid.cells[cur])
        if cur == start_index:
            break
        if len(path) > limit:
            raise PathReconstructionError("Parent links form a cycle")
        cur = grid.cells[cur].parent

    if path[-1].row * grid.cols + path[-1].col != start_index:
        raise PathReconstructionError("Parent links do not reach the start cell")

    path.reverse()
    return path
