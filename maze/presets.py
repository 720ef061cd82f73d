"""
Grid size presets for MazeViz
Odd sizes keep a solid border around generated mazes
"""

from utils.constants import WINDOW_SIZE, MIN_CELL_SIZE, PANEL_H, DEFAULT_ROWS, DEFAULT_COLS, SPEED_DEFAULT


class GridPreset:
    """Configuration for a single grid size"""
    def __init__(self, **kwargs):
        self.name = kwargs.get('name', 'custom')

        # Grid dimensions
        self.rows = kwargs.get('rows', DEFAULT_ROWS)
        self.cols = kwargs.get('cols', DEFAULT_COLS)

        # Algorithms selected when the preset is loaded
        self.generator = kwargs.get('generator', 'dfs')
        self.solver = kwargs.get('solver', 'bfs')

        # Animation speed (1-100)
        self.speed = kwargs.get('speed', SPEED_DEFAULT)

    def __repr__(self):
        return f"GridPreset({self.name}, {self.rows}x{self.cols})"


# ========== PRESET DEFINITIONS ==========

PRESET_SMALL = GridPreset(
    name='small',
    rows=15,
    cols=15,
    generator='dfs',
    solver='bfs',
    speed=40,
)

PRESET_MEDIUM = GridPreset(
    name='medium',
    rows=25,
    cols=25,
    generator='prim',
    solver='astar',
    speed=50,
)

PRESET_LARGE = GridPreset(
    name='large',
    rows=41,
    cols=41,
    generator='kruskal',
    solver='astar',
    speed=80,
)

PRESET_HUGE = GridPreset(
    name='huge',
    rows=71,
    cols=71,
    generator='backtracking',
    solver='dijkstra',
    speed=100,
)

PRESETS = {
    preset.name: preset
    for preset in (PRESET_SMALL, PRESET_MEDIUM, PRESET_LARGE, PRESET_HUGE)
}

PRESET_ORDER = ['small', 'medium', 'large', 'huge']


def get_preset(name):
    """
    Get a preset by name

    Args:
        name: 'small', 'medium', 'large' or 'huge'

    Returns:
        GridPreset object (medium for unknown names)
    """
    return PRESETS.get(name, PRESET_MEDIUM)


def next_preset(name):
    """Name of the preset after `name`, wrapping around"""
    if name not in PRESET_ORDER:
        return PRESET_ORDER[0]
    return PRESET_ORDER[(PRESET_ORDER.index(name) + 1) % len(PRESET_ORDER)]


def get_cell_size(rows, cols):
    """Pixel size of one cell so the grid fits the maze area"""
    return max(MIN_CELL_SIZE, WINDOW_SIZE // max(rows, cols))


def get_screen_size(rows, cols):
    """
    Calculate screen size needed for a grid

    Returns:
        (width, height) tuple in pixels
    """
    cell = get_cell_size(rows, cols)
    return cols * cell, rows * cell + PANEL_H
