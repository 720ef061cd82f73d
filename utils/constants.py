"""
Global constants for MazeViz
"""

APP_TITLE = "MazeViz"
APP_VERSION = "1.0.0"

# Screen settings
WINDOW_SIZE = 720         # Maze area is square, grid is fitted inside
MIN_CELL_SIZE = 4
FPS = 60
GRID_LINE_THICK = 1

# Stats/status panel height
PANEL_H = 90

# Default grid size (odd so the outer border stays solid after generation)
DEFAULT_ROWS = 25
DEFAULT_COLS = 25

# Display codes (Grid.as_array)
CODE_EMPTY = 0
CODE_WALL = 1
CODE_START = 2
CODE_END = 3
CODE_VISITED = 4
CODE_FRONTIER = 5
CODE_PATH = 6

# Orthogonal neighbour order: up, down, left, right
ORTHOGONAL_DIRS = [
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
]

# Diagonals, appended after the orthogonal ones
DIAGONAL_DIRS = [
    (-1, -1),
    (-1, 1),
    (1, -1),
    (1, 1),
]

# Two-cell strides used by the generators (passage cell -> passage cell)
CARVE_DIRS = [(dr * 2, dc * 2) for dr, dc in ORTHOGONAL_DIRS]

# Wall follower headings, clockwise so that (heading + 1) % 4 is a right turn
HEADING_UP = 0
HEADING_RIGHT = 1
HEADING_DOWN = 2
HEADING_LEFT = 3

HEADING_DELTAS = {
    HEADING_UP: (-1, 0),
    HEADING_RIGHT: (0, 1),
    HEADING_DOWN: (1, 0),
    HEADING_LEFT: (0, -1),
}

# Probability of opening each neighbour of start/end after generation
ENDPOINT_OPEN_CHANCE = 0.7

# Animation speed slider (higher = faster)
SPEED_MIN = 1
SPEED_MAX = 100
SPEED_DEFAULT = 50
SPEED_STEP = 5

# Save files
SAVE_DIR = "saves"
