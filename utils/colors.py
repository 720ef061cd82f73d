"""
Color palettes for MazeViz
Cell colors are indexed by the display codes in utils.constants
"""

from utils.constants import (
    CODE_EMPTY, CODE_WALL, CODE_START, CODE_END,
    CODE_VISITED, CODE_FRONTIER, CODE_PATH
)

# Light theme
LIGHT_CELL_COLORS = {
    CODE_EMPTY: (255, 255, 255),
    CODE_WALL: (51, 51, 51),
    CODE_START: (76, 175, 80),
    CODE_END: (244, 67, 54),
    CODE_VISITED: (187, 222, 251),
    CODE_FRONTIER: (144, 202, 249),
    CODE_PATH: (255, 235, 59),
}
LIGHT_GRID_LINE = (221, 221, 221)
LIGHT_PANEL_BG = (240, 240, 240)
LIGHT_TEXT = (40, 40, 40)
LIGHT_TEXT_DIM = (120, 120, 120)

# Dark theme
DARK_CELL_COLORS = {
    CODE_EMPTY: (30, 32, 40),
    CODE_WALL: (200, 200, 200),
    CODE_START: (60, 200, 120),
    CODE_END: (255, 90, 90),
    CODE_VISITED: (40, 70, 110),
    CODE_FRONTIER: (70, 120, 180),
    CODE_PATH: (255, 215, 0),
}
DARK_GRID_LINE = (45, 48, 58)
DARK_PANEL_BG = (12, 14, 18)
DARK_TEXT = (210, 210, 210)
DARK_TEXT_DIM = (150, 150, 150)

COLOR_STATUS_ERROR = (230, 80, 80)
COLOR_STATUS_INFO = (90, 170, 255)


def get_theme(dark_mode):
    """
    Colors for the current theme

    Returns:
        dict with 'cells', 'grid_line', 'panel_bg', 'text', 'text_dim'
    """
    if dark_mode:
        return {
            'cells': DARK_CELL_COLORS,
            'grid_line': DARK_GRID_LINE,
            'panel_bg': DARK_PANEL_BG,
            'text': DARK_TEXT,
            'text_dim': DARK_TEXT_DIM,
        }
    return {
        'cells': LIGHT_CELL_COLORS,
        'grid_line': LIGHT_GRID_LINE,
        'panel_bg': LIGHT_PANEL_BG,
        'text': LIGHT_TEXT,
        'text_dim': LIGHT_TEXT_DIM,
    }
