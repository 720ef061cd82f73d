"""
Helper utility functions for MazeViz
"""

import random


def clamp(value, min_value, max_value):
    """Clamp a value between min and max"""
    return max(min_value, min(value, max_value))


def make_rng(seed=None):
    """Independent random generator; seeded ones are reproducible"""
    return random.Random(seed)


def format_ms(ms):
    """Format milliseconds as '12.34 ms'"""
    return f"{ms:.2f} ms"


def format_count(value):
    """Format count with thousands separator"""
    return f"{value:,}"


def pixel_to_cell(x, y, cell_size, rows, cols):
    """
    Map a pixel position in the maze area to (row, col)

    Returns:
        (row, col) tuple, or None if outside the grid
    """
    if x < 0 or y < 0 or cell_size <= 0:
        return None
    row = y // cell_size
    col = x // cell_size
    if row < rows and col < cols:
        return int(row), int(col)
    return None
