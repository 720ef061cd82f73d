"""
Grid renderer - draws the maze, solve state and the stats panel with pygame
"""

import numpy as np
import pygame
import pygame.surfarray

from utils.colors import get_theme, COLOR_STATUS_ERROR, COLOR_STATUS_INFO
from utils.constants import GRID_LINE_THICK, PANEL_H, CODE_PATH
from utils.helpers import format_count, format_ms


def build_palette(cell_colors):
    """
    Lookup table from display code to RGB

    Returns:
        numpy array (num_codes, 3) uint8
    """
    size = max(cell_colors) + 1
    palette = np.zeros((size, 3), dtype=np.uint8)
    for code, rgb in cell_colors.items():
        palette[code] = rgb
    return palette


def build_color_buffer(codes, palette):
    """
    Map a (rows, cols) code matrix to a surfarray-ready buffer

    Returns:
        numpy array (cols, rows, 3) uint8 - x first, as pygame expects
    """
    rgb = palette[codes]
    return np.ascontiguousarray(rgb.transpose(1, 0, 2))


class GridRenderer:
    """
    Draws a Grid into the maze area and the stats panel below it
    """
    def __init__(self, cell_size):
        self.cell_size = cell_size
        self.font_small = None
        self.font_medium = None
        self._palettes = {}
        self._init_fonts()

    def _init_fonts(self):
        """Initialize fonts"""
        pygame.font.init()
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.font_medium = pygame.font.SysFont("consolas", 18)

    def _palette(self, dark_mode):
        if dark_mode not in self._palettes:
            self._palettes[dark_mode] = build_palette(get_theme(dark_mode)['cells'])
        return self._palettes[dark_mode]

    def draw_grid(self, screen, grid, dark_mode=False):
        """
        Draw all cells

        Cells are painted one pixel each into a small surface, then
        scaled up, so the cost does not depend on the cell size.
        """
        theme = get_theme(dark_mode)
        buffer = build_color_buffer(grid.as_array(), self._palette(dark_mode))
        small = pygame.surfarray.make_surface(buffer)
        size = (grid.cols * self.cell_size, grid.rows * self.cell_size)
        screen.blit(pygame.transform.scale(small, size), (0, 0))

        if self.cell_size >= 8:
            self._draw_grid_lines(screen, grid, theme['grid_line'])

    def _draw_grid_lines(self, screen, grid, color):
        """Thin lines between cells"""
        w = grid.cols * self.cell_size
        h = grid.rows * self.cell_size
        for r in range(grid.rows + 1):
            y = r * self.cell_size
            pygame.draw.line(screen, color, (0, y), (w, y), GRID_LINE_THICK)
        for c in range(grid.cols + 1):
            x = c * self.cell_size
            pygame.draw.line(screen, color, (x, 0), (x, h), GRID_LINE_THICK)

    def draw_path_line(self, screen, path, dark_mode=False):
        """Connect path cell centres so the route reads at small cell sizes"""
        if not path or len(path) < 2:
            return
        color = get_theme(dark_mode)['cells'][CODE_PATH]
        half = self.cell_size // 2
        points = [(c.col * self.cell_size + half, c.row * self.cell_size + half) for c in path]
        pygame.draw.lines(screen, color, False, points, max(1, self.cell_size // 4))

    def draw_panel(self, screen, panel_y, screen_w, info, dark_mode=False):
        """
        Draw stats/status panel

        Args:
            screen: Pygame screen
            panel_y: Y position of panel
            screen_w: Screen width
            info: dict with 'generator', 'solver', 'tool', 'speed',
                  'visited', 'path_length', 'elapsed_ms', 'status',
                  'status_error', 'solving'
            dark_mode: Theme flag
        """
        theme = get_theme(dark_mode)
        pygame.draw.rect(screen, theme['panel_bg'], (0, panel_y, screen_w, PANEL_H))

        # Selections (left column)
        lines = [
            f"Generator: {info['generator']}",
            f"Solver:    {info['solver']}",
            f"Tool: {info['tool']}   Speed: {info['speed']}",
        ]
        for i, line in enumerate(lines):
            text = self.font_small.render(line, True, theme['text'])
            screen.blit(text, (10, panel_y + 8 + i * 18))

        # Stats (right column)
        stats = [
            f"Visited: {format_count(info['visited'])}",
            f"Path:    {format_count(info['path_length'])}",
            f"Time:    {format_ms(info['elapsed_ms'])}",
        ]
        for i, line in enumerate(stats):
            text = self.font_small.render(line, True, theme['text'])
            screen.blit(text, (screen_w - 190, panel_y + 8 + i * 18))

        # Status line
        status = info.get('status')
        if info.get('solving'):
            status = "Solving... (Esc to stop)"
        if status:
            color = COLOR_STATUS_ERROR if info.get('status_error') else COLOR_STATUS_INFO
            text = self.font_medium.render(status, True, color)
            screen.blit(text, (10, panel_y + PANEL_H - 26))
        else:
            hint = "1-4 tool  G cycle gen  Enter generate  S cycle solver  Space solve  +/- speed  C clear  F5/F9 save/load"
            text = self.font_small.render(hint, True, theme['text_dim'])
            screen.blit(text, (10, panel_y + PANEL_H - 22))
