"""
MazeViz - interactive maze generation and pathfinding visualizer
Draw or generate a maze, then watch search algorithms explore it
"""

import logging
import os
import sys

import pygame

from app.maze_file import MazeFileManager
from app.renderer import GridRenderer
from app.runner import SolveRun, generate, generate_steps, finalize_generation
from app.session import Session, Tool, TOOL_ORDER
from maze.errors import MazeError
from maze.generator import GEN_NAMES, get_generator_label
from maze.maze_core import Grid
from maze.presets import get_preset, next_preset, get_cell_size, get_screen_size
from maze.solver import SOLVE_NAMES, get_solver_label
from utils.constants import APP_TITLE, APP_VERSION, FPS, SPEED_STEP
from utils.helpers import make_rng, pixel_to_cell

logger = logging.getLogger(__name__)

TOOL_KEYS = {
    pygame.K_1: Tool.WALL,
    pygame.K_2: Tool.ERASE,
    pygame.K_3: Tool.START,
    pygame.K_4: Tool.END,
}


class MazeViz:
    """
    Main application class
    """
    def __init__(self, preset_name='medium'):
        pygame.init()

        self.session = Session()
        self.file_manager = MazeFileManager()
        self.rng = make_rng()

        self.preset_name = preset_name
        preset = get_preset(preset_name)
        self.grid = Grid(preset.rows, preset.cols)
        self.generator_name = preset.generator
        self.solver_name = preset.solver
        self.session.set_speed(preset.speed)

        # Screen
        self.screen = None
        self.screen_w = 0
        self.screen_h = 0
        self.renderer = None
        self._resize_for_grid()

        self.clock = pygame.time.Clock()
        self.running = True

        # Animated generation (off = generate instantly)
        self.animate_generation = False
        self.generator = None
        self.gen_speed = 400  # Steps per second
        self.gen_accum = 0.0

        # Solving
        self.solve_run = None
        self.solve_accum = 0.0
        self.last_path = None

        # Stats panel
        self.stats = {'visited': 0, 'path_length': 0, 'elapsed_ms': 0.0}
        self.status_text = ""
        self.status_error = False
        self.status_timer = 0.0

    def _resize_for_grid(self):
        """Create a screen that fits the current grid"""
        cell = get_cell_size(self.grid.rows, self.grid.cols)
        self.screen_w, self.screen_h = get_screen_size(self.grid.rows, self.grid.cols)
        self.screen = pygame.display.set_mode((self.screen_w, self.screen_h))
        pygame.display.set_caption(f"{APP_TITLE} {APP_VERSION}")
        self.renderer = GridRenderer(cell)

    # ========== EVENTS ==========

    def handle_events(self):
        """Handle input events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.session.is_drawing = True
                self._apply_tool_at(*event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.session.is_drawing = False

            elif event.type == pygame.MOUSEMOTION and self.session.is_drawing:
                # Only walls and eraser paint while dragging
                if self.session.tool in (Tool.WALL, Tool.ERASE):
                    self._apply_tool_at(*event.pos)

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _apply_tool_at(self, x, y):
        if self.generator is not None:
            return
        pos = pixel_to_cell(x, y, self.renderer.cell_size, self.grid.rows, self.grid.cols)
        if pos is None:
            return
        if self.session.apply_tool(self.grid, *pos):
            self.last_path = None

    def _handle_keydown(self, key):
        """Handle key press"""
        if key == pygame.K_ESCAPE:
            if self.session.is_solving:
                self.session.stop_solving()
            return

        if key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.session.change_speed(SPEED_STEP)
            return
        if key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.session.change_speed(-SPEED_STEP)
            return
        if key == pygame.K_d:
            self.session.toggle_dark_mode()
            return

        # Everything below changes the grid
        if self.session.is_solving or self.generator is not None:
            return

        if key in TOOL_KEYS:
            self.session.select_tool(TOOL_KEYS[key])
        elif key == pygame.K_g:
            self.generator_name = _cycle(GEN_NAMES, self.generator_name)
        elif key == pygame.K_s:
            self.solver_name = _cycle(SOLVE_NAMES, self.solver_name)
        elif key == pygame.K_a:
            self.animate_generation = not self.animate_generation
            self._show_message(f"Animated generation {'on' if self.animate_generation else 'off'}")
        elif key == pygame.K_RETURN:
            self._generate()
        elif key == pygame.K_SPACE:
            self._start_solve()
        elif key == pygame.K_c:
            self._clear()
        elif key == pygame.K_r:
            self.grid.reset_visited()
            self.last_path = None
        elif key == pygame.K_p:
            self._change_preset(next_preset(self.preset_name))
        elif key == pygame.K_F5:
            self._save()
        elif key == pygame.K_F9:
            self._load()
        elif key == pygame.K_t:
            self.session.select_tool(_cycle(TOOL_ORDER, self.session.tool))

    # ========== ACTIONS ==========

    def _generate(self):
        """Generate a maze with the selected algorithm"""
        self._reset_stats()
        self.last_path = None
        try:
            if self.animate_generation:
                self.generator = generate_steps(self.grid, self.generator_name,
                                                rng=self.rng, session=self.session)
                self.gen_accum = 0.0
            else:
                result = generate(self.grid, self.generator_name,
                                  session=self.session, rng=self.rng)
                self._after_generation(result.fallback_carved)
        except MazeError as e:
            self._show_message(str(e), error=True)

    def _after_generation(self, cleared):
        if cleared:
            self._show_message(f"No path after generation, opened {len(cleared)} cells")

    def _start_solve(self):
        """Start an animated solve with the selected algorithm"""
        self.last_path = None
        try:
            self.solve_run = SolveRun(self.grid, self.solver_name, session=self.session,
                                      update_sink=self._on_solve_update,
                                      carve_if_blocked=True)
        except MazeError as e:
            logger.warning("Solve refused: %s", e)
            self._show_message(str(e), error=True)
            return
        self.solve_accum = 0.0
        self._reset_stats()

    def _on_solve_update(self, visited, path):
        """Update sink: refresh the live stats; the frame loop redraws"""
        self.stats['visited'] = len(visited)
        if path is not None:
            self.last_path = path
            self.stats['path_length'] = len(path) - 1

    def _clear(self):
        """Start over with an empty grid and default endpoints"""
        self.grid.initialize(self.grid.rows, self.grid.cols)
        self.last_path = None
        self._reset_stats()

    def _change_preset(self, name):
        self.preset_name = name
        preset = get_preset(name)
        self.grid.initialize(preset.rows, preset.cols)
        self.generator_name = preset.generator
        self.solver_name = preset.solver
        self.session.set_speed(preset.speed)
        self.last_path = None
        self._reset_stats()
        self._resize_for_grid()
        self._show_message(f"Grid {preset.rows}x{preset.cols}")

    def _save(self):
        try:
            path = self.file_manager.save(self.grid)
        except OSError as e:
            logger.error("Save failed: %s", e)
            self._show_message("Save failed!", error=True)
            return
        self._show_message(f"Saved {path.name} (F9 to load)")

    def _load(self):
        name = self.file_manager.last_name or self.file_manager.latest()
        if name is None:
            self._show_message("No maze file found", error=True)
            return
        rows, cols = self.grid.rows, self.grid.cols
        try:
            self.file_manager.load(self.grid, name)
        except MazeError as e:
            logger.warning("Load failed: %s", e)
            self._show_message(f"Load failed: {e}", error=True)
            return
        self.last_path = None
        self._reset_stats()
        if (rows, cols) != (self.grid.rows, self.grid.cols):
            self._resize_for_grid()
        self._show_message(f"Loaded {name}")

    def _reset_stats(self):
        self.stats = {'visited': 0, 'path_length': 0, 'elapsed_ms': 0.0}

    def _show_message(self, text, error=False, duration=3.0):
        """Show a temporary status message"""
        self.status_text = text
        self.status_error = error
        self.status_timer = duration

    # ========== UPDATE ==========

    def update(self, dt):
        """Advance animations"""
        if self.status_timer > 0:
            self.status_timer -= dt
            if self.status_timer <= 0:
                self.status_text = ""

        if self.generator is not None:
            self._update_generation(dt)
        if self.solve_run is not None:
            self._update_solving(dt)

    def _update_generation(self, dt):
        """Advance animated generation"""
        self.gen_accum += dt * self.gen_speed
        steps = int(self.gen_accum)
        if steps <= 0:
            return
        self.gen_accum -= steps

        for _ in range(steps):
            try:
                state = next(self.generator)
            except StopIteration:
                state = {'done': True}
            if state['done']:
                self.generator = None
                self._after_generation(finalize_generation(self.grid, self.rng))
                break

    def _update_solving(self, dt):
        """Advance the solver by as many steps as the speed setting allows"""
        self.solve_accum += dt
        delay = self.session.step_delay()
        steps = int(self.solve_accum / delay)
        if steps == 0:
            return
        self.solve_accum -= steps * delay

        running = True
        for _ in range(steps):
            running = self.solve_run.step()
            if not running:
                break

        if not running:
            result = self.solve_run.result()
            self.solve_run = None
            if result.cancelled:
                self._reset_stats()
                self._show_message("Solve stopped")
            else:
                self.stats = {
                    'visited': result.visited_count,
                    'path_length': result.path_length,
                    'elapsed_ms': result.elapsed_ms,
                }
                if not result.found:
                    self._show_message("No path found", error=True)

    # ========== RENDER ==========

    def render(self):
        """Draw everything"""
        dark = self.session.dark_mode
        self.renderer.draw_grid(self.screen, self.grid, dark)
        if self.last_path:
            self.renderer.draw_path_line(self.screen, self.last_path, dark)

        panel_y = self.grid.rows * self.renderer.cell_size
        info = {
            'generator': get_generator_label(self.generator_name),
            'solver': get_solver_label(self.solver_name),
            'tool': self.session.tool.name.title(),
            'speed': self.session.animation_speed,
            'visited': self.stats['visited'],
            'path_length': self.stats['path_length'],
            'elapsed_ms': self.stats['elapsed_ms'],
            'status': self.status_text,
            'status_error': self.status_error,
            'solving': self.session.is_solving,
        }
        self.renderer.draw_panel(self.screen, panel_y, self.screen_w, info, dark)
        pygame.display.flip()

    def run(self):
        """Main loop"""
        while self.running:
            dt_ms = self.clock.tick(FPS)
            dt = dt_ms / 1000.0

            self.handle_events()
            self.update(dt)
            self.render()

        pygame.quit()


def _cycle(items, current):
    """Item after `current` in `items`, wrapping around"""
    if current not in items:
        return items[0]
    return items[(items.index(current) + 1) % len(items)]


def main():
    """Entry point"""
    logging.basicConfig(
        level=os.environ.get("MAZEVIZ_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    preset = sys.argv[1] if len(sys.argv) > 1 else 'medium'
    app = MazeViz(preset)
    app.run()


if __name__ == "__main__":
    main()
