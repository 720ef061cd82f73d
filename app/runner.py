"""
Runner - entry points for maze generation and solving
Handles algorithm lookup, connectivity fallback, stepping and statistics
"""

import logging
import time

from app.session import Session
from maze.errors import MazeBusyError, MissingEndpointsError
from maze.generator import get_generator, open_endpoints, carve_fallback_path
from maze.solver import get_solver
from utils.helpers import make_rng

logger = logging.getLogger(__name__)


class GenerationResult:
    """Summary of a finished generation pass"""
    def __init__(self, algorithm, passage_count, fallback_carved, elapsed_ms):
        self.algorithm = algorithm
        self.passage_count = passage_count
        self.fallback_carved = fallback_carved
        self.elapsed_ms = elapsed_ms

    @property
    def used_fallback(self):
        return bool(self.fallback_carved)

    def __repr__(self):
        return (f"GenerationResult({self.algorithm}, passages={self.passage_count}, "
                f"fallback={len(self.fallback_carved)})")


class SolveResult:
    """Statistics of a finished, failed or cancelled solve"""
    def __init__(self, algorithm, visited_count=0, path=None, elapsed_ms=0.0, cancelled=False):
        self.algorithm = algorithm
        self.visited_count = visited_count
        self.path = path
        self.elapsed_ms = elapsed_ms
        self.cancelled = cancelled

    @property
    def found(self):
        return self.path is not None

    @property
    def path_length(self):
        """Number of moves along the path (0 when no path)"""
        if not self.path:
            return 0
        return len(self.path) - 1

    def as_dict(self):
        return {
            'visitedCount': self.visited_count,
            'pathLength': self.path_length,
            'elapsedTime': self.elapsed_ms,
        }

    def __repr__(self):
        return (f"SolveResult({self.algorithm}, visited={self.visited_count}, "
                f"path_length={self.path_length}, cancelled={self.cancelled})")


# ========== GENERATION ==========

def generate_steps(grid, algorithm, rng=None, seed=None, session=None):
    """
    Start a generator for animated generation

    The returned iterator yields step dicts; call finalize_generation()
    once it is exhausted.
    """
    func = get_generator(algorithm)
    _ensure_idle(session)
    return func(grid, rng if rng is not None else make_rng(seed))


def finalize_generation(grid, rng=None, open_ends=True):
    """
    Post-generation policy: open the endpoints, then make sure a path exists

    Returns:
        list: cells cleared by the fallback corridor (empty if none needed)
    """
    if open_ends:
        open_endpoints(grid, rng)

    if grid.has_start_and_end() and not grid.has_valid_path():
        cleared = carve_fallback_path(grid)
        logger.debug("No path after generation, carved fallback corridor (%d cells)", len(cleared))
        return cleared
    return []


def generate(grid, algorithm, seed=None, open_ends=True, session=None, rng=None):
    """
    Generate a maze synchronously

    Args:
        grid: Grid to carve (walls and solve state are replaced)
        algorithm: 'prim', 'kruskal', 'dfs' or 'backtracking'
        seed: Seed for a fresh random generator (ignored when rng is given)
        open_ends: Randomly widen the area around start/end
        session: Session whose solving flag guards the grid
        rng: random.Random instance to use

    Returns:
        GenerationResult

    Raises:
        UnknownAlgorithmError: algorithm name not registered
        MazeBusyError: a solve is running on this session
    """
    func = get_generator(algorithm)
    _ensure_idle(session)
    rng = rng if rng is not None else make_rng(seed)

    t0 = time.perf_counter()
    for _ in func(grid, rng):
        pass
    cleared = finalize_generation(grid, rng, open_ends)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0

    result = GenerationResult(algorithm, grid.passage_count(), cleared, elapsed_ms)
    logger.info("Generated %dx%d maze with %s in %.2f ms (fallback=%s)",
                grid.rows, grid.cols, algorithm, elapsed_ms, result.used_fallback)
    return result


def _ensure_idle(session):
    if session is not None and session.is_solving:
        raise MazeBusyError("Cannot change the maze while a solve is running")


# ========== SOLVING ==========

class SolveRun:
    """
    One solve pass, advanced one expansion at a time

    The session's solving flag is checked before every expansion;
    clearing it stops the run with the partial visited count and no
    path. The update sink is called after each expansion with
    (visited_cells, path), where visited_cells is a tuple snapshot and path
    stays None until the final call.
    """
    def __init__(self, grid, algorithm, session=None, update_sink=None,
                 carve_if_blocked=False, **options):
        func = get_solver(algorithm)
        if not grid.has_start_and_end():
            raise MissingEndpointsError("Set a start and an end cell before solving")
        if session is not None and session.is_solving:
            raise MazeBusyError("A solve is already running")

        self.grid = grid
        self.algorithm = algorithm
        self.session = session if session is not None else Session()
        self.update_sink = update_sink

        if carve_if_blocked and not grid.has_valid_path():
            cleared = carve_fallback_path(grid)
            logger.info("No path between start and end, carved a corridor of %d cells", len(cleared))

        self._steps = func(grid, **options)
        self._visited = []
        self._path = None
        self._cancelled = False
        self._finished = False
        self._t0 = time.perf_counter()
        self._elapsed_ms = 0.0

        self.session.start_solving()

    @property
    def finished(self):
        return self._finished

    def step(self):
        """
        Advance by one expansion

        Returns:
            bool: True while the run should keep going
        """
        if self._finished:
            return False

        if not self.session.is_solving:
            self._cancelled = True
            logger.info("%s cancelled after %d visited cells", self.algorithm, len(self._visited))
            self._finish()
            return False

        try:
            state = next(self._steps)
        except StopIteration:
            self._finish()
            return False

        self._visited = state["visited"]
        if state["done"]:
            self._path = state["path"]

        if self.update_sink is not None:
            self.update_sink(tuple(self._visited), state["path"])

        if state["done"]:
            self._finish()
            return False
        return True

    def run(self, sleep=time.sleep, delay=None):
        """
        Drive the run to completion, pausing between steps

        Args:
            sleep: Function called with the delay in seconds
            delay: Fixed delay; defaults to the session's step delay

        Returns:
            SolveResult
        """
        while self.step():
            pause = self.session.step_delay() if delay is None else delay
            if pause > 0:
                sleep(pause)
        return self.result()

    def cancel(self):
        self.session.stop_solving()

    def result(self):
        if not self._finished:
            self._elapsed_ms = (time.perf_counter() - self._t0) * 1000.0
        return SolveResult(
            self.algorithm,
            visited_count=len(self._visited),
            path=None if self._cancelled else self._path,
            elapsed_ms=self._elapsed_ms,
            cancelled=self._cancelled,
        )

    def _finish(self):
        self._finished = True
        self._elapsed_ms = (time.perf_counter() - self._t0) * 1000.0
        self._steps.close()
        self.session.is_solving = False
        if not self._cancelled:
            logger.info("%s finished: visited=%d path_length=%d in %.2f ms",
                        self.algorithm, len(self._visited),
                        len(self._path) - 1 if self._path else 0, self._elapsed_ms)


def solve(grid, algorithm, update_sink=None, session=None, sleep=time.sleep,
          carve_if_blocked=False, **options):
    """
    Solve the maze, reporting every expansion to update_sink

    Without a session no delay is inserted between steps.

    Args:
        grid: Grid with start and end set
        algorithm: 'dfs', 'bfs', 'astar', 'dijkstra' or 'wall-follower'
        update_sink: Callable(visited_cells, path) invoked once per step;
            visited_cells is a tuple snapshot taken at that step
        session: Session providing the step delay and the cancel flag
        sleep: Function used to wait between steps
        carve_if_blocked: Carve the fallback corridor first when start and
            end are disconnected
        **options: Extra solver arguments (e.g. max_steps for the wall follower)

    Returns:
        SolveResult

    Raises:
        UnknownAlgorithmError: algorithm name not registered
        MissingEndpointsError: start or end missing
        MazeBusyError: the session is already solving
    """
    run = SolveRun(grid, algorithm, session=session, update_sink=update_sink,
                   carve_if_blocked=carve_if_blocked, **options)
    delay = None if session is not None else 0
    return run.run(sleep=sleep, delay=delay)
