"""
Maze solving algorithms

Each solver is a Python generator over a Grid. It resets the solve state,
yields one step dict per expansion and finishes with a step whose
"done" flag is set and whose "path" holds the cells from start to end,
or None when the end was not reached.

Step dict:
    visited: cells expanded so far, in expansion order (shared list,
             read-only for callers)
    current: cell expanded in this step
    path:    solution path on the final step, otherwise None
    done:    True on the final step
"""

import math
from collections import deque

from maze.errors import UnknownAlgorithmError
from maze.maze_core import manhattan, reconstruct_path
from maze.priority_queue import PriorityQueue
from utils.constants import HEADING_RIGHT, HEADING_DELTAS


def _step(visited, current, path=None, done=False):
    return {"visited": visited, "current": current, "path": path, "done": done}


def _finish(grid, visited, found):
    """Build the final step, reconstructing and marking the path"""
    path = reconstruct_path(grid, grid.end_index) if found else None
    if path:
        grid.mark_path(path)
    return _step(visited, visited[-1] if visited else None, path, done=True)


def _expand(grid, visited, cell):
    grid.mark_visited(cell)
    visited.append(cell)


# ========== DFS ==========

def solve_dfs(grid):
    """Depth-first search with an explicit stack; finds a path, not the shortest"""
    grid.reset_visited()
    visited = []
    if not grid.has_start_and_end():
        yield _step(visited, None, done=True)
        return

    end = grid.end_index
    stack = [grid.start_index]
    found = False

    while stack:
        idx = stack.pop()
        cell = grid.cells[idx]
        if cell.visited:
            continue

        _expand(grid, visited, cell)
        if idx == end:
            found = True
            yield _step(visited, cell)
            break

        for n in grid.open_neighbors(cell):
            if n.visited:
                continue
            n_idx = grid.index(n.row, n.col)
            stack.append(n_idx)
            # First discoverer wins
            if n.parent is None:
                n.parent = idx
            grid.mark_frontier(n)

        yield _step(visited, cell)

    yield _finish(grid, visited, found)


# ========== BFS ==========

def solve_bfs(grid):
    """Breadth-first search; shortest path on a unit-cost grid"""
    grid.reset_visited()
    visited = []
    if not grid.has_start_and_end():
        yield _step(visited, None, done=True)
        return

    end = grid.end_index
    start = grid.start_cell
    start.distance = 0
    q = deque([grid.start_index])
    found = False

    while q:
        idx = q.popleft()
        cell = grid.cells[idx]
        _expand(grid, visited, cell)
        if idx == end:
            found = True
            yield _step(visited, cell)
            break

        for n in grid.open_neighbors(cell):
            if n.distance != math.inf:
                continue
            n.distance = cell.distance + 1
            n.parent = idx
            q.append(grid.index(n.row, n.col))
            grid.mark_frontier(n)

        yield _step(visited, cell)

    yield _finish(grid, visited, found)


# ========== DIJKSTRA ==========

def solve_dijkstra(grid):
    """Dijkstra with unit edge cost; relaxes on strictly shorter distance"""
    grid.reset_visited()
    visited = []
    if not grid.has_start_and_end():
        yield _step(visited, None, done=True)
        return

    end = grid.end_index
    grid.start_cell.distance = 0
    pq = PriorityQueue()
    pq.push(grid.start_index, 0)
    found = False

    while pq:
        idx = pq.pop()
        cell = grid.cells[idx]
        if cell.visited:
            continue

        _expand(grid, visited, cell)
        if idx == end:
            found = True
            yield _step(visited, cell)
            break

        for n in grid.open_neighbors(cell):
            if n.visited:
                continue
            new_dist = cell.distance + 1
            if new_dist < n.distance:
                n.distance = new_dist
                n.parent = idx
                pq.push(grid.index(n.row, n.col), new_dist)
                grid.mark_frontier(n)

        yield _step(visited, cell)

    yield _finish(grid, visited, found)


# ========== A* ==========

def solve_astar(grid):
    """A* with the Manhattan heuristic"""
    grid.reset_visited()
    visited = []
    if not grid.has_start_and_end():
        yield _step(visited, None, done=True)
        return

    goal = grid.end_cell
    end = grid.end_index
    start = grid.start_cell
    start.g_score = 0
    start.f_score = manhattan(start, goal)

    open_set = PriorityQueue()
    open_set.push(grid.start_index, start.f_score)
    found = False

    while open_set:
        idx = open_set.pop()
        cell = grid.cells[idx]

        # visited doubles as the closed set
        _expand(grid, visited, cell)
        if idx == end:
            found = True
            yield _step(visited, cell)
            break

        for n in grid.open_neighbors(cell):
            if n.visited:
                continue
            tentative_g = cell.g_score + 1
            if tentative_g < n.g_score:
                n.parent = idx
                n.g_score = tentative_g
                n.f_score = tentative_g + manhattan(n, goal)
                open_set.push(grid.index(n.row, n.col), n.f_score)
                grid.mark_frontier(n)

        yield _step(visited, cell)

    yield _finish(grid, visited, found)


# ========== WALL FOLLOWER ==========

def _cell_ahead(grid, cell, heading):
    dr, dc = HEADING_DELTAS[heading]
    nr, nc = cell.row + dr, cell.col + dc
    if grid.in_bounds(nr, nc):
        return grid.cell(nr, nc)
    return None


def solve_wall_follower(grid, max_steps=None):
    """
    Right-hand rule walk starting at the start cell facing right

    Each step tries a right turn, then straight, then a left turn, and
    otherwise turns around in place. The walk is fully determined by
    (cell, heading), so a repeated pair means it would cycle forever:
    the solver stops there and reports no path. `max_steps` adds an
    optional hard cap on the number of steps.

    The reported path follows first-entry parent links, which gives a
    simple route even when the walk doubled back.
    """
    grid.reset_visited()
    visited = []
    if not grid.has_start_and_end():
        yield _step(visited, None, done=True)
        return

    cur = grid.start_cell
    heading = HEADING_RIGHT
    seen_states = set()
    steps = 0
    found = False

    while True:
        idx = grid.index(cur.row, cur.col)
        if not cur.visited:
            _expand(grid, visited, cur)

        if cur.is_end:
            found = True
            break

        state = (idx, heading)
        if state in seen_states:
            break
        seen_states.add(state)

        if max_steps is not None and steps >= max_steps:
            break
        steps += 1

        for turn in (1, 0, 3):
            new_heading = (heading + turn) % 4
            nxt = _cell_ahead(grid, cur, new_heading)
            if nxt is not None and not nxt.is_wall:
                heading = new_heading
                if not nxt.visited and nxt.parent is None:
                    nxt.parent = idx
                    grid.mark_frontier(nxt)
                cur = nxt
                break
        else:
            heading = (heading + 2) % 4

        yield _step(visited, cur)

    yield _finish(grid, visited, found)


# ========== ALGORITHM LIST ==========

SOLVE_ALGOS = [
    ("dfs", "Depth-First Search", solve_dfs),
    ("bfs", "Breadth-First Search", solve_bfs),
    ("astar", "A*", solve_astar),
    ("dijkstra", "Dijkstra", solve_dijkstra),
    ("wall-follower", "Wall Follower", solve_wall_follower),
]

SOLVE_NAMES = [key for key, _, _ in SOLVE_ALGOS]


def get_solver(name):
    """Look up a solver function by key"""
    for key, _, func in SOLVE_ALGOS:
        if key == name:
            return func
    raise UnknownAlgorithmError("solving", name, SOLVE_NAMES)


def get_solver_label(name):
    for key, label, _ in SOLVE_ALGOS:
        if key == name:
            return label
    raise UnknownAlgorithmError("solving", name, SOLVE_NAMES)
