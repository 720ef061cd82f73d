"""
Maze generation algorithms

The grid is treated as a graph whose vertices are the cells with odd row
and odd column, and whose edges are the cells between two such vertices.
Every generator starts from an all-wall grid and clears vertices and
edges until they form a spanning tree.

Generators are Python generators yielding step dicts so a caller can
either run them to completion or animate them.
"""

import random

from maze.errors import UnknownAlgorithmError
from utils.constants import CARVE_DIRS, ENDPOINT_OPEN_CHANCE


class DisjointSet:
    """Union-Find over passage cells for Kruskal's algorithm"""
    def __init__(self, n):
        self.parent = list(range(n))
        self.rank = [0] * n

    def find(self, x):
        if self.parent[x] != x:
            self.parent[x] = self.find(self.parent[x])
        return self.parent[x]

    def union(self, a, b):
        """
        Merge the sets holding a and b

        Returns:
            bool: False if they were already in the same set
        """
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            self.parent[ra] = rb
        elif self.rank[ra] > self.rank[rb]:
            self.parent[rb] = ra
        else:
            self.parent[rb] = ra
            self.rank[ra] += 1
        return True

    def __len__(self):
        return len(self.parent)


# ========== SHARED HELPERS ==========

def _fill_walls(grid):
    """Turn every cell into a wall (start/end refuse) and drop solve state"""
    grid.reset_visited()
    for r in range(grid.rows):
        for c in range(grid.cols):
            grid.set_wall(r, c, True)


def _random_passage_cell(grid, rng):
    """Random odd-coordinate cell, or None on grids too thin to have one"""
    odd_rows = range(1, grid.rows, 2)
    odd_cols = range(1, grid.cols, 2)
    if not odd_rows or not odd_cols:
        return None
    return rng.choice(odd_rows), rng.choice(odd_cols)


def _carve(grid, a, b):
    """Clear the wall cell between passage cells a and b, and b itself"""
    wall = ((a[0] + b[0]) // 2, (a[1] + b[1]) // 2)
    grid.set_wall(wall[0], wall[1], False)
    grid.set_wall(b[0], b[1], False)
    return wall


def _step(current, carved=None, done=False):
    return {"current": current, "carved": carved, "done": done}


def _rng(rng):
    return rng if rng is not None else random.Random()


# ========== GENERATOR: RANDOMIZED DFS ==========

def gen_dfs(grid, rng=None):
    """
    Randomized depth-first carving

    Uses an explicit stack of (cell, remaining directions) frames so the
    visiting order is the same as the recursive version without the
    recursion depth.
    """
    rng = _rng(rng)
    _fill_walls(grid)

    start = _random_passage_cell(grid, rng)
    if start is None:
        yield _step(None, done=True)
        return

    grid.set_wall(start[0], start[1], False)
    carved = {start}
    yield _step(start)

    dirs = list(CARVE_DIRS)
    rng.shuffle(dirs)
    stack = [(start, iter(dirs))]

    while stack:
        (r, c), remaining = stack[-1]
        for dr, dc in remaining:
            nxt = (r + dr, c + dc)
            if grid.in_bounds(*nxt) and nxt not in carved:
                wall = _carve(grid, (r, c), nxt)
                carved.add(nxt)
                yield _step(nxt, (wall, nxt))

                dirs = list(CARVE_DIRS)
                rng.shuffle(dirs)
                stack.append((nxt, iter(dirs)))
                break
        else:
            stack.pop()

    yield _step(start, done=True)


# ========== GENERATOR: PRIM ==========

def _wall_sides(wall):
    """The two passage cells separated by a wall cell"""
    wr, wc = wall
    if wr % 2 == 1:
        return (wr, wc - 1), (wr, wc + 1)
    return (wr - 1, wc), (wr + 1, wc)


def gen_prim(grid, rng=None):
    """Randomized Prim's algorithm growing from a frontier of wall cells"""
    rng = _rng(rng)
    _fill_walls(grid)

    start = _random_passage_cell(grid, rng)
    if start is None:
        yield _step(None, done=True)
        return

    grid.set_wall(start[0], start[1], False)
    carved = {start}
    frontier = []
    queued = set()

    def add_frontier(cell):
        r, c = cell
        for dr, dc in CARVE_DIRS:
            nxt = (r + dr, c + dc)
            if not grid.in_bounds(*nxt) or nxt in carved:
                continue
            wall = (r + dr // 2, c + dc // 2)
            if wall not in queued:
                queued.add(wall)
                frontier.append(wall)

    add_frontier(start)
    yield _step(start)

    while frontier:
        i = rng.randrange(len(frontier))
        wall = frontier[i]
        frontier[i] = frontier[-1]
        frontier.pop()
        queued.discard(wall)

        a, b = _wall_sides(wall)
        if (a in carved) == (b in carved):
            continue

        new = b if a in carved else a
        grid.set_wall(wall[0], wall[1], False)
        grid.set_wall(new[0], new[1], False)
        carved.add(new)
        yield _step(new, (wall, new))

        add_frontier(new)

    yield _step(start, done=True)


# ========== GENERATOR: KRUSKAL ==========

def gen_kruskal(grid, rng=None):
    """Randomized Kruskal's algorithm over shuffled walls"""
    rng = _rng(rng)
    _fill_walls(grid)

    odd_rows = range(1, grid.rows, 2)
    odd_cols = range(1, grid.cols, 2)
    width = len(odd_cols)

    def set_index(cell):
        return (cell[0] // 2) * width + (cell[1] // 2)

    edges = []
    for r in odd_rows:
        for c in odd_cols:
            grid.set_wall(r, c, False)
            if c + 2 < grid.cols:
                edges.append(((r, c), (r, c + 2), (r, c + 1)))
            if r + 2 < grid.rows:
                edges.append(((r, c), (r + 2, c), (r + 1, c)))
    rng.shuffle(edges)

    sets = DisjointSet(len(odd_rows) * width)
    yield _step((odd_rows[0], odd_cols[0]) if width and odd_rows else None)

    for a, b, wall in edges:
        if sets.union(set_index(a), set_index(b)):
            grid.set_wall(wall[0], wall[1], False)
            yield _step(b, (wall, b))

    yield _step(None, done=True)


# ========== GENERATOR: ITERATIVE BACKTRACKING ==========

def gen_backtracking(grid, rng=None):
    """Iterative backtracker keeping the current path on an explicit stack"""
    rng = _rng(rng)
    _fill_walls(grid)

    start = _random_passage_cell(grid, rng)
    if start is None:
        yield _step(None, done=True)
        return

    grid.set_wall(start[0], start[1], False)
    visited = {start}
    stack = [start]
    yield _step(start)

    while stack:
        cr, cc = stack[-1]
        neighbors = []
        for dr, dc in CARVE_DIRS:
            nxt = (cr + dr, cc + dc)
            if grid.in_bounds(*nxt) and nxt not in visited:
                neighbors.append(nxt)

        if neighbors:
            nxt = rng.choice(neighbors)
            wall = _carve(grid, (cr, cc), nxt)
            visited.add(nxt)
            stack.append(nxt)
            yield _step(nxt, (wall, nxt))
        else:
            stack.pop()
            yield _step((cr, cc))

    yield _step(start, done=True)


# ========== POST-GENERATION ==========

def open_endpoints(grid, rng=None, chance=ENDPOINT_OPEN_CHANCE):
    """
    Clear start/end and randomly open their direct neighbours

    Each neighbour is opened independently with probability `chance`.
    """
    rng = _rng(rng)
    for cell in (grid.start_cell, grid.end_cell):
        if cell is None:
            continue
        cell.is_wall = False
        for neighbor in grid.get_neighbors(cell.row, cell.col):
            if rng.random() < chance:
                grid.set_wall(neighbor.row, neighbor.col, False)


def carve_fallback_path(grid):
    """
    Clear an L-shaped corridor from start to end

    Moves along the start row to the end column, then along that column
    to the end row. Guarantees connectivity; may introduce a cycle.

    Returns:
        list: (row, col) of every wall cell that was cleared
    """
    if not grid.has_start_and_end():
        return []

    row, col = grid.start_cell.pos
    end_row, end_col = grid.end_cell.pos
    cleared = []

    def clear(r, c):
        if grid.cell(r, c).is_wall:
            grid.set_wall(r, c, False)
            cleared.append((r, c))

    while col != end_col:
        col += 1 if col < end_col else -1
        clear(row, col)

    while row != end_row:
        row += 1 if row < end_row else -1
        clear(row, col)

    return cleared


# ========== ALGORITHM LIST ==========

GEN_ALGOS = [
    ("prim", "Prim", gen_prim),
    ("kruskal", "Kruskal", gen_kruskal),
    ("dfs", "Randomized DFS", gen_dfs),
    ("backtracking", "Backtracking", gen_backtracking),
]

GEN_NAMES = [key for key, _, _ in GEN_ALGOS]


def get_generator(name):
    """Look up a generator function by key"""
    for key, _, func in GEN_ALGOS:
        if key == name:
            return func
    raise UnknownAlgorithmError("generation", name, GEN_NAMES)


def get_generator_label(name):
    for key, label, _ in GEN_ALGOS:
        if key == name:
            return label
    raise UnknownAlgorithmError("generation", name, GEN_NAMES)
