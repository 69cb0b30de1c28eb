"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Yields a Step when:
  1. a neighbour is enqueued   →  OPEN
  2. a node finishes expanding →  CLOSED
  3. the path is reconstructed →  PATH (one per node)

Nodes are marked visited at enqueue time, so nothing is queued twice
and the first time End is dequeued its hop count is minimal.
"""

from collections import deque
from typing import Dict

from grid import Grid, Node, Position
from algorithms.step import (
    SearchGenerator, StepCounter, UNREACHABLE, reconstruct_path,
)


DESCRIPTION = "Explores layer by layer. Finds the shortest path by hop count."


def bfs(grid: Grid, start: Node, end: Node) -> SearchGenerator:
    """
    Args:
        grid  : The grid to search.
        start : Start node.
        end   : Goal node.

    Returns (via StopIteration.value):
        Path length in edges, or UNREACHABLE.
    """

    counter = StepCounter()
    queue   = deque([start])
    visited: set                     = {start.pos}
    parent: Dict[Position, Position] = {}

    while queue:
        cur = queue.popleft()

        if cur == end:
            length = yield from reconstruct_path(grid, parent, start, end, counter)
            return length

        for nb in grid.neighbors_of(cur):
            if nb.pos in visited:
                continue
            visited.add(nb.pos)
            parent[nb.pos] = cur.pos
            queue.append(nb)
            if nb != end:
                nb.mark_open()
                yield counter.emit(
                    nb, explanation=f"Enqueue ({nb.row}, {nb.col}) from ({cur.row}, {cur.col})."
                )

        if cur != start:
            cur.mark_closed()
            yield counter.emit(cur, explanation=f"Dequeued ({cur.row}, {cur.col}) is fully expanded.")

    return UNREACHABLE
