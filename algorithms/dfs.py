"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no recursion limit issues).

Neighbours are pushed *before* anyone checks whether they were visited;
the visited check happens at pop time.  A node can therefore sit on the
stack several times but is expanded (and CLOSED) only once.  This is
what gives DFS its long, winding paths, and it is kept that way.

Each push overwrites the neighbour's parent pointer.  The latest push
is the one popped first, so the recorded parent is always the node that
actually led to the expansion.
"""

from typing import Dict, List

from grid import Grid, Node, NodeState, Position
from algorithms.step import (
    SearchGenerator, StepCounter, UNREACHABLE, reconstruct_path,
)


DESCRIPTION = "Dives deep before backtracking. Does NOT guarantee the shortest path."


def dfs(grid: Grid, start: Node, end: Node) -> SearchGenerator:
    """
    Args:
        grid  : The grid to search.
        start : Start node.
        end   : Goal node.

    Returns (via StopIteration.value):
        Path length in edges, or UNREACHABLE.
    """

    counter = StepCounter()
    stack: List[Node]                = [start]
    visited: set                     = set()
    parent: Dict[Position, Position] = {}

    while stack:
        cur = stack.pop()

        # already expanded via an earlier push
        if cur.pos in visited:
            continue
        visited.add(cur.pos)

        if cur == end:
            length = yield from reconstruct_path(grid, parent, start, end, counter)
            return length

        for nb in grid.neighbors_of(cur):
            if nb.pos in visited:
                continue
            parent[nb.pos] = cur.pos
            stack.append(nb)
            if nb != end and nb.state is not NodeState.OPEN:
                nb.mark_open()
                yield counter.emit(
                    nb, explanation=f"Push ({nb.row}, {nb.col}) from ({cur.row}, {cur.col})."
                )

        if cur != start:
            cur.mark_closed()
            yield counter.emit(cur, explanation=f"Popped ({cur.row}, {cur.col}) is fully expanded.")

    return UNREACHABLE
