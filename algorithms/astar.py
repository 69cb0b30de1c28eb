"""
astar.py — A* Search
=====================
Generator-based A* on the 4-connected unit-cost grid.

Heuristic is Manhattan distance, which is consistent here, so the first
time End is popped its g-score is optimal.

The frontier is a heap of (f, insertion_no, pos).  Equal f-scores pop in
insertion order.  When a frontier node's g improves, a fresh entry is
pushed and the old one goes stale; stale entries are skipped on pop.
"""

import heapq
import itertools
from typing import Dict, List, Tuple

from grid import Grid, Node, Position
from algorithms.step import (
    SearchGenerator, StepCounter, UNREACHABLE, reconstruct_path,
)


DESCRIPTION = "Dijkstra + Manhattan heuristic. Optimal on this grid."


def astar(grid: Grid, start: Node, end: Node) -> SearchGenerator:
    """
    Args:
        grid  : The grid to search (node states are mutated in place).
        start : Start node.
        end   : Goal node.

    Returns (via StopIteration.value):
        Path length in edges, or UNREACHABLE.
    """

    counter = StepCounter()
    INF     = float("inf")

    g_score: Dict[Position, float]    = {node.pos: INF for node in grid.nodes()}
    f_score: Dict[Position, float]    = {}
    parent:  Dict[Position, Position] = {}
    in_open: set                      = set()
    tie                               = itertools.count()

    g_score[start.pos] = 0
    f_score[start.pos] = start.manhattan(end)
    start.score        = f_score[start.pos]
    open_heap: List[Tuple[float, int, Position]] = [(f_score[start.pos], next(tie), start.pos)]
    in_open.add(start.pos)

    while open_heap:
        f, _, pos = heapq.heappop(open_heap)
        if pos not in in_open or f != f_score[pos]:
            continue    # stale entry
        in_open.discard(pos)
        cur = grid.at(pos)

        if cur == end:
            length = yield from reconstruct_path(grid, parent, start, end, counter)
            return length

        # -- relax neighbours (live adjacency) --
        for nb in grid.neighbors_of(cur):
            tentative = g_score[pos] + 1
            if tentative < g_score[nb.pos]:
                parent[nb.pos]  = pos
                g_score[nb.pos] = tentative
                f_score[nb.pos] = tentative + nb.manhattan(end)
                nb.score        = f_score[nb.pos]
                heapq.heappush(open_heap, (f_score[nb.pos], next(tie), nb.pos))

                if nb.pos not in in_open:
                    in_open.add(nb.pos)
                    if nb != end:
                        nb.mark_open()
                        yield counter.emit(
                            nb,
                            explanation=(
                                f"Open ({nb.row}, {nb.col}): g={tentative}, "
                                f"h={nb.manhattan(end)}, f={f_score[nb.pos]}."
                            ),
                        )

        if cur != start:
            cur.mark_closed()
            yield counter.emit(cur, explanation=f"Close ({cur.row}, {cur.col}): g={g_score[pos]}.")

    return UNREACHABLE
