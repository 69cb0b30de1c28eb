"""
grid.py — Obstacle Grid
========================
Single source of truth for the maze.  Algorithms, the step driver and
the session all talk to this object.

Responsibilities:
  1. Own every Node in a fixed ROWS × ROWS arena  (created once)
  2. Border walls                                   (always present)
  3. Adjacency queries                              (live, never cached)
  4. Reset helpers                                  (wipe algo state, keep walls)
  5. Snapshots for the presentation layer           ((row, col) → CellState)

Design decisions:
  - Nodes live in a list of rows; identity is positional so parent maps
    and visited sets key on (row, col) tuples, never on object links.
  - Neighbours are recomputed on every call from the current wall flags.
    A search that is running sees a wall edit at its next expansion.
  - Neighbour order is fixed: up, down, left, right.  BFS/DFS tie-breaks
    depend on it.
"""

import random
from typing import Dict, Iterable, Iterator, List, Optional

from grid.node import Node, NodeState, CellState, Position


ROWS = 30

# up, down, left, right
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    """
    Attributes:
        rows   : Side length (the grid is always square).
        _cells : [[Node]] indexed [row][col].
    """

    def __init__(self, rows: int = ROWS):
        if rows < 3:
            raise ValueError(f"Grid needs at least 3 rows, got {rows}")
        self.rows: int = rows
        self._cells: List[List[Node]] = [
            [Node(r, c) for c in range(rows)] for r in range(rows)
        ]
        self._wall_border()

    # ==================================================================
    # ACCESS
    # ==================================================================
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.rows

    def is_border(self, row: int, col: int) -> bool:
        last = self.rows - 1
        return row in (0, last) or col in (0, last)

    def node(self, row: int, col: int) -> Node:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside a {self.rows}x{self.rows} grid")
        return self._cells[row][col]

    def at(self, pos: Position) -> Node:
        return self.node(*pos)

    def nodes(self) -> Iterator[Node]:
        for row in self._cells:
            yield from row

    def __iter__(self) -> Iterator[Node]:
        return self.nodes()

    # ==================================================================
    # WALLS
    # ==================================================================
    def is_wall(self, node: Node) -> bool:
        return self._cells[node.row][node.col].is_wall

    def set_wall(self, node: Node, wall: bool) -> bool:
        """Set or clear a wall.  Border cells can't be opened; returns False then."""
        target = self._cells[node.row][node.col]
        if not wall and self.is_border(node.row, node.col):
            return False
        if wall:
            target.make_wall()
        else:
            target.is_wall = False
            target.reset()
        return True

    def randomize_walls(
        self,
        density: float,
        rng: Optional[random.Random] = None,
        keep: Iterable[Position] = (),
    ) -> None:
        """
        Every interior cell becomes a wall with probability `density`.
        Cells listed in `keep` are always left open.
        """
        rng = rng or random.Random()
        keep = set(keep)
        for r in range(1, self.rows - 1):
            for c in range(1, self.rows - 1):
                node = self._cells[r][c]
                node.reset()
                node.is_wall = (r, c) not in keep and rng.random() < density

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def neighbors_of(self, node: Node) -> List[Node]:
        """In-bounds, non-wall 4-neighbours in order [up, down, left, right]."""
        result = []
        for dr, dc in DIRECTIONS:
            r, c = node.row + dr, node.col + dc
            if self.in_bounds(r, c) and not self._cells[r][c].is_wall:
                result.append(self._cells[r][c])
        return result

    # ==================================================================
    # RESET
    # ==================================================================
    def reset(self) -> None:
        """Wipe visitation state between runs; walls stay where they are."""
        for node in self.nodes():
            if not node.is_wall:
                node.reset()
        self._wall_border()

    def clear(self) -> None:
        """Remove every interior wall and all visitation state."""
        for node in self.nodes():
            node.is_wall = False
            node.reset()
        self._wall_border()

    def _wall_border(self) -> None:
        last = self.rows - 1
        for i in range(self.rows):
            self._cells[0][i].make_wall()
            self._cells[last][i].make_wall()
            self._cells[i][0].make_wall()
            self._cells[i][last].make_wall()

    # ==================================================================
    # SNAPSHOT
    # ==================================================================
    def cell_state(
        self,
        node: Node,
        start: Optional[Position] = None,
        end: Optional[Position] = None,
    ) -> CellState:
        if node.is_wall:
            return CellState.WALL
        if node.pos == start or node.state is NodeState.START:
            return CellState.START
        if node.pos == end or node.state is NodeState.END:
            return CellState.END
        return CellState(node.state.value)

    def snapshot(
        self,
        start: Optional[Position] = None,
        end: Optional[Position] = None,
    ) -> Dict[Position, CellState]:
        """Full visitation view keyed by (row, col)."""
        return {node.pos: self.cell_state(node, start, end) for node in self.nodes()}

    def to_rows(
        self,
        start: Optional[Position] = None,
        end: Optional[Position] = None,
    ) -> List[str]:
        """Compact text form: one string per row, one CellState code per cell."""
        return [
            "".join(self.cell_state(node, start, end).code for node in row)
            for row in self._cells
        ]

    # ==================================================================
    # UTILITY
    # ==================================================================
    def wall_count(self) -> int:
        return sum(1 for node in self.nodes() if node.is_wall)

    def count(self, state: NodeState) -> int:
        """Open cells currently in `state` (walls excluded)."""
        return sum(1 for node in self.nodes() if not node.is_wall and node.state is state)

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, walls={self.wall_count()})"
