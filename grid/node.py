from enum import Enum
from typing import Optional, Tuple


Position = Tuple[int, int]


# ---------------------------------------------------------------------------
# Node State Enum — what an algorithm has done to a cell
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED = "unvisited"   # background
    OPEN      = "open"        # discovered, waiting in the frontier
    CLOSED    = "closed"      # fully expanded
    PATH      = "path"        # on the reconstructed path
    START     = "start"
    END       = "end"


# ---------------------------------------------------------------------------
# Cell State Enum — what the renderer sees (NodeState + walls)
# ---------------------------------------------------------------------------
class CellState(Enum):
    UNVISITED = "unvisited"
    OPEN      = "open"
    CLOSED    = "closed"
    PATH      = "path"
    START     = "start"
    END       = "end"
    WALL      = "wall"

    @property
    def code(self) -> str:
        """One-letter code used by the compact text snapshot."""
        return _CELL_CODES[self]


_CELL_CODES = {
    CellState.UNVISITED: ".",
    CellState.OPEN:      "o",
    CellState.CLOSED:    "x",
    CellState.PATH:      "*",
    CellState.START:     "S",
    CellState.END:       "E",
    CellState.WALL:      "#",
}


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    One cell of the grid.

    Attributes:
        row, col : Fixed position, the node's identity.
        is_wall  : Obstacle flag (independent of state).
        state    : Current NodeState for visual encoding.
        score    : Algorithm-local priority (A* f-score), None when unused.
    """

    __slots__ = ("row", "col", "is_wall", "state", "score")

    def __init__(self, row: int, col: int):
        self.row: int               = row
        self.col: int               = col
        self.is_wall: bool          = False
        self.state: NodeState       = NodeState.UNVISITED
        self.score: Optional[float] = None

    @property
    def pos(self) -> Position:
        return (self.row, self.col)

    # ------------------------------------------------------------------
    # State helpers (used by algorithms + grid resets)
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Back to UNVISITED; the wall flag is left alone."""
        self.state = NodeState.UNVISITED
        self.score = None

    def make_wall(self) -> None:
        self.is_wall = True
        self.reset()

    def mark_open(self) -> None:
        self.state = NodeState.OPEN

    def mark_closed(self) -> None:
        self.state = NodeState.CLOSED

    def mark_path(self) -> None:
        self.state = NodeState.PATH

    def set_start(self) -> None:
        self.state = NodeState.START

    def set_end(self) -> None:
        self.state = NodeState.END

    def manhattan(self, other: "Node") -> int:
        """4-connected unit-cost distance, used as the A* heuristic."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        wall = ", wall" if self.is_wall else ""
        return f"Node({self.row}, {self.col}, state={self.state.value}{wall})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.pos == other.pos

    def __hash__(self) -> int:
        return hash(self.pos)
