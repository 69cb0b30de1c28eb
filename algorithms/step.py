"""
step.py — Algorithm Step Event
===============================
Every algorithm is a generator that yields Step objects and *returns*
the final path length.  A Step records exactly one node transition:

    • a node entering OPEN   (discovered, now in the frontier)
    • a node entering CLOSED (fully expanded)
    • a node entering PATH   (reconstruction pass, after the search)

Design decisions:
  - The generator mutates Node.state itself; a Step is the receipt for
    that mutation, so the driver can publish and pace it.
  - `phase` separates frontier steps from reconstruction steps; the
    driver paces them differently.
  - "No path" is not an exception: generators return UNREACHABLE.
"""

import sys
from dataclasses import dataclass
from typing import Dict, Generator, Optional

from grid import Grid, Node, NodeState, Position


# reserved maximum, never a real path length
UNREACHABLE: int = sys.maxsize

SEARCH = "search"
PATH   = "path"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number : 0-based index of this step in the run.
        row, col    : The node that changed.
        state       : The NodeState it entered.
        phase       : SEARCH for frontier work, PATH for reconstruction.
        explanation : Human-readable note for the presentation layer.
    """

    step_number: int
    row:         int
    col:         int
    state:       NodeState
    phase:       str = SEARCH
    explanation: str = ""

    @property
    def pos(self) -> Position:
        return (self.row, self.col)


SearchGenerator = Generator[Step, None, int]


class StepCounter:
    """Hands out step numbers and builds Steps from nodes."""

    def __init__(self):
        self.count = 0

    def emit(self, node: Node, phase: str = SEARCH, explanation: str = "") -> Step:
        step = Step(
            step_number=self.count,
            row=node.row,
            col=node.col,
            state=node.state,
            phase=phase,
            explanation=explanation,
        )
        self.count += 1
        return step


def reconstruct_path(
    grid: Grid,
    parent: Dict[Position, Position],
    start: Node,
    end: Node,
    counter: StepCounter,
) -> SearchGenerator:
    """
    Walk parent pointers from End back to Start, marking every ancestor
    except Start as PATH.  Returns the number of edges walked.
    """
    length = 0
    cur: Optional[Position] = end.pos
    while cur in parent:
        cur = parent[cur]
        length += 1
        if cur != start.pos:
            node = grid.at(cur)
            node.mark_path()
            yield counter.emit(node, PATH, f"({node.row}, {node.col}) is on the path.")
    return length
