"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Node
    from grid import NodeState, CellState
"""

from grid.node import Node, NodeState, CellState, Position
from grid.grid import Grid, ROWS

__all__ = [
    "Node",      "NodeState",
    "CellState", "Position",
    "Grid",      "ROWS",
]
