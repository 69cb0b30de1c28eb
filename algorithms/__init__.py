"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

Every entry's `fn(grid, start, end)` is a generator of Steps that
returns the path length (or UNREACHABLE).  Adding an algorithm means
writing the generator and adding one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.step import Step, UNREACHABLE, SEARCH, PATH
from algorithms.astar import astar as _astar, DESCRIPTION as _astar_desc
from algorithms.bfs   import bfs   as _bfs,   DESCRIPTION as _bfs_desc
from algorithms.dfs   import dfs   as _dfs,   DESCRIPTION as _dfs_desc


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    name:             str                    # name used in results, e.g. "BFS"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable               # the generator function
    tags:             List[str] = field(default_factory=list)
    optimal:          bool      = False      # guaranteed shortest path?
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "astar": AlgoInfo(
        key="astar", name="A*", label="A* Search", fn=_astar,
        tags=["heuristic", "shortest-path"], optimal=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
        description=_astar_desc,
    ),

    "bfs": AlgoInfo(
        key="bfs", name="BFS", label="Breadth-First Search", fn=_bfs,
        tags=["unweighted", "shortest-path", "traversal"], optimal=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description=_bfs_desc,
    ),

    "dfs": AlgoInfo(
        key="dfs", name="DFS", label="Depth-First Search", fn=_dfs,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description=_dfs_desc,
    ),
}

# order used by a full comparison run
COMPARISON_ORDER: List[str] = ["astar", "bfs", "dfs"]


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by registry key or display name ("A*", "BFS"), or None."""
    if key in REGISTRY:
        return REGISTRY[key]
    for info in REGISTRY.values():
        if info.name.lower() == key.lower():
            return info
    return None


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "COMPARISON_ORDER",
    "Step",
    "UNREACHABLE",
    "SEARCH",
    "PATH",
    "get_algorithm",
    "list_algorithms",
]
