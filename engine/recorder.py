"""
recorder.py — Result Recorder & Comparator
============================================
Collects one SearchResult per completed run and ranks them.

Usage:
    rec = ResultRecorder()
    rec.add_result("A*", 42, 310.5)
    rec.add_result("BFS", 42, 295.0)
    rec.best()                   # → SearchResult("BFS", 42, 295.0)
    compare(rec)                 # → ComparisonResult(ranked, best_name)

Ranking: shortest path wins, ties go to the faster run, further ties
to whichever ran first.  Unreachable results never win.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from algorithms.step import UNREACHABLE


logger = logging.getLogger(__name__)

NO_PATH = "No Path"


# ---------------------------------------------------------------------------
# SearchResult — one completed run
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchResult:
    algorithm_name:  str
    path_length:     int            # edges on the path, or UNREACHABLE
    elapsed_time_ms: float

    @property
    def reachable(self) -> bool:
        return self.path_length != UNREACHABLE

    @property
    def display_length(self) -> Union[int, str]:
        return self.path_length if self.reachable else NO_PATH

    def to_dict(self) -> dict:
        return {
            "algorithm":       self.algorithm_name,
            "path_length":     self.path_length if self.reachable else None,
            "reachable":       self.reachable,
            "elapsed_time_ms": self.elapsed_time_ms,
        }


# ---------------------------------------------------------------------------
# ComparisonResult — what the results display renders
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    ranked:    List[SearchResult] = field(default_factory=list)
    best_name: Optional[str]      = None

    def to_dict(self) -> dict:
        return {
            "ranked": [r.to_dict() for r in self.ranked],
            "best":   self.best_name,
        }


# ---------------------------------------------------------------------------
# ResultRecorder
# ---------------------------------------------------------------------------
class ResultRecorder:
    """Append-only, insertion-ordered set of SearchResults."""

    def __init__(self):
        self._results: List[SearchResult] = []

    def add_result(self, name: str, length: int, time_ms: float) -> SearchResult:
        result = SearchResult(name, length, time_ms)
        self._results.append(result)
        logger.debug("Recorded %s: length=%s, %.2f ms", name, result.display_length, time_ms)
        return result

    @property
    def results(self) -> Tuple[SearchResult, ...]:
        return tuple(self._results)

    def best(self) -> Optional[SearchResult]:
        """Shortest reachable path, ties broken by time; None if nothing reached End."""
        best: Optional[SearchResult] = None
        for r in self._results:
            if not r.reachable:
                continue
            if best is None or (r.path_length, r.elapsed_time_ms) < (best.path_length, best.elapsed_time_ms):
                best = r
        return best

    def ranked(self) -> List[SearchResult]:
        """Reachable results best-first, then unreachable ones in run order."""
        reachable = [r for r in self._results if r.reachable]
        reachable.sort(key=lambda r: (r.path_length, r.elapsed_time_ms))
        return reachable + [r for r in self._results if not r.reachable]

    def table(self) -> List[list]:
        """Rows of [name, length or "No Path", time_ms] in run order."""
        return [[r.algorithm_name, r.display_length, r.elapsed_time_ms] for r in self._results]

    def __len__(self) -> int:
        return len(self._results)


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(recorder: ResultRecorder) -> ComparisonResult:
    """Rank a finished recorder and name the winner."""
    best = recorder.best()
    return ComparisonResult(
        ranked=recorder.ranked(),
        best_name=best.algorithm_name if best else None,
    )
