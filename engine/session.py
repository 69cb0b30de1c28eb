"""
session.py — Maze Session
==========================
The one object the presentation layer talks to.  It owns the Grid, the
Start/End markers and the latest results, and it serialises access to
them: while a search is running every edit is refused.

Usage:
    s = MazeSession(seed=7)
    s.place_start(1, 1)
    s.place_end(28, 28)
    s.request_run("ALL")          # A*, BFS, DFS on a worker thread
    s.wait()
    s.last_comparison.best_name

Every input returns True if it was applied.  A refused input is a
no-op that leaves a message in `notice`; it never raises.
"""

import logging
import random
import threading
import time
from typing import Callable, List, Optional

from grid import Grid, ROWS, Position
from algorithms import COMPARISON_ORDER, AlgoInfo, get_algorithm
from algorithms.step import Step
from engine.stepper import (
    CancelToken, DEFAULT_SPEED, PACING_PRESETS, Snapshot, StepDriver, StepListener,
)
from engine.recorder import ComparisonResult, ResultRecorder, compare


logger = logging.getLogger(__name__)


DEFAULT_WALL_DENSITY = 0.35
BETWEEN_RUNS_PAUSE   = 0.3     # seconds between algorithms in a full comparison
RUN_ALL              = "ALL"

NOTICE_NEED_MARKERS = "Set Start and End first!"
NOTICE_BUSY         = "Search in progress"


class MazeSession:
    """
    Attributes:
        grid            : The owned Grid.
        start, end      : Marker positions, or None.
        wall_density    : Probability used by generate_walls().
        speed           : Pacing preset name for the StepDriver.
        notice          : Last user-visible message.
        recorder        : Results of the latest (possibly partial) run.
        last_comparison : Ranked results of the latest finished run.
        last_snapshot   : Grid view published with the latest Step.
        last_step       : The latest Step published.
    """

    def __init__(
        self,
        rows: int = ROWS,
        wall_density: float = DEFAULT_WALL_DENSITY,
        speed: str = DEFAULT_SPEED,
        seed: Optional[int] = None,
        generate_walls: bool = True,
        delay: Optional[Callable[[float], bool]] = None,
        between_runs: float = BETWEEN_RUNS_PAUSE,
        on_step: Optional[StepListener] = None,
    ):
        self.grid:         Grid               = Grid(rows)
        self.start:        Optional[Position] = None
        self.end:          Optional[Position] = None
        self.wall_density: float              = _clamp(wall_density)
        self.speed:        str                = speed if speed in PACING_PRESETS else DEFAULT_SPEED
        self.notice:       str                = ""

        self.recorder:        Optional[ResultRecorder]   = None
        self.last_comparison: Optional[ComparisonResult] = None
        self.last_snapshot:   Optional[Snapshot]         = None
        self.last_step:       Optional[Step]             = None
        self.driver:          Optional[StepDriver]       = None
        self.on_step:         Optional[StepListener]     = on_step

        self._rng          = random.Random(seed)
        self._delay        = delay
        self._between_runs = between_runs
        self._lock         = threading.Lock()
        self._running      = False
        self._token:  Optional[CancelToken]      = None
        self._worker: Optional[threading.Thread] = None

        if generate_walls:
            self.grid.randomize_walls(self.wall_density, self._rng)

    # ==================================================================
    # STATUS
    # ==================================================================
    @property
    def running(self) -> bool:
        return self._running

    def snapshot(self) -> Snapshot:
        return self.grid.snapshot(self.start, self.end)

    def to_rows(self) -> List[str]:
        return self.grid.to_rows(self.start, self.end)

    def status(self) -> dict:
        return {
            "running":      self._running,
            "notice":       self.notice,
            "start":        list(self.start) if self.start else None,
            "end":          list(self.end) if self.end else None,
            "rows":         self.grid.rows,
            "wall_density": self.wall_density,
            "speed":        self.speed,
            "steps":        self.driver.steps if self.driver else 0,
        }

    # ==================================================================
    # GRID EDITS
    # ==================================================================
    def place_start(self, row: int, col: int) -> bool:
        with self._lock:
            if not self._check_placement(row, col, self.start, self.end, "Start"):
                return False
            self.start = (row, col)
            self.grid.node(row, col).set_start()
            return self._accept()

    def place_end(self, row: int, col: int) -> bool:
        with self._lock:
            if not self._check_placement(row, col, self.end, self.start, "End"):
                return False
            self.end = (row, col)
            self.grid.node(row, col).set_end()
            return self._accept()

    def set_wall(self, row: int, col: int, wall: bool) -> bool:
        with self._lock:
            if not self._check_edit(row, col):
                return False
            if self.grid.is_border(row, col):
                return self._reject("Border cells are always walls")
            if (row, col) in (self.start, self.end):
                return self._reject("Start and End can't be walls")
            self.grid.set_wall(self.grid.node(row, col), wall)
            return self._accept()

    def clear_cell(self, row: int, col: int) -> bool:
        """Drop a Start/End marker or an interior wall at (row, col)."""
        with self._lock:
            if not self._check_edit(row, col):
                return False
            pos = (row, col)
            node = self.grid.node(row, col)
            if pos == self.start:
                self.start = None
                node.reset()
            elif pos == self.end:
                self.end = None
                node.reset()
            elif node.is_wall and not self.grid.is_border(row, col):
                self.grid.set_wall(node, False)
            else:
                node.reset()
            return self._accept()

    def set_wall_density(self, density: float) -> bool:
        self.wall_density = _clamp(density)
        return self._accept(f"Wall Density: {self.wall_density:.2f}")

    def generate_walls(self) -> bool:
        """Re-roll interior walls at the current density, sparing the markers."""
        with self._lock:
            if self._running:
                return self._reject(NOTICE_BUSY)
            markers = [p for p in (self.start, self.end) if p is not None]
            self.grid.randomize_walls(self.wall_density, self._rng, keep=markers)
            self._apply_markers()
            return self._accept()

    def set_speed(self, preset: str) -> bool:
        if preset not in PACING_PRESETS:
            return self._reject(f"Unknown speed '{preset}'")
        self.speed = preset
        if self.driver is not None:
            self.driver.set_speed(preset)
        return self._accept()

    # ==================================================================
    # RUN / CLEAR
    # ==================================================================
    def request_run(self, name: str = RUN_ALL, background: bool = True) -> bool:
        """
        Start one algorithm (registry key or name) or RUN_ALL.

        With background=True the search runs on a worker thread; call
        wait() to block until it finishes.
        """
        if name == RUN_ALL:
            infos = [get_algorithm(key) for key in COMPARISON_ORDER]
        else:
            info = get_algorithm(name)
            if info is None:
                return self._reject(f"Unknown algorithm '{name}'")
            infos = [info]

        with self._lock:
            if self._running:
                return self._reject(NOTICE_BUSY)
            if self.start is None or self.end is None:
                return self._reject(NOTICE_NEED_MARKERS)

            token = CancelToken()
            self._running = True
            self._token = token
            self.notice = ""
            if background:
                self._worker = threading.Thread(
                    target=self._run, args=(infos, token), name="maze-search", daemon=True
                )
                self._worker.start()

        if not background:
            self._run(infos, token)
        return True

    def cancel(self) -> None:
        """Abort the active run, if any, and wait for the worker to stop."""
        with self._lock:
            token, worker = self._token, self._worker
        if token is not None:
            token.cancel()
        if worker is not None and worker is not threading.current_thread():
            worker.join()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the worker finishes.  Returns False on timeout."""
        worker = self._worker
        if worker is not None:
            worker.join(timeout)
            return not worker.is_alive()
        return True

    def request_clear(self) -> bool:
        """
        Cancel any run, drop the markers and every interior wall, then
        roll fresh walls at the current density.
        """
        while True:
            self.cancel()
            with self._lock:
                # a run requested after cancel() returned is cancelled on the next pass;
                # the worker clearing from its own step callback has already cancelled itself
                if self._running and self._worker is not threading.current_thread():
                    continue
                self.grid.clear()
                self.grid.randomize_walls(self.wall_density, self._rng)
                self.start = self.end = None
                self.last_snapshot = None
                self.last_step = None
                return self._accept()


    # ==================================================================
    # INTERNAL
    # ==================================================================
    def _run(self, infos: List[AlgoInfo], token: CancelToken) -> None:
        recorder = ResultRecorder()
        self.recorder = recorder
        try:
            for i, info in enumerate(infos):
                if i and not self._pause(token, self._between_runs):
                    break
                outcome = self._run_one(info, token)
                if outcome is None:
                    break
                recorder.add_result(info.name, *outcome)

            if token.cancelled:
                self.notice = "Run cancelled"
            else:
                self.last_comparison = compare(recorder)
                logger.info("Comparison finished, best: %s", self.last_comparison.best_name)
        except Exception:
            logger.exception("Search worker failed")
            self.notice = "Search failed"
        finally:
            with self._lock:
                self._running = False
                self._token = None

    def _run_one(self, info: AlgoInfo, token: CancelToken):
        """Drive one algorithm.  Returns (length, ms) or None if cancelled."""
        self.grid.reset()
        self._apply_markers()
        start, end = self.grid.at(self.start), self.grid.at(self.end)

        driver = StepDriver(
            self.grid,
            token=token,
            on_step=self._publish,
            delay=self._delay,
            speed=self.speed,
            markers=(self.start, self.end),
        )
        self.driver = driver

        logger.info("Running %s from %s to %s", info.name, self.start, self.end)
        began = time.monotonic()
        length = driver.drive(info.fn(self.grid, start, end))
        elapsed_ms = round((time.monotonic() - began) * 1000, 2)

        if length is None:
            return None
        logger.info("%s finished in %.2f ms after %d step(s)", info.name, elapsed_ms, driver.steps)
        return length, elapsed_ms

    def _pause(self, token: CancelToken, seconds: float) -> bool:
        if self._delay is not None:
            return self._delay(seconds) and not token.cancelled
        return token.sleep(seconds)

    def _publish(self, snapshot: Snapshot, step: Step) -> None:
        self.last_snapshot = snapshot
        self.last_step = step
        if self.on_step is not None:
            self.on_step(snapshot, step)

    def _apply_markers(self) -> None:
        if self.start is not None:
            self.grid.at(self.start).set_start()
        if self.end is not None:
            self.grid.at(self.end).set_end()

    def _check_edit(self, row: int, col: int) -> bool:
        if self._running:
            return self._reject(NOTICE_BUSY)
        if not self.grid.in_bounds(row, col):
            return self._reject(f"({row}, {col}) is out of bounds")
        return True

    def _check_placement(
        self, row: int, col: int, own: Optional[Position], other: Optional[Position], role: str,
    ) -> bool:
        """Caller holds the lock.  A role already placed must be cleared first."""
        if not self._check_edit(row, col):
            return False
        if own is not None:
            return self._reject(f"{role} is already placed")
        if self.grid.node(row, col).is_wall:
            return self._reject(f"({row}, {col}) is a wall")
        if (row, col) == other:
            return self._reject("Start and End must differ")
        return True

    def _reject(self, message: str) -> bool:
        self.notice = message
        logger.debug("Rejected input: %s", message)
        return False

    def _accept(self, message: str = "") -> bool:
        self.notice = message
        return True


def _clamp(density: float) -> float:
    return max(0.0, min(1.0, float(density)))
