"""
stepper.py — Step Driver (Animation State Machine)
===================================================
The StepDriver pulls Steps out of an algorithm generator, publishes the
grid after each one and pauses so the observer can follow along.

State machine:
    IDLE     →  drive()                   →  RUNNING
    RUNNING  →  generator returns         →  COMPLETED
    RUNNING  →  CancelToken.cancel()      →  CANCELLED
    any      →  reset()                   →  IDLE

Pausing goes through an injected `delay(seconds) -> bool`.  The default
is the CancelToken's wait, which wakes up early when the run is
cancelled.  Tests pass a no-op delay so nothing depends on the clock.

Thread safety:
  One driver drives one generator on one thread.  Only the CancelToken
  is meant to be touched from another thread.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from grid import Grid, CellState, Position
from algorithms.step import Step, SearchGenerator, PATH, SEARCH


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class DriverState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Pacing presets (seconds per step: frontier, reconstruction)
# ---------------------------------------------------------------------------
PACING_PRESETS: Dict[str, Dict[str, float]] = {
    "slow":    {SEARCH: 0.05,  PATH: 0.10},
    "medium":  {SEARCH: 0.01,  PATH: 0.02},
    "fast":    {SEARCH: 0.002, PATH: 0.005},
    "instant": {SEARCH: 0.0,   PATH: 0.0},
}
DEFAULT_SPEED = "medium"


Snapshot = Dict[Position, CellState]
StepListener = Callable[[Snapshot, Step], None]


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------
class CancelToken:
    """A one-shot cancellation flag with a cooperative, interruptible sleep."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def sleep(self, seconds: float) -> bool:
        """Pause up to `seconds`.  Returns False if cancelled meanwhile."""
        if seconds > 0:
            self._event.wait(seconds)
        return not self._event.is_set()


# ---------------------------------------------------------------------------
# StepDriver
# ---------------------------------------------------------------------------
class StepDriver:
    """
    Attributes:
        grid     : Grid the generator is mutating.
        state    : Current DriverState.
        pacing   : {phase: seconds} between published steps.
        on_step  : Optional callback(snapshot, step) fired after every step.
        markers  : (start, end) positions overlaid on snapshots.
        steps    : Number of steps published in the current/last drive.
    """

    def __init__(
        self,
        grid: Grid,
        token: Optional[CancelToken] = None,
        on_step: Optional[StepListener] = None,
        delay: Optional[Callable[[float], bool]] = None,
        speed: str = DEFAULT_SPEED,
        markers: Tuple[Optional[Position], Optional[Position]] = (None, None),
    ):
        self.grid:    Grid                   = grid
        self.token:   CancelToken            = token or CancelToken()
        self.on_step: Optional[StepListener] = on_step
        self.delay:   Callable[[float], bool] = delay or self.token.sleep
        self.pacing:  Dict[str, float]       = PACING_PRESETS.get(speed, PACING_PRESETS[DEFAULT_SPEED])
        self.markers                         = markers
        self.state:   DriverState            = DriverState.IDLE
        self.steps:   int                    = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def drive(self, generator: SearchGenerator) -> Optional[int]:
        """
        Run `generator` to the end, publishing and pausing after each Step.

        Returns the path length (or UNREACHABLE) on completion, None if
        the run was cancelled.
        """
        self.state = DriverState.RUNNING
        self.steps = 0
        try:
            while True:
                if self.token.cancelled:
                    return self._cancel(generator)
                try:
                    step = next(generator)
                except StopIteration as done:
                    self.state = DriverState.COMPLETED
                    return done.value

                self.steps += 1
                self._publish(step)
                if not self.delay(self.pacing.get(step.phase, 0.0)) or self.token.cancelled:
                    return self._cancel(generator)
        except Exception:
            generator.close()
            self.state = DriverState.IDLE
            raise

    def reset(self) -> None:
        self.state = DriverState.IDLE
        self.steps = 0

    def set_speed(self, preset: str) -> None:
        self.pacing = PACING_PRESETS.get(preset, PACING_PRESETS[DEFAULT_SPEED])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.state == DriverState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.state in (DriverState.COMPLETED, DriverState.CANCELLED)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _publish(self, step: Step) -> None:
        if self.on_step is not None:
            start, end = self.markers
            self.on_step(self.grid.snapshot(start, end), step)

    def _cancel(self, generator: SearchGenerator) -> None:
        generator.close()
        self.state = DriverState.CANCELLED
        logger.info("Run cancelled after %d step(s)", self.steps)
        return None
