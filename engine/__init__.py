"""
engine/
-------
Playback, recording & session layer.

    from engine import StepDriver, ResultRecorder, MazeSession, compare
"""

from engine.stepper  import StepDriver, DriverState, CancelToken, PACING_PRESETS
from engine.recorder import SearchResult, ResultRecorder, ComparisonResult, compare
from engine.session  import MazeSession, RUN_ALL

__all__ = [
    "StepDriver",
    "DriverState",
    "CancelToken",
    "PACING_PRESETS",
    "SearchResult",
    "ResultRecorder",
    "ComparisonResult",
    "compare",
    "MazeSession",
    "RUN_ALL",
]
