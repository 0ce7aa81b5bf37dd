"""
engine/
-------
Playback & run-session layer.

    from engine import Stepper, DijkstraRun, FloydWarshallRun, compare_all_pairs
"""

from engine.stepper import Stepper, StepperState, SPEED_PRESETS
from engine.runs    import (
    MODES,
    AllPairsRun,
    ComparisonResult,
    DijkstraRun,
    FloydWarshallRun,
    RunMetrics,
    compare_all_pairs,
)

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "MODES",
    "DijkstraRun",
    "FloydWarshallRun",
    "AllPairsRun",
    "RunMetrics",
    "ComparisonResult",
    "compare_all_pairs",
]
