"""
engine/
-------
Search orchestration, trail synthesis & playback layer.

    from engine import PathfindingState, Stepper, Recorder, compare
"""

from engine.state    import PathfindingState, GraphSupplyError
from engine.trips    import TripSynthesizer, TripPhase, TrailSegment
from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics, SearchResult, ComparisonResult, compare

__all__ = [
    "PathfindingState",
    "GraphSupplyError",
    "TripSynthesizer",
    "TripPhase",
    "TrailSegment",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "SearchResult",
    "ComparisonResult",
    "compare",
]
