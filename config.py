"""
config.py — Application Settings
=================================
Defaults the map view starts with, the colour palette the trail layer
reads, and the per-run Settings (algorithm, speed, radius).

Settings are read once when a search starts; changing them mid-run has
no effect until the next start().
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple


# ---------------------------------------------------------------------------
# Run defaults
# ---------------------------------------------------------------------------
DEFAULT_ALGORITHM = "dijkstra"
DEFAULT_SPEED     = 5        # search advances per frame
DEFAULT_RADIUS_KM = 4        # selection circle handed to the graph supplier

# animation time (ms) per degree of planar segment length
TIME_SCALE = 50000


# ---------------------------------------------------------------------------
# Map presentation
# ---------------------------------------------------------------------------
INITIAL_VIEW_STATE: Dict[str, float] = {
    "longitude": 78.0322,
    "latitude":  30.3165,
    "zoom":      13,
    "pitch":     0,
    "bearing":   0,
}

INITIAL_COLORS: Dict[str, Tuple[int, ...]] = {
    "startNodeFill":   (70, 183, 128),
    "startNodeBorder": (0, 0, 0),
    "endNodeFill":     (152, 4, 12),
    "endNodeBorder":   (0, 0, 0),
    "path":            (255, 223, 0, 200),     # exploration trail
    "route":           (255, 0, 0, 220),       # final route
}


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
@dataclass
class Settings:
    """
    Attributes:
        algorithm : Registry key.  Unknown keys fall back to the default variant.
        speed     : Search advances per frame (integer >= 1).
        radius    : Search locality in km, only used by the graph supplier.
    """

    algorithm: str   = DEFAULT_ALGORITHM
    speed:     int   = DEFAULT_SPEED
    radius:    float = DEFAULT_RADIUS_KM

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if isinstance(self.speed, bool) or not isinstance(self.speed, int):
            raise ValueError(f"speed must be an integer, got {self.speed!r}")
        if self.speed < 1:
            raise ValueError(f"speed must be >= 1, got {self.speed}")
        if isinstance(self.radius, bool) or not isinstance(self.radius, (int, float)):
            raise ValueError(f"radius must be a number, got {self.radius!r}")
        if self.radius <= 0:
            raise ValueError(f"radius must be > 0, got {self.radius}")
        if not isinstance(self.algorithm, str):
            raise ValueError(f"algorithm must be a string, got {self.algorithm!r}")

    @property
    def route_multiplier(self) -> float:
        """Route segments play slower than the exploration trail."""
        return max(math.log2(self.speed), 1.0)

    def updated(self, **changes: Any) -> "Settings":
        data = asdict(self)
        data.update({k: v for k, v in changes.items() if v is not None})
        return Settings(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        return cls(
            algorithm=data.get("algorithm", DEFAULT_ALGORITHM),
            speed=data.get("speed", DEFAULT_SPEED),
            radius=data.get("radius", DEFAULT_RADIUS_KM),
        )
