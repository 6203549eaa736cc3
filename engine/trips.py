"""
trips.py — Trail Synthesis
===========================
Turns the nodes a search step touched into time-stamped trail segments
for a trips-style map layer, then walks parent links backwards from the
end node to lay down the final route.

Phases:
    EXPLORING  →  (search finished)                  →  TRACING
    TRACING    →  (cursor at start, play-head caught up) →  DONE

Every segment starts where the previous one ended on the synthetic
timeline (`timer`), so a renderer that shows segments with
`timestamps[0] <= play_head` replays the search in discovery order.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from config import TIME_SCALE
from graph import Node
from engine.state import PathfindingState

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class TripPhase(Enum):
    EXPLORING = "exploring"
    TRACING   = "tracing"
    DONE      = "done"


@dataclass(frozen=True)
class TrailSegment:
    """
    Attributes:
        path       : ((lon, lat) from, (lon, lat) to)
        timestamps : (start, end) on the animation timeline, ms
        color      : Palette key: "path" while exploring, "route" for the result.
    """

    path:       Tuple[Point, Point]
    timestamps: Tuple[float, float]
    color:      str = "path"

    def to_dict(self) -> dict:
        return {
            "path":       [list(self.path[0]), list(self.path[1])],
            "timestamps": list(self.timestamps),
            "color":      self.color,
        }


class TripSynthesizer:
    """
    Attributes:
        search     : The orchestrator being animated.
        segments   : Every segment emitted so far, in timeline order.
        timer      : End of the synthetic timeline (ms).
        phase      : Current TripPhase.
        time_scale : ms of animation per degree of segment length.
    """

    def __init__(self, search: PathfindingState, time_scale: float = TIME_SCALE):
        self.search:     PathfindingState = search
        self.time_scale: float            = time_scale
        self.clear()

    def clear(self) -> None:
        self.segments: List[TrailSegment] = []
        self.timer:    float              = 0.0
        self.phase:    TripPhase          = TripPhase.EXPLORING
        self._cursor:  Optional[str]      = None

    def rewind(self) -> None:
        """Let a finished trail be replayed: DONE waits for the play-head again."""
        if self.phase is TripPhase.DONE:
            self.phase = TripPhase.TRACING

    # ------------------------------------------------------------------
    # Segment emission
    # ------------------------------------------------------------------
    def add_segment(
        self,
        node: Optional[Node],
        referer: Optional[Node],
        color: str = "path",
        multiplier: float = 1.0,
    ) -> Optional[TrailSegment]:
        """Append referer → node.  Missing endpoints emit nothing."""
        if node is None or referer is None:
            return None
        duration = node.planar_distance_to(referer) * self.time_scale * multiplier
        segment = TrailSegment(
            path=(referer.position, node.position),
            timestamps=(self.timer, self.timer + duration),
            color=color,
        )
        self.segments.append(segment)
        self.timer += duration
        return segment

    # ------------------------------------------------------------------
    # One animation step
    # ------------------------------------------------------------------
    def step(self, play_head: float, route_multiplier: float = 1.0) -> TripPhase:
        """
        Advance the search once (while exploring) and/or lay one route
        segment (while tracing).

        Args:
            play_head        : Current animation time; DONE is only reached
                               once it has caught up with `timer`.
            route_multiplier : Slow-down applied to route segments.
        """
        if self.phase is TripPhase.DONE:
            return self.phase

        if self.phase is TripPhase.EXPLORING:
            for node in self.search.next_step():
                self.add_segment(node, self.search.get_node(node.referer))
            if self.search.finished:
                self.phase = TripPhase.TRACING
                self._cursor = self.search.end_node_id
                logger.debug("Exploration done after %d segments, tracing route", len(self.segments))

        if self.phase is TripPhase.TRACING:
            cursor = self.search.get_node(self._cursor)
            parent = self.search.get_node(cursor.parent) if cursor else None
            if parent is not None:
                self.add_segment(cursor, parent, "route", route_multiplier)
                self._cursor = parent.id
            elif play_head >= self.timer:
                self.phase = TripPhase.DONE
                logger.info("Trail complete: %d segments, %.0f ms", len(self.segments), self.timer)

        return self.phase

    # ------------------------------------------------------------------
    # Read-only helpers
    # ------------------------------------------------------------------
    @property
    def route_segments(self) -> List[TrailSegment]:
        return [s for s in self.segments if s.color == "route"]

    def visible_segments(self, play_head: float) -> List[TrailSegment]:
        return [s for s in self.segments if s.timestamps[0] <= play_head]
