"""
recorder.py — Run Results, Recorder & Analytics
=================================================
Headless counterpart of the Stepper: runs a search to completion without
animating it, and turns the finished state into a result and metrics.

Usage:
    rec = Recorder(state)
    metrics = rec.run("dijkstra")     # exhausts the search
    result  = rec.result              # SearchResult(found, path, distance)
    rec.export()                      # serialisable snapshot

Comparison Mode:
    Run two Recorders on the SAME state one after the other (each run
    resets the graph first), then compare(m1, m2) → ComparisonResult.
"""

import logging
import math
import time
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

from algorithms import resolve_algorithm
from engine.state import PathfindingState

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# SearchResult: explicit found / not found
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchResult:
    found:    bool        = False
    path:     List[str]   = field(default_factory=list)    # start … end node ids
    distance: float       = math.inf

    @classmethod
    def from_state(cls, state: PathfindingState) -> "SearchResult":
        """Follow parent links back from the end node of a finished run."""
        end = state.end_node
        if not state.finished or end is None or not end.visited:
            return cls()

        path: List[str] = []
        seen = set()
        cur = end
        while cur is not None:
            if cur.id in seen:
                raise RuntimeError(f"Parent links form a cycle at node {cur.id}")
            seen.add(cur.id)
            path.append(cur.id)
            cur = state.get_node(cur.parent)
        path.reverse()
        return cls(found=True, path=path, distance=end.distance_from_start)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found":    self.found,
            "path":     list(self.path),
            "distance": self.distance if self.found else None,
        }


# ---------------------------------------------------------------------------
# Metrics dataclass: what the analytics card renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    source:          str   = ""
    target:          str   = ""
    nodes_visited:   int   = 0
    edges_visited:   int   = 0
    total_steps:     int   = 0          # number of next_step() calls that did work
    path_length:     int   = 0          # number of edges on the route
    path_cost:       float = 0.0        # total weight of the route
    path_found:      bool  = False
    wall_time_ms:    float = 0.0


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    winner_nodes:  str = ""   # which algo visited fewer nodes
    winner_steps:  str = ""
    winner_path:   str = ""   # which algo found the cheaper route

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        state    : Orchestrator the run happens on.
        steps    : Touched node ids for every step, in order.
        metrics  : RunMetrics (available after run()).
        result   : SearchResult (available after run()).
    """

    def __init__(self, state: PathfindingState):
        self.state:   PathfindingState       = state
        self.steps:   List[List[str]]        = []
        self.metrics: Optional[RunMetrics]   = None
        self.result:  Optional[SearchResult] = None

    def run(self, algo_key: Optional[str] = None) -> RunMetrics:
        """Start a search and exhaust it, recording every step."""
        self.steps = []
        started = time.monotonic()

        self.state.start(algo_key)
        while not self.state.finished:
            touched = self.state.next_step()
            if touched:
                self.steps.append([n.id for n in touched])

        wall_ms = (time.monotonic() - started) * 1000
        self.result  = SearchResult.from_state(self.state)
        self.metrics = self._compute_metrics(wall_ms)
        logger.info("Recorded %s: %d steps, found=%s",
                    self.metrics.algo_key, self.metrics.total_steps, self.metrics.path_found)
        return self.metrics

    def export(self) -> Dict[str, Any]:
        return {
            "metrics": asdict(self.metrics) if self.metrics else {},
            "result":  self.result.to_dict() if self.result else {},
            "steps":   [list(s) for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        graph  = self.state.graph
        info   = resolve_algorithm(self.state.algorithm_key)
        result = self.result or SearchResult()

        path_cost = 0.0
        for a, b in zip(result.path, result.path[1:]):
            e = graph.get_edge_between(a, b)
            if e:
                path_cost += e.weight

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            source=graph.start_node_id or "",
            target=self.state.end_node_id or "",
            nodes_visited=sum(1 for n in graph.nodes.values() if n.visited),
            edges_visited=sum(1 for e in graph.edges.values() if e.visited),
            total_steps=len(self.steps),
            path_length=len(result.path) - 1 if len(result.path) > 1 else 0,
            path_cost=path_cost,
            path_found=result.found,
            wall_time_ms=round(wall_ms, 2),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunMetrics, right: RunMetrics) -> ComparisonResult:
    """Given two RunMetrics, produce a ComparisonResult."""

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    # an unfound route never wins on cost
    l_cost = left.path_cost if left.path_found else math.inf
    r_cost = right.path_cost if right.path_found else math.inf

    return ComparisonResult(
        left=left,
        right=right,
        winner_nodes=winner(left.nodes_visited, right.nodes_visited, left.algo_label, right.algo_label),
        winner_steps=winner(left.total_steps, right.total_steps, left.algo_label, right.algo_label),
        winner_path=winner(l_cost, r_cost, left.algo_label, right.algo_label),
    )
