"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every search variant the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, resolve_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, cls, pseudocode, tags, …),
        …
    }

Adding a variant is: write a class satisfying PathfindingAlgorithm, add
one entry here.  Unknown keys resolve to DEFAULT_ALGORITHM.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional

from config import DEFAULT_ALGORITHM
from algorithms.contract import PathfindingAlgorithm
from algorithms.dijkstra import Dijkstra,     PSEUDOCODE as _dij_pc
from algorithms.astar    import AStar,        PSEUDOCODE as _ast_pc
from algorithms.bfs      import BreadthFirst, PSEUDOCODE as _bfs_pc


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                       # registry key, e.g. "dijkstra"
    label:            str                       # human label
    cls:              Callable[..., PathfindingAlgorithm]
    pseudocode:       List[str]
    tags:             List[str] = field(default_factory=list)
    has_heuristic:    bool      = False
    complexity_time:  str       = ""
    description:      str       = ""

    def to_dict(self) -> dict:
        return {
            "key":             self.key,
            "label":           self.label,
            "tags":            list(self.tags),
            "has_heuristic":   self.has_heuristic,
            "complexity_time": self.complexity_time,
            "description":     self.description,
            "pseudocode":      list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", cls=Dijkstra, pseudocode=_dij_pc,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)",
        description="Greedily expands the closest node. Optimal for non-negative weights.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", cls=AStar, pseudocode=_ast_pc,
        tags=["weighted", "shortest-path", "heuristic"],
        has_heuristic=True,
        complexity_time="O((V + E) log V)",
        description="Dijkstra steered by straight-line distance to the target.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", cls=BreadthFirst, pseudocode=_bfs_pc,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)",
        description="Explores layer-by-layer. Fewest intersections, not shortest distance.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def resolve_algorithm(key: Optional[str]) -> AlgoInfo:
    """Return AlgoInfo by key, falling back to the default variant."""
    return REGISTRY.get(key or "", REGISTRY[DEFAULT_ALGORITHM])


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "PathfindingAlgorithm",
    "REGISTRY",
    "DEFAULT_ALGORITHM",
    "get_algorithm",
    "resolve_algorithm",
    "list_algorithms",
]
