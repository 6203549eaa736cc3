"""
edge.py — Graph Edge
====================
An undirected street segment between two nodes.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
  - `weight` is the geographic length of the segment (km when built by
    Graph.from_overpass).  Searches only ever add it, so it must be >= 0.
  - `visited` is pure visualisation state: an edge is painted once the
    search has travelled along it.
"""

from typing import Optional
import uuid


class Edge:
    """
    Attributes:
        id       : Unique identifier.
        source   : ID of one endpoint.
        target   : ID of the other endpoint.
        weight   : Non-negative traversal cost.
        visited  : Painted by the current run.
    """

    __slots__ = ("id", "source", "target", "weight", "visited")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        edge_id: Optional[str] = None,
    ):
        if weight < 0:
            raise ValueError(f"Edge {source}-{target} has negative weight {weight}")
        self.id:      str   = edge_id or str(uuid.uuid4())[:8]
        self.source:  str   = str(source)
        self.target:  str   = str(target)
        self.weight:  float = weight
        self.visited: bool  = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.visited = False

    def get_other_node(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            weight=data.get("weight", 1.0),
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight}, visited={self.visited})"
