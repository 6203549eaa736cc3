"""
node.py — Graph Node
=====================
One intersection of the street graph.

Design decisions:
  - Two coordinate pairs.  `x` / `y` are the display pair (what the map
    marker shows), `longitude` / `latitude` the computation pair used for
    distances and trail geometry.  They are usually identical but the
    graph supplier is free to snap one of them.
  - `parent` and `referer` are node-id strings, NOT Node references.
    The Graph owns every Node; ids keep the search tree acyclic in memory
    and the node serialisable.
  - `edges` holds edge ids.  Neighbour resolution goes through the Graph.
"""

import math
from typing import Optional, Set


class Node:
    """
    Attributes:
        id                  : Unique identifier (OSM id as a string, or user-supplied).
        x, y                : Display coordinates (longitude, latitude).
        longitude, latitude : Computation coordinates.
        edges               : Ids of incident edges.
        visited             : Expanded by the current run.  Only reset() clears it.
        distance_from_start : Cheapest known cost from the start node (inf until reached).
        parent              : Node id the cheapest known path arrives from.
        referer             : Node id whose edge was last painted towards this node.
    """

    __slots__ = (
        "id", "x", "y", "longitude", "latitude", "edges",
        "visited", "distance_from_start", "parent", "referer",
    )

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        longitude: Optional[float] = None,
        latitude: Optional[float] = None,
    ):
        self.id:        str      = str(node_id)
        self.x:         float    = x
        self.y:         float    = y
        self.longitude: float    = x if longitude is None else longitude
        self.latitude:  float    = y if latitude is None else latitude
        self.edges:     Set[str] = set()
        self.reset()

    # ------------------------------------------------------------------
    # Run state
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Wipe search state back to defaults between runs.  Edges stay."""
        self.visited:             bool          = False
        self.distance_from_start: float         = math.inf
        self.parent:              Optional[str] = None
        self.referer:             Optional[str] = None

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def position(self):
        """(longitude, latitude), the order map layers expect."""
        return (self.longitude, self.latitude)

    def planar_distance_to(self, other: "Node") -> float:
        """Straight-line distance in degrees.  Drives animation timing only."""
        return math.hypot(self.longitude - other.longitude, self.latitude - other.latitude)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":        self.id,
            "x":         self.x,
            "y":         self.y,
            "longitude": self.longitude,
            "latitude":  self.latitude,
        }

    def state_dict(self) -> dict:
        distance = self.distance_from_start
        return {
            "id":                  self.id,
            "visited":             self.visited,
            "distance_from_start": None if math.isinf(distance) else distance,
            "parent":              self.parent,
            "referer":             self.referer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            node_id=data["id"],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            longitude=data.get("longitude"),
            latitude=data.get("latitude"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"Node(id={self.id}, pos=({self.longitude:.5f},{self.latitude:.5f}), "
            f"visited={self.visited}, dist={self.distance_from_start})"
        )

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
