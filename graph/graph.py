"""
graph.py — Graph Container & Importers
=======================================
Single source of truth for the street graph.  Algorithms, the search
orchestrator and the trip synthesizer all talk to this object.

Responsibilities:
  1. Arena of nodes & edges keyed by id     (add / get)
  2. Adjacency queries                      (neighbors, get_edge_between)
  3. Reset helper                           (wipe search state, keep structure)
  4. Serialisation round-trip               (to_dict / from_dict)
  5. Import from an Overpass JSON document  (from_overpass)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
  - The graph is undirected: street direction is not modelled.
  - Every other component holds ids or short-lived references; the Graph is
    the only owner.
"""

from typing import Dict, List, Tuple, Optional, Set

from graph.node import Node
from graph.edge import Edge
from graph.geo import haversine_km


class Graph:
    """
    Attributes:
        nodes          : {node_id: Node}
        edges          : {edge_id: Edge}
        start_node_id  : id of the designated start node (the map click)
        _adj           : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self, start_node_id: Optional[str] = None):
        self.nodes:         Dict[str, Node] = {}
        self.edges:         Dict[str, Edge] = {}
        self.start_node_id: Optional[str]   = start_node_id
        self._adj:          Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(
        self,
        node_id: str,
        x: float,
        y: float,
        longitude: Optional[float] = None,
        latitude: Optional[float] = None,
    ) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id, x=x, y=y, longitude=longitude, latitude=latitude))

    def get_node(self, node_id) -> Optional[Node]:
        if node_id is None:
            return None
        return self.nodes.get(str(node_id))

    @property
    def start_node(self) -> Optional[Node]:
        return self.get_node(self.start_node_id)

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        for end in (edge.source, edge.target):
            if end not in self.nodes:
                raise KeyError(f"Edge {edge.id} references unknown node '{end}'")
        self.edges[edge.id] = edge
        self._adj[edge.source].append((edge.target, edge.id))
        self._adj[edge.target].append((edge.source, edge.id))
        self.nodes[edge.source].edges.add(edge.id)
        self.nodes[edge.target].edges.add(edge.id)
        return edge

    def create_edge(
        self,
        source: str,
        target: str,
        weight: Optional[float] = None,
        edge_id: Optional[str] = None,
    ) -> Edge:
        """Weight defaults to the great-circle length between the endpoints (km)."""
        if weight is None:
            a, b = self.nodes[str(source)], self.nodes[str(target)]
            weight = haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
        return self.add_edge(Edge(source=source, target=target, weight=weight, edge_id=edge_id))

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """Lightest edge connecting a and b (parallel streets are allowed)."""
        best: Optional[Edge] = None
        for nbr, eid in self._adj.get(a, []):
            if nbr != b:
                continue
            e = self.edges[eid]
            if best is None or e.weight < best.weight:
                best = e
        return best

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbors(self, node_id: str) -> List[Tuple[Node, Edge]]:
        """Return [(neighbour, edge)] in insertion order."""
        return [(self.nodes[nbr], self.edges[eid]) for nbr, eid in self._adj.get(node_id, [])]

    # ==================================================================
    # RESET (keep structure, wipe search state)
    # ==================================================================
    def reset(self) -> None:
        for node in self.nodes.values():
            node.reset()
        for edge in self.edges.values():
            edge.reset()

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "start_node_id": self.start_node_id,
            "nodes":         [n.to_dict() for n in self.nodes.values()],
            "edges":         [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(start_node_id=data.get("start_node_id"))
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            if ed.get("weight") is None:
                g.create_edge(ed["source"], ed["target"], edge_id=ed.get("id"))
            else:
                g.add_edge(Edge.from_dict(ed))
        return g

    # ---------- Import from Overpass JSON ----------
    @classmethod
    def from_overpass(cls, data: dict, start_node_id) -> "Graph":
        """
        Build a street graph from an Overpass API response.

        Expected shape (the `out body;` JSON output):
            {"elements": [
                {"type": "node", "id": 1, "lat": 30.31, "lon": 78.03},
                {"type": "way",  "id": 9, "nodes": [1, 2, 3], "tags": {...}},
                …
            ]}

        Consecutive way members become undirected edges weighted by their
        haversine length in km.  Duplicate segments shared by two ways are
        added once.
        """
        start_id = str(start_node_id)
        g = cls(start_node_id=start_id)
        elements = data.get("elements", [])

        for el in elements:
            if el.get("type") != "node":
                continue
            lat, lon = float(el["lat"]), float(el["lon"])
            g.create_node(str(el["id"]), x=lon, y=lat)

        if start_id not in g.nodes:
            raise ValueError(f"Start node '{start_id}' is not part of the Overpass document")

        seen: Set[frozenset] = set()
        for el in elements:
            if el.get("type") != "way":
                continue
            members = [str(n) for n in el.get("nodes", [])]
            for a, b in zip(members, members[1:]):
                if a == b or a not in g.nodes or b not in g.nodes:
                    continue
                key = frozenset((a, b))
                if key in seen:
                    continue
                seen.add(key)
                g.create_edge(a, b)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, start={self.start_node_id})"
