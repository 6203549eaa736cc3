"""
geo.py — Geographic helpers
============================
Great-circle distance for edge weights and the A* heuristic, plus the
nearest-node lookup a map click is resolved with.
"""

import math
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from graph.graph import Graph
    from graph.node import Node


EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)
    a = (
        math.sin(dphi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    )
    return 2.0 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(max(0.0, a))))


def node_distance_km(a: "Node", b: "Node") -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def nearest_node(
    graph: "Graph",
    lat: float,
    lon: float,
    max_km: Optional[float] = None,
) -> Optional["Node"]:
    """
    Linear scan for the node closest to (lat, lon).

    Returns None for an empty graph, or when the closest node is further
    than `max_km` away.
    """
    best: Optional["Node"] = None
    best_km = math.inf
    for node in graph.nodes.values():
        d = haversine_km(lat, lon, node.latitude, node.longitude)
        if d < best_km:
            best, best_km = node, d
    if best is None:
        return None
    if max_km is not None and best_km > max_km:
        return None
    return best
