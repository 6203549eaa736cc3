"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import haversine_km, nearest_node
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph
from graph.geo   import haversine_km, nearest_node

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "haversine_km",
    "nearest_node",
]
