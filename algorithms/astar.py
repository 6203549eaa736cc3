"""
astar.py — A* Search
=====================
Dijkstra's bookkeeping with the open set ordered by

    f(n) = distance_from_start(n) + haversine_km(n, target)

Edge weights built by Graph.from_overpass are haversine lengths, so the
heuristic never overestimates and the route stays optimal.  Graphs with
weights in other units (hand-built test graphs) should use Dijkstra.
"""

from typing import List, Optional

from graph import Graph, Node
from graph.geo import node_distance_km
from algorithms.frontier import PriorityFrontier, expand


PSEUDOCODE: List[str] = [
    "def AStar(graph, source, target, h):",        # 0
    "    g[source] ← 0",                           # 1
    "    open ← [(h(source), source)]",            # 2
    "    while open:",                             # 3
    "        node ← open.pop_min()",               # 4
    "        node.visited ← true",                 # 5
    "        if node == target: return path",      # 6
    "        for (nbr, w) in adj(node):",          # 7
    "            tentative_g ← g[node] + w",       # 8
    "            if tentative_g < g[nbr]:",        # 9
    "                parent[nbr] ← node",          # 10
    "                g[nbr] ← tentative_g",        # 11
    "                open.push((g[nbr] + h(nbr), nbr))",  # 12
    "    return NOT FOUND",                        # 13
]


class AStar:
    key = "astar"

    def __init__(self, graph: Graph):
        self.graph:    Graph          = graph
        self.finished: bool           = False
        self.end_node: Optional[Node] = None
        self._steps = None

    def start(self, start_node: Node, end_node: Node) -> None:
        self.finished = False
        self.end_node = end_node
        start_node.distance_from_start = 0.0

        h_cache = {}

        def f_score(node: Node) -> float:
            if node.id not in h_cache:
                h_cache[node.id] = node_distance_km(node, end_node)
            return node.distance_from_start + h_cache[node.id]

        frontier = PriorityFrontier(self.graph, key=f_score)
        frontier.push(start_node)
        self._steps = expand(self.graph, frontier, end_node)

    def next_step(self) -> List[Node]:
        if self.finished or self._steps is None:
            return []
        touched, done = next(self._steps, ([], True))
        if done:
            self.finished = True
            self._steps = None
        return touched
