"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Stepwise Dijkstra over the street graph.

Each next_step():
  1. Pop the minimum-distance node from the open set  →  visited
  2. Paint the edge it was discovered through
  3. Target popped  →  finished, return [target]
  4. Repaint edges towards already visited neighbours
  5. Relax every unvisited neighbour
  6. Return [repainted…, current]

Open set is a min-heap keyed on distance_from_start.  Equal distances pop
in discovery order, so on uniform-weight streets the frontier grows the
same way a FIFO queue would.

Correctness note: Dijkstra requires non-negative weights.  Edge refuses
to be built with a negative one.
"""

from typing import List, Optional

from graph import Graph, Node
from algorithms.frontier import PriorityFrontier, expand


PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target):",        # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    open ← [source]",                         # 3
    "    while open is not empty:",                 # 4
    "        node ← open.pop_min()",               # 5
    "        node.visited ← true",                 # 6
    "        if node == target: return path",      # 7
    "        for (neighbour, w) in adj(node):",    # 8
    "            if neighbour.visited: continue",  # 9
    "            new_dist ← dist[node] + w",       # 10
    "            if new_dist < dist[neighbour]:",  # 11
    "                dist[neighbour] ← new_dist",  # 12
    "                parent[neighbour] ← node",    # 13
    "                open.push(neighbour)",        # 14
    "    return NOT FOUND",                        # 15
]


class Dijkstra:
    """
    Attributes:
        graph    : The graph being searched.
        finished : True once the target was expanded or the open set ran dry.
        end_node : Goal of the current run.
    """

    key = "dijkstra"

    def __init__(self, graph: Graph):
        self.graph:    Graph          = graph
        self.finished: bool           = False
        self.end_node: Optional[Node] = None
        self._steps = None

    def start(self, start_node: Node, end_node: Node) -> None:
        self.finished = False
        self.end_node = end_node
        start_node.distance_from_start = 0.0

        frontier = PriorityFrontier(self.graph, key=lambda n: n.distance_from_start)
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
