"""
bfs.py — Breadth-First Search
==============================
Layer-by-layer expansion with a FIFO queue.  A node keeps the parent it
was first discovered from, so the route minimises hop count, not length.
distance_from_start still accumulates edge weights for reporting.
"""

from typing import List, Optional

from graph import Graph, Node
from algorithms.frontier import FifoFrontier, expand


PSEUDOCODE: List[str] = [
    "def BFS(graph, source, target):",          # 0
    "    queue ← [source]",                     # 1
    "    while queue is not empty:",             # 2
    "        node ← queue.dequeue()",           # 3
    "        node.visited ← true",              # 4
    "        if node == target: return path",   # 5
    "        for neighbour in adj(node):",      # 6
    "            if neighbour seen: continue",  # 7
    "            parent[neighbour] ← node",     # 8
    "            queue.enqueue(neighbour)",     # 9
    "    return NOT FOUND",                     # 10
]


class BreadthFirst:
    key = "bfs"

    def __init__(self, graph: Graph):
        self.graph:    Graph          = graph
        self.finished: bool           = False
        self.end_node: Optional[Node] = None
        self._steps = None

    def start(self, start_node: Node, end_node: Node) -> None:
        self.finished = False
        self.end_node = end_node
        start_node.distance_from_start = 0.0

        frontier = FifoFrontier(self.graph)
        frontier.push(start_node)
        self._steps = expand(self.graph, frontier, end_node, relax_queued=False)

    def next_step(self) -> List[Node]:
        if self.finished or self._steps is None:
            return []
        touched, done = next(self._steps, ([], True))
        if done:
            self.finished = True
            self._steps = None
        return touched
