"""
frontier.py — Open Sets & the Shared Expansion Loop
====================================================
Dijkstra, A* and BFS differ only in the order the open set hands nodes
back and in whether a queued node may be re-relaxed.  Both live here:

  • PriorityFrontier  – binary heap (heapq) with lazy deletion.  Ties pop
                        in insertion order.
  • FifoFrontier      – deque with a membership set.
  • expand()          – generator performing one expansion per next(),
                        yielding (touched_nodes, done).
"""

import heapq
import itertools
from collections import deque
from typing import Callable, Deque, Dict, Generator, List, Optional, Set, Tuple

from graph import Graph, Node


# ---------------------------------------------------------------------------
# Open sets
# ---------------------------------------------------------------------------
class PriorityFrontier:
    """
    Min-heap keyed by `key(node)`.  Pushing a node that is already queued
    adds a fresher entry; the old one is skipped when popped.
    """

    def __init__(self, graph: Graph, key: Callable[[Node], float]):
        self._graph   = graph
        self._key     = key
        self._heap:   List[Tuple[float, int, str]] = []
        self._queued: Dict[str, float] = {}
        self._counter = itertools.count()

    def push(self, node: Node) -> None:
        priority = self._key(node)
        self._queued[node.id] = priority
        heapq.heappush(self._heap, (priority, next(self._counter), node.id))

    def pop(self) -> Optional[Node]:
        while self._heap:
            priority, _, nid = heapq.heappop(self._heap)
            # stale entry
            if self._queued.get(nid) != priority:
                continue
            del self._queued[nid]
            return self._graph.get_node(nid)
        return None

    def clear(self) -> None:
        self._heap.clear()
        self._queued.clear()

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._queued

    def __len__(self) -> int:
        return len(self._queued)


class FifoFrontier:
    """Insert at the tail, remove from the head.  A node is queued at most once."""

    def __init__(self, graph: Graph):
        self._graph  = graph
        self._queue: Deque[str] = deque()
        self._queued: Set[str]  = set()

    def push(self, node: Node) -> None:
        if node.id not in self._queued:
            self._queued.add(node.id)
            self._queue.append(node.id)

    def pop(self) -> Optional[Node]:
        if not self._queue:
            return None
        nid = self._queue.popleft()
        self._queued.discard(nid)
        return self._graph.get_node(nid)

    def clear(self) -> None:
        self._queue.clear()
        self._queued.clear()

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._queued

    def __len__(self) -> int:
        return len(self._queue)


# ---------------------------------------------------------------------------
# Expansion loop
# ---------------------------------------------------------------------------
def paint_referer_edge(graph: Graph, node: Node) -> None:
    """Mark the edge the node was discovered through as visited."""
    if node.referer is None:
        return
    edge = graph.get_edge_between(node.id, node.referer)
    if edge is not None:
        edge.visited = True


def expand(
    graph: Graph,
    frontier,
    end_node: Node,
    relax_queued: bool = True,
) -> Generator[Tuple[List[Node], bool], None, None]:
    """
    One expansion per next().  Yields (touched, done).

    `touched` lists the neighbours whose edge got repainted, then the
    expanded node itself.  When the end node is expanded the generator
    yields ([end], True) and stops.  When the frontier runs dry it stops
    without yielding; the caller treats that as ([], True).

    relax_queued=False keeps the first parent a queued node was given
    (hop-count tree) instead of lowering its distance.
    """
    while True:
        current = frontier.pop()
        if current is None:
            return

        current.visited = True
        paint_referer_edge(graph, current)

        if current.id == end_node.id:
            frontier.clear()
            yield [current], True
            return

        touched: List[Node] = []
        for node, edge in graph.neighbors(current.id):
            # repaint: another visited node reaches this one through a fresh edge
            if node.visited and not edge.visited:
                edge.visited = True
                node.referer = current.id
                touched.append(node)

            if node.visited:
                continue

            candidate = current.distance_from_start + edge.weight
            if node.id in frontier:
                if not relax_queued or candidate >= node.distance_from_start:
                    continue

            node.distance_from_start = candidate
            node.parent  = current.id
            node.referer = current.id
            frontier.push(node)

        touched.append(current)
        yield touched, False
