"""
contract.py — Stepwise Search Contract
=======================================
What every search variant must provide so the orchestrator can drive it
one unit of work at a time.

A variant is any object with this shape.  There is no base class to
inherit from: write the class, register it in `algorithms.REGISTRY`.

    algo = Dijkstra(graph)
    algo.start(start_node, end_node)
    while not algo.finished:
        touched = algo.next_step()      # nodes whose paint changed

Rules:
  - start() may be called again for a fresh run once the caller has
    reset the graph.
  - next_step() after `finished` is a no-op that returns [].
"""

from typing import List, Protocol, runtime_checkable

from graph import Node


@runtime_checkable
class PathfindingAlgorithm(Protocol):
    """Constructed with the Graph it searches: `Variant(graph)`."""

    finished: bool

    def start(self, start_node: Node, end_node: Node) -> None: ...

    def next_step(self) -> List[Node]: ...
