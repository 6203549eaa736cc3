"""
state.py — Search Orchestrator
===============================
PathfindingState owns the one active search: the loaded Graph, the end
node and the running algorithm.  It is constructed explicitly and handed
to whoever drives the search (the Stepper, the Flask app), so there is
exactly one source of truth without a module-level singleton.

Lifecycle:
    state = PathfindingState()
    state.load_graph(supplier_future)     # or install_graph(graph)
    state.set_end_node("123")
    state.start("dijkstra")
    while not state.finished:
        touched = state.next_step()
"""

import logging
from concurrent.futures import Future
from typing import List, Optional, TYPE_CHECKING

from graph import Graph, Node
from algorithms import PathfindingAlgorithm, resolve_algorithm

if TYPE_CHECKING:
    from engine.recorder import SearchResult

logger = logging.getLogger(__name__)


class GraphSupplyError(RuntimeError):
    """The graph supplier failed; the previously loaded graph is still in place."""


class PathfindingState:
    """
    Attributes:
        graph         : Loaded Graph, or None.
        end_node_id   : Goal node id, or None.
        algorithm     : Variant driving the current run, or None before start().
        algorithm_key : Registry key the current variant was built from.
        finished      : True once the run is over (target reached or exhausted).
    """

    def __init__(self, graph: Optional[Graph] = None):
        self.graph:         Optional[Graph]                = graph
        self.end_node_id:   Optional[str]                  = None
        self.algorithm:     Optional[PathfindingAlgorithm] = None
        self.algorithm_key: Optional[str]                  = None
        self.finished:      bool                           = False

    # ------------------------------------------------------------------
    # Graph & endpoints
    # ------------------------------------------------------------------
    @property
    def start_node(self) -> Optional[Node]:
        return self.graph.start_node if self.graph else None

    @property
    def end_node(self) -> Optional[Node]:
        return self.get_node(self.end_node_id)

    def get_node(self, node_id) -> Optional[Node]:
        if self.graph is None:
            return None
        return self.graph.get_node(node_id)

    def set_end_node(self, node_id) -> Optional[Node]:
        """Resolve and store the goal.  Unknown ids leave the state untouched."""
        node = self.get_node(node_id)
        if node is None:
            logger.warning("End node %s is not in the loaded graph", node_id)
            return None
        self.end_node_id = node.id
        return node

    def install_graph(self, graph: Graph) -> None:
        """Replace the graph wholesale.  The old end node does not carry over."""
        self.graph         = graph
        self.end_node_id   = None
        self.algorithm     = None
        self.algorithm_key = None
        self.finished      = False
        logger.info("Graph loaded: %d nodes, %d edges, start=%s",
                    graph.node_count(), graph.edge_count(), graph.start_node_id)

    def load_graph(self, supplier: "Future[Graph]") -> Graph:
        """
        Install the graph a supplier future resolves to.

        Raises:
            GraphSupplyError: the supplier failed or produced something that
                is not a Graph.  Nothing is installed in that case.
        """
        try:
            graph = supplier.result()
        except Exception as exc:
            logger.exception("Graph supplier failed")
            raise GraphSupplyError(f"Could not load map graph: {exc}") from exc

        if not isinstance(graph, Graph):
            raise GraphSupplyError(f"Graph supplier returned {type(graph).__name__}, not a Graph")

        self.install_graph(graph)
        return graph

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Wipe search state on every node and edge; the graph is kept."""
        if self.graph is None:
            return
        self.graph.reset()
        self.finished = False

    def start(self, algorithm_type: Optional[str] = None) -> None:
        if self.graph is None:
            raise RuntimeError("Load a graph before starting a search.")
        start_node, end_node = self.start_node, self.end_node
        if start_node is None:
            raise RuntimeError("The loaded graph has no start node.")
        if end_node is None:
            raise RuntimeError("Set an end node before starting a search.")

        self.reset()
        info = resolve_algorithm(algorithm_type)
        if algorithm_type is not None and info.key != algorithm_type:
            logger.warning("Unknown algorithm %r, falling back to %s", algorithm_type, info.key)

        self.algorithm     = info.cls(self.graph)
        self.algorithm_key = info.key
        self.algorithm.start(start_node, end_node)
        logger.info("Search started: %s from %s to %s", info.key, start_node.id, end_node.id)

    def next_step(self) -> List[Node]:
        if self.algorithm is None:
            return []
        touched = self.algorithm.next_step()
        if (self.algorithm.finished or not touched) and not self.finished:
            self.finished = True
            end = self.end_node
            logger.info("Search finished: target %s",
                        "reached" if end is not None and end.visited else "unreachable")
        return touched

    def result(self) -> "SearchResult":
        """Found / not found for the current run, with the traced route."""
        from engine.recorder import SearchResult

        return SearchResult.from_state(self)
