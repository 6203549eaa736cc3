"""
Shared pytest fixtures for the pathfinding visualizer tests.

Every fixture builds a fresh graph so tests can mutate search state freely.
Coordinates are tiny offsets in degrees; each unit edge is 0.001° long,
which the trail synthesizer turns into 50 ms of animation.
"""

import pytest

from graph import Graph
from engine import PathfindingState


UNIT = 0.001


def build_diamond() -> Graph:
    """
    A ──1── B
    │       │
    4       1
    │       │
    C ──1── D
    """
    g = Graph(start_node_id="A")
    g.create_node("A", x=0.0, y=0.0)
    g.create_node("B", x=UNIT, y=0.0)
    g.create_node("C", x=0.0, y=UNIT)
    g.create_node("D", x=UNIT, y=UNIT)
    g.create_edge("A", "B", weight=1)
    g.create_edge("A", "C", weight=4)
    g.create_edge("B", "D", weight=1)
    g.create_edge("C", "D", weight=1)
    return g


def build_chain(length: int = 10) -> Graph:
    """0 ─ 1 ─ 2 ─ … ─ length-1, unit weights."""
    g = Graph(start_node_id="0")
    for i in range(length):
        g.create_node(str(i), x=i * UNIT, y=0.0)
    for i in range(length - 1):
        g.create_edge(str(i), str(i + 1), weight=1)
    return g


def build_grid(rows: int = 5, cols: int = 5, geographic: bool = False) -> Graph:
    """4-connected grid; uneven integer weights unless `geographic`."""
    g = Graph(start_node_id="0_0")
    for r in range(rows):
        for c in range(cols):
            g.create_node(f"{r}_{c}", x=c * UNIT, y=r * UNIT)
    for r in range(rows):
        for c in range(cols):
            for dr, dc in ((0, 1), (1, 0)):
                nr, nc = r + dr, c + dc
                if nr < rows and nc < cols:
                    weight = None if geographic else (r * 7 + c * 3 + dr) % 4 + 1
                    g.create_edge(f"{r}_{c}", f"{nr}_{nc}", weight=weight)
    return g


@pytest.fixture
def diamond() -> Graph:
    return build_diamond()


@pytest.fixture
def chain() -> Graph:
    return build_chain()


@pytest.fixture
def grid() -> Graph:
    return build_grid()


@pytest.fixture
def disconnected() -> Graph:
    """A ─ B, and an island C the search can never reach."""
    g = Graph(start_node_id="A")
    g.create_node("A", x=0.0, y=0.0)
    g.create_node("B", x=UNIT, y=0.0)
    g.create_node("C", x=5 * UNIT, y=5 * UNIT)
    g.create_edge("A", "B", weight=1)
    return g


@pytest.fixture
def diamond_state(diamond) -> PathfindingState:
    state = PathfindingState(diamond)
    state.set_end_node("D")
    return state


@pytest.fixture
def overpass_doc() -> dict:
    """Two ways sharing the 2–3 segment, plus a way through an unknown node."""
    return {
        "elements": [
            {"type": "node", "id": 1, "lat": 30.3165, "lon": 78.0322},
            {"type": "node", "id": 2, "lat": 30.3170, "lon": 78.0322},
            {"type": "node", "id": 3, "lat": 30.3170, "lon": 78.0330},
            {"type": "node", "id": 4, "lat": 30.3180, "lon": 78.0330},
            {"type": "way", "id": 10, "nodes": [1, 2, 3]},
            {"type": "way", "id": 11, "nodes": [2, 3, 4]},
            {"type": "way", "id": 12, "nodes": [4, 999]},
        ]
    }
