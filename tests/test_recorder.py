"""Tests for headless runs, results and comparison."""

import math

import pytest

from engine import PathfindingState, Recorder, RunMetrics, SearchResult, compare


class TestSearchResult:
    """Tests for SearchResult.from_state."""

    def test_found(self, diamond_state):
        Recorder(diamond_state).run("dijkstra")
        result = SearchResult.from_state(diamond_state)
        assert result.found is True
        assert result.path == ["A", "B", "D"]
        assert result.distance == 2

    def test_not_found(self, disconnected):
        state = PathfindingState(disconnected)
        state.set_end_node("C")
        Recorder(state).run()
        result = SearchResult.from_state(state)
        assert result.found is False
        assert result.path == []
        assert math.isinf(result.distance)
        assert result.to_dict() == {"found": False, "path": [], "distance": None}

    def test_unfinished_run_is_not_found(self, diamond_state):
        diamond_state.start("dijkstra")
        diamond_state.next_step()
        assert SearchResult.from_state(diamond_state).found is False

    def test_parent_cycle_detected(self, diamond_state):
        Recorder(diamond_state).run("dijkstra")
        diamond_state.get_node("A").parent = "D"
        with pytest.raises(RuntimeError):
            SearchResult.from_state(diamond_state)


class TestRecorder:
    """Tests for Recorder.run / export."""

    def test_metrics_dijkstra(self, diamond_state):
        metrics = Recorder(diamond_state).run("dijkstra")
        assert metrics.algo_key == "dijkstra"
        assert metrics.source == "A" and metrics.target == "D"
        assert metrics.nodes_visited == 3
        assert metrics.total_steps == 3
        assert metrics.path_length == 2
        assert metrics.path_cost == 2
        assert metrics.path_found is True

    def test_bfs_visits_more(self, diamond_state):
        metrics = Recorder(diamond_state).run("bfs")
        assert metrics.nodes_visited == 4
        assert metrics.total_steps == 4

    def test_steps_are_recorded(self, diamond_state):
        rec = Recorder(diamond_state)
        rec.run("dijkstra")
        assert rec.steps == [["A"], ["B"], ["D"]]

    def test_export(self, diamond_state):
        rec = Recorder(diamond_state)
        rec.run("dijkstra")
        data = rec.export()
        assert data["result"]["path"] == ["A", "B", "D"]
        assert data["metrics"]["algo_label"] == "Dijkstra's Algorithm"
        assert len(data["steps"]) == 3

    def test_export_before_run(self, diamond_state):
        assert Recorder(diamond_state).export() == {"metrics": {}, "result": {}, "steps": []}


class TestCompare:
    """Tests for compare()."""

    def test_winners(self, diamond_state):
        left = Recorder(diamond_state).run("dijkstra")
        right = Recorder(diamond_state).run("bfs")
        result = compare(left, right)
        assert result.winner_nodes == "Dijkstra's Algorithm"
        assert result.winner_steps == "Dijkstra's Algorithm"
        assert result.winner_path == "tie"

    def test_unfound_route_never_wins_on_cost(self):
        left = RunMetrics(algo_label="L", path_found=False, path_cost=0.0)
        right = RunMetrics(algo_label="R", path_found=True, path_cost=9.0)
        assert compare(left, right).winner_path == "R"

    def test_to_dict(self):
        data = compare(RunMetrics(algo_label="L"), RunMetrics(algo_label="R")).to_dict()
        assert data["left"]["algo_label"] == "L"
        assert data["winner_nodes"] == "tie"
