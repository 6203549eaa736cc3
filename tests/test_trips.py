"""Tests for trail synthesis."""

import pytest

from engine import PathfindingState, TripPhase, TripSynthesizer


def synthesize(state: PathfindingState, algorithm: str = "dijkstra", limit: int = 1000) -> TripSynthesizer:
    """Run a synthesizer to DONE with a play-head that is always caught up."""
    trips = TripSynthesizer(state)
    state.start(algorithm)
    for _ in range(limit):
        if trips.step(play_head=trips.timer) is TripPhase.DONE:
            return trips
    raise AssertionError("trail never completed")


class TestTripSynthesizer:
    """Tests for TripSynthesizer."""

    def test_diamond_trail(self, diamond_state):
        trips = synthesize(diamond_state)
        assert [s.color for s in trips.segments] == ["path", "path", "route", "route"]
        assert [s.timestamps for s in trips.segments] == [
            pytest.approx((0, 50)),
            pytest.approx((50, 100)),
            pytest.approx((100, 150)),
            pytest.approx((150, 200)),
        ]
        assert trips.timer == pytest.approx(200)

    def test_segment_geometry_is_referer_to_node(self, diamond_state):
        trips = synthesize(diamond_state)
        first = trips.segments[0]
        assert first.path == ((0.0, 0.0), (0.001, 0.0))

    def test_timeline_is_contiguous(self, grid):
        """Each segment starts where the previous one ended."""
        state = PathfindingState(grid)
        state.set_end_node("4_4")
        trips = synthesize(state)
        end = 0.0
        for segment in trips.segments:
            start, stop = segment.timestamps
            assert start == pytest.approx(end)
            assert stop >= start
            end = stop
        assert trips.timer == pytest.approx(end)

    def test_route_follows_parents(self, grid):
        state = PathfindingState(grid)
        state.set_end_node("4_4")
        trips = synthesize(state)

        hops = 0
        node = grid.get_node("4_4")
        while node.parent is not None:
            hops += 1
            node = grid.get_node(node.parent)
        assert len(trips.route_segments) == hops

    def test_unreachable_target_has_no_route(self, disconnected):
        state = PathfindingState(disconnected)
        state.set_end_node("C")
        trips = synthesize(state)
        assert trips.route_segments == []
        assert len(trips.segments) == 1

    def test_done_waits_for_play_head(self, diamond_state):
        """Tracing only completes once the play-head reaches the timer."""
        trips = TripSynthesizer(diamond_state)
        diamond_state.start("dijkstra")
        for _ in range(10):
            trips.step(play_head=0)
        assert trips.phase is TripPhase.TRACING
        assert trips.step(play_head=trips.timer) is TripPhase.DONE

    def test_route_multiplier_stretches_route_only(self, diamond_state):
        trips = TripSynthesizer(diamond_state)
        diamond_state.start("dijkstra")
        for _ in range(10):
            trips.step(play_head=0, route_multiplier=3)
        durations = {s.color: s.timestamps[1] - s.timestamps[0] for s in trips.segments}
        assert durations["path"] == pytest.approx(50)
        assert durations["route"] == pytest.approx(150)

    def test_missing_endpoint_emits_nothing(self, diamond_state):
        trips = TripSynthesizer(diamond_state)
        assert trips.add_segment(diamond_state.get_node("A"), None) is None
        assert trips.segments == [] and trips.timer == 0

    def test_visible_segments(self, diamond_state):
        trips = synthesize(diamond_state)
        assert len(trips.visible_segments(0)) == 1
        assert len(trips.visible_segments(100)) == 3
        assert len(trips.visible_segments(1e9)) == 4

    def test_rewind_and_clear(self, diamond_state):
        trips = synthesize(diamond_state)
        trips.rewind()
        assert trips.phase is TripPhase.TRACING
        assert len(trips.segments) == 4

        trips.clear()
        assert trips.phase is TripPhase.EXPLORING
        assert trips.segments == [] and trips.timer == 0
