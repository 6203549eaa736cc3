"""
main.py — Map Pathfinding Visualizer Flask App
================================================
JSON API in front of the pathfinding engine.  The browser owns the map,
the trips layer and the render loop; it calls /api/tick once per frame
and draws whatever segments come back.

Routes:
  GET  /api/config             – colours, initial view, current settings
  GET  /api/algorithms         – registered search variants
  GET  /api/state              – playback snapshot
  POST /api/graph              – install a graph (serialised or Overpass JSON)
  POST /api/end                – choose the end node (id or lat/lon)
  POST /api/start              – start a search with optional settings
  POST /api/tick               – advance one frame, return new segments
  GET  /api/segments           – trail segments (optionally ?since=N)
  POST /api/pause | resume | toggle | restart | clear
  GET  /api/result             – found / not found + route
  POST /api/run                – headless run, metrics only
  POST /api/compare            – headless run of two variants

State management:
  One PathfindingState + Stepper per app, created by create_app() and kept
  in app.extensions["pathfinding"].  Nothing lives at module level.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from flask import Flask, current_app, jsonify, request

from algorithms import list_algorithms
from config import INITIAL_COLORS, INITIAL_VIEW_STATE
from engine import (
    GraphSupplyError,
    PathfindingState,
    Recorder,
    SPEED_PRESETS,
    Stepper,
    compare,
)
from graph import Graph, nearest_node

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(stepper: Optional[Stepper] = None) -> Flask:
    app = Flask(__name__)
    app.extensions["pathfinding"] = stepper or Stepper(PathfindingState())
    app.extensions["graph_supplier"] = ThreadPoolExecutor(max_workers=1)
    _register_routes(app)
    return app


def get_stepper() -> Stepper:
    return current_app.extensions["pathfinding"]


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _build_graph(data: dict) -> Graph:
    if "overpass" in data:
        return Graph.from_overpass(data["overpass"], data.get("start_node_id"))
    if "graph" in data:
        return Graph.from_dict(data["graph"])
    raise ValueError("Expected an 'overpass' or 'graph' document")


def _parse_speed(value):
    if isinstance(value, str):
        if value not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset '{value}'")
        return SPEED_PRESETS[value]
    return value


def _since() -> int:
    try:
        return max(0, int(request.args.get("since", 0)))
    except ValueError:
        return 0


def _segments_payload(stepper: Stepper, since: int = 0) -> dict:
    return {
        "since":    since,
        "segments": [s.to_dict() for s in stepper.segments[since:]],
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    # ---------- Read-only ----------
    @app.route("/api/config")
    def api_config():
        stepper = get_stepper()
        return jsonify({
            "colors":        {k: list(v) for k, v in INITIAL_COLORS.items()},
            "view_state":    INITIAL_VIEW_STATE,
            "settings":      stepper.settings.to_dict(),
            "speed_presets": SPEED_PRESETS,
        })

    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify([a.to_dict() for a in list_algorithms()])

    @app.route("/api/state")
    def api_state():
        stepper = get_stepper()
        search = stepper.search
        state = stepper.snapshot()
        state["start_node"] = search.start_node.to_dict() if search.start_node else None
        state["end_node"]   = search.end_node.to_dict() if search.end_node else None
        return jsonify(state)

    @app.route("/api/segments")
    def api_segments():
        return jsonify(_segments_payload(get_stepper(), _since()))

    @app.route("/api/result")
    def api_result():
        return jsonify(get_stepper().search.result().to_dict())

    # ---------- Graph & endpoints ----------
    @app.route("/api/graph", methods=["POST"])
    def api_graph():
        data = request.get_json(silent=True) or {}
        stepper = get_stepper()
        future = current_app.extensions["graph_supplier"].submit(_build_graph, data)
        try:
            graph = stepper.search.load_graph(future)
        except GraphSupplyError as exc:
            return _error(str(exc))
        stepper.clear()
        return jsonify({
            "nodes":      graph.node_count(),
            "edges":      graph.edge_count(),
            "start_node": graph.start_node.to_dict() if graph.start_node else None,
        })

    @app.route("/api/end", methods=["POST"])
    def api_end():
        data = request.get_json(silent=True) or {}
        stepper = get_stepper()
        search = stepper.search
        if search.graph is None:
            return _error("Select a start point first")

        if "node_id" in data:
            node = search.set_end_node(data["node_id"])
        elif "lat" in data and "lon" in data:
            try:
                lat, lon = float(data["lat"]), float(data["lon"])
            except (TypeError, ValueError):
                return _error("'lat' and 'lon' must be numbers")
            found = nearest_node(search.graph, lat, lon, max_km=stepper.settings.radius)
            node = search.set_end_node(found.id) if found else None
        else:
            return _error("Expected 'node_id' or 'lat'/'lon'")

        if node is None:
            return _error("No path was found in the vicinity, please try another location.", 404)
        stepper.clear()
        return jsonify({"end_node": node.to_dict()})

    # ---------- Playback ----------
    @app.route("/api/start", methods=["POST"])
    def api_start():
        data = request.get_json(silent=True) or {}
        stepper = get_stepper()
        try:
            settings = stepper.settings.updated(
                algorithm=data.get("algorithm"),
                speed=_parse_speed(data.get("speed")),
                radius=data.get("radius"),
            )
            stepper.start(settings)
        except (ValueError, RuntimeError) as exc:
            logger.warning("Rejected start request: %s", exc)
            return _error(str(exc))
        return jsonify(stepper.snapshot())

    @app.route("/api/tick", methods=["POST"])
    def api_tick():
        data = request.get_json(silent=True) or {}
        stepper = get_stepper()
        now = data.get("now")
        if now is not None:
            try:
                now = float(now)
            except (TypeError, ValueError):
                return _error("'now' must be a number")
            if not math.isfinite(now):
                return _error("'now' must be finite")
        since = len(stepper.segments)
        stepper.advance(now)
        payload = stepper.snapshot()
        payload.update(_segments_payload(stepper, since))
        return jsonify(payload)

    @app.route("/api/pause", methods=["POST"])
    def api_pause():
        stepper = get_stepper()
        stepper.pause()
        return jsonify(stepper.snapshot())

    @app.route("/api/resume", methods=["POST"])
    def api_resume():
        stepper = get_stepper()
        stepper.resume()
        return jsonify(stepper.snapshot())

    @app.route("/api/toggle", methods=["POST"])
    def api_toggle():
        stepper = get_stepper()
        stepper.toggle()
        return jsonify(stepper.snapshot())

    @app.route("/api/restart", methods=["POST"])
    def api_restart():
        stepper = get_stepper()
        if not stepper.restart():
            return _error("Nothing to replay yet")
        return jsonify(stepper.snapshot())

    @app.route("/api/clear", methods=["POST"])
    def api_clear():
        stepper = get_stepper()
        stepper.clear()
        return jsonify(stepper.snapshot())

    # ---------- Headless runs ----------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = request.get_json(silent=True) or {}
        stepper = get_stepper()
        stepper.clear()
        rec = Recorder(stepper.search)
        try:
            rec.run(data.get("algorithm", stepper.settings.algorithm))
        except RuntimeError as exc:
            return _error(str(exc))
        return jsonify(rec.export())

    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        data = request.get_json(silent=True) or {}
        stepper = get_stepper()
        stepper.clear()
        try:
            left = Recorder(stepper.search).run(data.get("left", "dijkstra"))
            right = Recorder(stepper.search).run(data.get("right", "astar"))
        except RuntimeError as exc:
            return _error(str(exc))
        stepper.clear()
        return jsonify(compare(left, right).to_dict())


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    from logging_config import setup_logging

    setup_logging()
    logger.info("Starting Map Pathfinding Visualizer on http://localhost:5000")
    create_app().run(debug=True, host="0.0.0.0", port=5000)
