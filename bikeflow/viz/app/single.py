# bikeflow/viz/app/single.py
from __future__ import annotations

from flask import Flask, jsonify, request

from bikeflow.viz.controller import InteractionController
from bikeflow.viz.maps.render import (
    CENTER_LAT,
    CENTER_LON,
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    render_map_document,
)
from bikeflow.viz.projection import WebMercatorProjector

DEFAULT_VIEWPORT = (1024, 768)


def _viewport_from_args(args) -> WebMercatorProjector:
    zoom = float(args.get("zoom", DEFAULT_ZOOM))
    # the map's own zoom bounds
    zoom = max(MIN_ZOOM, min(MAX_ZOOM, zoom))

    return WebMercatorProjector(
        center_lat=float(args.get("lat", CENTER_LAT)),
        center_lon=float(args.get("lon", CENTER_LON)),
        zoom=zoom,
        width=int(args.get("width", DEFAULT_VIEWPORT[0])),
        height=int(args.get("height", DEFAULT_VIEWPORT[1])),
    )


def create_app(
    controller: InteractionController,
    *,
    title: str | None = "Bluebikes traffic",
    bike_lanes=None,
) -> Flask:
    """
    Routes:
      /                 map page, ?t=<minute> sets the time filter (-1..1439)
      /api/stations     JSON markers for ?t=<minute>
      /api/positions    JSON screen positions for a viewport
                        (?lat=&lon=&zoom=&width=&height=)
    """
    app = Flask(__name__)

    @app.route("/")
    def _index():
        t_raw = request.args.get("t", None)
        try:
            view = controller.view(filter_minute=t_raw)
        except ValueError:
            view = controller.view()

        return render_map_document(
            markers=view.markers,
            filter_minute=view.filter_minute,
            label=view.label,
            title=title,
            bike_lanes=bike_lanes,
        )

    @app.route("/api/stations")
    def _stations():
        t_raw = request.args.get("t", None)
        try:
            return jsonify(controller.snapshot(filter_minute=t_raw))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

    @app.route("/api/positions")
    def _positions():
        try:
            project = _viewport_from_args(request.args)
        except ValueError as e:
            return jsonify({"error": f"bad viewport: {e}"}), 400

        view = controller.view(project=project)
        return jsonify(
            {
                "ready": view.ready,
                "positions": {m.short_name: [m.cx, m.cy] for m in view.markers},
            }
        )

    return app


def serve_single(
    *,
    controller: InteractionController,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = "Bluebikes traffic",
    bike_lanes=None,
):
    """Serve the traffic map for an already loaded controller (blocking)."""
    app = create_app(controller, title=title, bike_lanes=bike_lanes)
    app.run(host=host, port=int(port), debug=bool(debug))
