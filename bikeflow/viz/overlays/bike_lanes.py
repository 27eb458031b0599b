# bikeflow/viz/overlays/bike_lanes.py
import json
from pathlib import Path

import folium

from bikeflow.util.console import info, warn
from bikeflow.util.http import http_get_json, is_url

BIKE_LANE_SOURCES = {
    "Boston bike network": (
        "https://bostonopendata-boston.opendata.arcgis.com/datasets/"
        "boston::existing-bike-network-2022.geojson"
    ),
    "Cambridge bike facilities": (
        "https://raw.githubusercontent.com/cambridgegis/cambridgegis_data/main/"
        "Recreation/Bike_Facilities/RECREATION_BikeFacilities.geojson"
    ),
}

LANE_STYLE = {
    "color": "#32D400",
    "weight": 5,
    "opacity": 0.6,
}


def load_bike_lane_layers(sources=None, timeout: int = 30):
    """
    Fetch the bike lane geojson once, at startup.

    sources: {layer name: path or URL}. A layer that fails to load is
    reported and skipped. Returns {layer name: geojson dict}.
    """
    if sources is None:
        sources = BIKE_LANE_SOURCES

    layers = {}
    for name, source in sources.items():
        info(f"Loading bike lane layer {name!r}…")
        try:
            if is_url(source):
                data = http_get_json(str(source), timeout=timeout)
            else:
                with open(Path(source)) as f:
                    data = json.load(f)
        except (OSError, ValueError) as e:
            warn(f"Skipping bike lane layer {name!r}: {e!r}")
            continue

        if not isinstance(data, dict) or "type" not in data:
            warn(f"Skipping bike lane layer {name!r}: not a geojson object")
            continue

        layers[name] = data

    return layers


def add_bike_lane_layers(m, layers):
    """
    Bike lane overlays under the station circles, from already loaded
    geojson dicts (see load_bike_lane_layers). Returns the names added.
    """
    added = []
    for name, data in (layers or {}).items():
        try:
            layer = folium.GeoJson(
                data,
                name=name,
                style_function=lambda _feature: dict(LANE_STYLE),
            )
        except ValueError as e:
            warn(f"Skipping bike lane layer {name!r}: {e!r}")
            continue

        layer.add_to(m)
        added.append(name)

    return added
