# bikeflow/util/stations.py
from __future__ import annotations

import json
from pathlib import Path

from bikeflow.util.console import info, warn
from bikeflow.util.http import http_get_json, is_url

DEFAULT_STATIONS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-stations.json"

REQUIRED_FIELDS = ("short_name", "lat", "lon")


def _read_payload(source):
    if is_url(source):
        return http_get_json(str(source))
    with open(Path(source)) as f:
        return json.load(f)


def load_stations(source=DEFAULT_STATIONS_URL):
    """
    Load bike share stations from a station_information.json (GBFS layout:
    {"data": {"stations": [...]}}), given as a local path or a URL.

    Returns a list of dicts keyed by short_name. Records without a
    short_name/lat/lon are skipped and reported.
    """
    info(f"Loading station registry from {source}…")
    payload = _read_payload(source)

    try:
        raw = payload["data"]["stations"]
    except (KeyError, TypeError) as e:
        raise ValueError(
            f"Station source {source} has no data.stations list"
        ) from e

    stations = []
    skipped = 0
    for s in raw:
        if any(s.get(k) in (None, "") for k in REQUIRED_FIELDS):
            skipped += 1
            continue

        try:
            lat = float(s["lat"])
            lon = float(s["lon"])
        except (TypeError, ValueError):
            skipped += 1
            continue

        station = {
            "short_name": str(s["short_name"]),
            "name": s.get("name", str(s["short_name"])),
            "lat": lat,
            "lon": lon,
        }
        if s.get("station_id") is not None:
            station["station_id"] = str(s["station_id"])
        if s.get("capacity") is not None:
            station["capacity"] = int(s["capacity"])

        stations.append(station)

    if skipped:
        warn(f"Skipped {skipped} station records without short_name/lat/lon")

    return stations
