# bikeflow/traffic/station_traffic.py
from __future__ import annotations

from typing import Dict, List

import pandas as pd


def count_by_station(trips: pd.DataFrame, column: str) -> Dict[str, int]:
    """Number of trips per station id in `column` (start or end station)."""
    if trips.empty:
        return {}
    counts = trips.groupby(column).size()
    return {str(sid): int(n) for sid, n in counts.items()}


def compute_station_traffic(stations: List[dict], trips: pd.DataFrame) -> List[dict]:
    """
    Enrich every station with arrivals, departures and totalTraffic.

    stations should be the original (unenriched) station list; the result is
    a list of new dicts and the input dicts are left untouched, so running
    this after any number of filtered passes gives the same answer as a
    fresh run. Trip station ids with no matching short_name are ignored.
    """
    departures = count_by_station(trips, "start_station_id")
    arrivals = count_by_station(trips, "end_station_id")

    out = []
    for station in stations:
        sid = str(station["short_name"])
        enriched = dict(station)
        enriched["arrivals"] = arrivals.get(sid, 0)
        enriched["departures"] = departures.get(sid, 0)
        enriched["totalTraffic"] = enriched["arrivals"] + enriched["departures"]
        out.append(enriched)

    return out
