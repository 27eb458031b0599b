# bikeflow/viz/scales.py
from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass

import numpy as np

from bikeflow.traffic.time_of_day import ANY_TIME

RADIUS_RANGE_ANY_TIME = (0.0, 25.0)
RADIUS_RANGE_FILTERED = (3.0, 50.0)

FLOW_BUCKETS = (0.0, 0.5, 1.0)
FLOW_FALLBACK = 0.5

# bucket -> fill: mostly arrivals, balanced, mostly departures
FLOW_COLORS = {
    0.0: "#ff8c00",
    0.5: "#a2875a",
    1.0: "#4682b4",
}


@dataclass(frozen=True)
class SqrtScale:
    """
    Square-root scale from [0, domain_max] onto [range_min, range_max].

    Marker area, not radius, grows linearly with traffic. With an empty
    domain (domain_max <= 0) every value maps to range_min.
    """
    domain_max: float
    range_min: float
    range_max: float

    def __call__(self, value) -> float:
        if self.domain_max <= 0:
            return self.range_min
        t = math.sqrt(max(float(value), 0.0)) / math.sqrt(self.domain_max)
        return self.range_min + t * (self.range_max - self.range_min)

    @property
    def range(self) -> tuple[float, float]:
        return (self.range_min, self.range_max)


def radius_range(filter_minute: int) -> tuple[float, float]:
    if int(filter_minute) == ANY_TIME:
        return RADIUS_RANGE_ANY_TIME
    return RADIUS_RANGE_FILTERED


def max_total_traffic(stations) -> int:
    if not stations:
        return 0
    return int(np.max([s["totalTraffic"] for s in stations]))


def radius_scale(max_traffic: float, filter_minute: int) -> SqrtScale:
    """
    Radius scale for the current pass. A time filter narrows the trips, so the
    range grows to [3, 50] to keep quiet stations visible and peaks prominent.
    """
    r0, r1 = radius_range(filter_minute)
    return SqrtScale(domain_max=float(max_traffic or 0), range_min=r0, range_max=r1)


def quantize_flow(ratio: float) -> float:
    """
    Split [0, 1] evenly into three buckets: 0, 0.5, 1.
    Values outside the domain clamp; NaN gets the balanced bucket.
    """
    if ratio is None or math.isnan(ratio):
        return FLOW_FALLBACK
    n = len(FLOW_BUCKETS)
    thresholds = [i / n for i in range(1, n)]
    idx = bisect_right(thresholds, float(ratio))
    return FLOW_BUCKETS[max(0, min(idx, n - 1))]


def departure_ratio(station: dict) -> float:
    """Quantized departures / totalTraffic; 0.5 for stations with no traffic."""
    total = station.get("totalTraffic", 0)
    if not total:
        return FLOW_FALLBACK
    return quantize_flow(station.get("departures", 0) / total)


def flow_color(bucket: float) -> str:
    return FLOW_COLORS.get(float(bucket), FLOW_COLORS[FLOW_FALLBACK])
