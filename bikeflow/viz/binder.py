# bikeflow/viz/binder.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from bikeflow.viz.scales import SqrtScale, departure_ratio, flow_color

Projector = Callable[[float, float], Tuple[float, float]]

STROKE = "white"
STROKE_WIDTH = 1
OPACITY = 0.8


def tooltip_text(station: dict) -> str:
    return (
        f"{station['totalTraffic']} trips "
        f"({station['departures']} departures, {station['arrivals']} arrivals)"
    )


@dataclass
class Marker:
    short_name: str
    lat: float
    lon: float
    radius: float
    fill: str
    departure_ratio: float
    tooltip: str
    stroke: str = STROKE
    stroke_width: int = STROKE_WIDTH
    opacity: float = OPACITY
    name: str | None = None
    cx: float | None = None
    cy: float | None = None

    def to_dict(self) -> dict:
        return {
            "short_name": self.short_name,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "radius": self.radius,
            "fill": self.fill,
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
            "opacity": self.opacity,
            "departure_ratio": self.departure_ratio,
            "tooltip": self.tooltip,
            "cx": self.cx,
            "cy": self.cy,
        }


@dataclass
class BindResult:
    entered: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    exited: List[str] = field(default_factory=list)


class StationViewBinder:
    """
    Keeps one Marker per station short_name.

    bind() joins a freshly enriched station list against the markers already
    on screen: new keys enter, shared keys are updated in place (the Marker
    object survives), missing keys exit.
    """

    def __init__(self):
        self._markers: Dict[str, Marker] = {}
        self._order: List[str] = []
        self._project: Optional[Projector] = None

    def __len__(self):
        return len(self._markers)

    def __contains__(self, short_name):
        return short_name in self._markers

    def get(self, short_name: str) -> Marker | None:
        return self._markers.get(short_name)

    def markers(self) -> List[Marker]:
        return [self._markers[k] for k in self._order]

    def bind(self, stations: List[dict], radius: SqrtScale) -> BindResult:
        incoming: Dict[str, dict] = {}
        for s in stations:
            incoming[str(s["short_name"])] = s

        result = BindResult()

        for key in list(self._markers):
            if key not in incoming:
                del self._markers[key]
                result.exited.append(key)

        for key, s in incoming.items():
            bucket = departure_ratio(s)
            marker = self._markers.get(key)

            if marker is None:
                self._markers[key] = Marker(
                    short_name=key,
                    name=s.get("name"),
                    lat=float(s["lat"]),
                    lon=float(s["lon"]),
                    radius=radius(s["totalTraffic"]),
                    fill=flow_color(bucket),
                    departure_ratio=bucket,
                    tooltip=tooltip_text(s),
                )
                result.entered.append(key)
            else:
                marker.radius = radius(s["totalTraffic"])
                marker.departure_ratio = bucket
                marker.fill = flow_color(bucket)
                marker.tooltip = tooltip_text(s)
                result.updated.append(key)

        self._order = list(incoming)

        if self._project is not None:
            self.reposition(self._project)

        return result

    def remember(self, project: Projector) -> None:
        """Keep a projector for the next bind without moving anything now."""
        self._project = project

    def reposition(self, project: Projector) -> None:
        """Screen position of every marker from project(lon, lat)."""
        self._project = project
        for marker in self._markers.values():
            x, y = project(marker.lon, marker.lat)
            marker.cx = float(x)
            marker.cy = float(y)

    def positions(self) -> Dict[str, Tuple[float | None, float | None]]:
        return {k: (self._markers[k].cx, self._markers[k].cy) for k in self._order}
