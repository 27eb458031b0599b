# bikeflow/viz/controller.py
from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

import pandas as pd

from bikeflow.traffic.filter import filter_trips
from bikeflow.traffic.station_traffic import compute_station_traffic
from bikeflow.traffic.time_of_day import (
    ANY_TIME,
    format_time_label,
    validate_filter_minute,
)
from bikeflow.util.console import done, error, info
from bikeflow.util.trips import LoadedTrips, empty_trips
from bikeflow.viz.binder import BindResult, Marker, Projector, StationViewBinder
from bikeflow.viz.scales import SqrtScale, max_total_traffic, radius_scale


@dataclass
class SessionView:
    filter_minute: int
    label: str
    ready: bool
    load_failed: bool
    radius_range: tuple
    markers: List[Marker]


class InteractionController:
    """
    Owns one map session: the raw stations/trips, the current time filter and
    the marker binder.

    Slider input and viewport changes are queued and handled one at a time.
    A slider event runs filter -> aggregate -> encode -> bind; a viewport
    event only repositions markers. Until data has loaded (ready) neither
    touches the pipeline.
    """

    def __init__(self, binder: StationViewBinder | None = None):
        self.binder = binder or StationViewBinder()
        self.filter_minute = ANY_TIME
        self.label = format_time_label(ANY_TIME)

        self.ready = False
        self.load_failed = False
        self.malformed_trips = 0

        self.stations: List[dict] = []
        self.radius: SqrtScale = radius_scale(0, ANY_TIME)
        self.last_bind: BindResult | None = None

        self._original_stations: List[dict] = []
        self._trips: pd.DataFrame = empty_trips()

        self._events = deque()
        self._lock = threading.RLock()
        self._draining = False

    # ---------------------------------------------------------
    # loading
    # ---------------------------------------------------------
    def load(self, load_stations: Callable[[], list], load_trips: Callable[[], object]) -> bool:
        """
        Run both loaders once. Any failure leaves the session empty and not
        ready; there is no retry.
        """
        try:
            stations = list(load_stations())
            trips = load_trips()
        except Exception as e:
            error(f"Failed to load station/trip data: {e!r}")
            self._reset_empty()
            return False

        if isinstance(trips, LoadedTrips):
            self.malformed_trips = trips.malformed
            trips = trips.trips

        with self._lock:
            self._original_stations = stations
            self._trips = trips
            self.ready = True

        try:
            info(f"Loaded {len(stations)} stations and {len(trips):,} trips")
            self._dispatch(("input", self.filter_minute))
        except Exception as e:
            error(f"Loaded data could not be aggregated: {e!r}")
            self._reset_empty()
            return False
        return True

    def _reset_empty(self) -> None:
        with self._lock:
            self._events.clear()
            self._original_stations = []
            self._trips = empty_trips()
            self.stations = []
            self.radius = radius_scale(0, ANY_TIME)
            self.last_bind = self.binder.bind([], self.radius)
            self.load_failed = True
            self.ready = False

    # ---------------------------------------------------------
    # events
    # ---------------------------------------------------------
    def on_slider_input(self, value) -> str:
        """Queue a new filter minute (-1..1439). Returns the display label."""
        minute = validate_filter_minute(value)
        self._dispatch(("input", minute))
        return self.label

    def on_viewport_change(self, project: Projector) -> None:
        self._dispatch(("viewport", project))

    def _dispatch(self, event) -> None:
        with self._lock:
            self._events.append(event)
            if self._draining:
                return

            self._draining = True
            try:
                while self._events:
                    self._handle(self._events.popleft())
            finally:
                self._draining = False

    def _handle(self, event) -> None:
        kind, payload = event

        if kind == "input":
            self.filter_minute = payload
            self.label = format_time_label(payload)
            if self.ready:
                self._recompute()

        elif kind == "viewport":
            if self.ready:
                self.binder.reposition(payload)
            else:
                self.binder.remember(payload)

    def _recompute(self) -> None:
        filtered = filter_trips(self._trips, self.filter_minute)
        self.stations = compute_station_traffic(self._original_stations, filtered)
        self.radius = radius_scale(max_total_traffic(self.stations), self.filter_minute)
        self.last_bind = self.binder.bind(self.stations, self.radius)

        done(
            f"[{self.label}] {len(filtered):,} trips → {len(self.stations)} stations "
            f"(+{len(self.last_bind.entered)} ~{len(self.last_bind.updated)} "
            f"-{len(self.last_bind.exited)})"
        )

    # ---------------------------------------------------------
    # reads
    # ---------------------------------------------------------
    @property
    def trips(self) -> pd.DataFrame:
        return self._trips

    @property
    def original_stations(self) -> List[dict]:
        return self._original_stations

    def markers(self) -> List[Marker]:
        with self._lock:
            return self.binder.markers()

    def busiest(self, n: int = 10) -> List[dict]:
        with self._lock:
            return sorted(self.stations, key=lambda s: s["totalTraffic"], reverse=True)[:n]

    def view(
        self,
        filter_minute=None,
        project: Optional[Projector] = None,
    ) -> SessionView:
        """
        Apply an optional slider value and/or viewport, then copy out the
        state, all under the session lock so concurrent requests don't
        interleave.
        """
        with self._lock:
            if filter_minute is not None:
                self.on_slider_input(filter_minute)
            if project is not None:
                self.on_viewport_change(project)

            return SessionView(
                filter_minute=self.filter_minute,
                label=self.label,
                ready=self.ready,
                load_failed=self.load_failed,
                radius_range=self.radius.range,
                markers=[replace(m) for m in self.binder.markers()],
            )

    def snapshot(self, filter_minute=None, project: Optional[Projector] = None) -> dict:
        v = self.view(filter_minute=filter_minute, project=project)
        return {
            "filter_minute": v.filter_minute,
            "label": v.label,
            "ready": v.ready,
            "load_failed": v.load_failed,
            "radius_range": list(v.radius_range),
            "stations": [m.to_dict() for m in v.markers],
        }
