"""Shared fixtures for station traffic tests."""

from datetime import datetime

import pandas as pd
import pytest


def make_trips(rows: list[tuple[str, str, str, str]]) -> pd.DataFrame:
    """Build a trips frame from (start_id, end_id, started_at, ended_at) rows."""
    return pd.DataFrame(
        {
            "start_station_id": [r[0] for r in rows],
            "end_station_id": [r[1] for r in rows],
            "started_at": pd.to_datetime([r[2] for r in rows]),
            "ended_at": pd.to_datetime([r[3] for r in rows]),
        }
    )


@pytest.fixture
def ab_stations() -> list[dict]:
    return [
        {"short_name": "A", "name": "Alpha", "lat": 42.36, "lon": -71.09},
        {"short_name": "B", "name": "Bravo", "lat": 42.37, "lon": -71.10},
    ]


@pytest.fixture
def ab_trips() -> pd.DataFrame:
    return make_trips([("A", "B", "2024-03-01 00:10:00", "2024-03-01 00:40:00")])


@pytest.fixture
def day_trips() -> pd.DataFrame:
    """Trips spread over a day between stations A, B and C."""
    return make_trips(
        [
            ("A", "B", "2024-03-01 08:00:00", "2024-03-01 08:20:00"),
            ("A", "C", "2024-03-01 08:30:00", "2024-03-01 08:50:00"),
            ("B", "A", "2024-03-01 12:00:00", "2024-03-01 12:15:00"),
            ("C", "A", "2024-03-01 17:45:00", "2024-03-01 18:05:00"),
            ("A", "A", "2024-03-01 23:50:00", "2024-03-02 00:05:00"),
            ("X9", "B", "2024-03-01 09:05:00", "2024-03-01 09:30:00"),
        ]
    )


@pytest.fixture
def abc_stations() -> list[dict]:
    return [
        {"short_name": "A", "name": "Alpha", "lat": 42.36, "lon": -71.09},
        {"short_name": "B", "name": "Bravo", "lat": 42.37, "lon": -71.10},
        {"short_name": "C", "name": "Charlie", "lat": 42.35, "lon": -71.06},
    ]


@pytest.fixture
def noon() -> datetime:
    return datetime(2024, 3, 1, 12, 0)


@pytest.fixture
def trips_factory():
    return make_trips
