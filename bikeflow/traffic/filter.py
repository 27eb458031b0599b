# bikeflow/traffic/filter.py
from __future__ import annotations

import pandas as pd

from bikeflow.traffic.time_of_day import (
    ANY_TIME,
    minutes_since_midnight_series,
    validate_filter_minute,
)

WINDOW_MINUTES = 60


def filter_trips(
    trips: pd.DataFrame,
    filter_minute: int,
    window_minutes: int = WINDOW_MINUTES,
) -> pd.DataFrame:
    """
    Keep trips that start or end within window_minutes of filter_minute.

    filter_minute == -1 means "any time" and returns trips itself (no copy).
    The window is a plain absolute difference on minute-of-day, it does not
    wrap around midnight: 23:50 is not within an hour of 00:10.
    Row order is preserved.
    """
    filter_minute = validate_filter_minute(filter_minute)
    if filter_minute == ANY_TIME:
        return trips

    started = minutes_since_midnight_series(trips["started_at"])
    ended = minutes_since_midnight_series(trips["ended_at"])

    keep = ((started - filter_minute).abs() <= window_minutes) | (
        (ended - filter_minute).abs() <= window_minutes
    )
    return trips.loc[keep]
