# bikeflow/traffic/time_of_day.py
from __future__ import annotations

import pandas as pd

ANY_TIME = -1
MINUTES_PER_DAY = 1440

ANY_TIME_LABEL = "(any time)"


def minutes_since_midnight(ts) -> int:
    """
    Minute of the day for a datetime / pandas Timestamp, 0..1439.
    Seconds are ignored.
    """
    return ts.hour * 60 + ts.minute


def minutes_since_midnight_series(times: pd.Series) -> pd.Series:
    """Vectorized minutes_since_midnight for a datetime64 Series."""
    return times.dt.hour * 60 + times.dt.minute


def format_time(minutes: int) -> str:
    """
    12-hour short time, like a browser's en-US timeStyle "short":
      0 -> "12:00 AM", 600 -> "10:00 AM", 765 -> "12:45 PM"
    """
    minutes = int(minutes) % MINUTES_PER_DAY
    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def format_time_label(minutes: int) -> str:
    if int(minutes) == ANY_TIME:
        return ANY_TIME_LABEL
    return format_time(minutes)


def validate_filter_minute(value) -> int:
    """Coerce a slider value to an int in [-1, 1439] or raise ValueError."""
    try:
        minute = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"time filter must be an integer, got {value!r}") from e

    if minute < ANY_TIME or minute >= MINUTES_PER_DAY:
        raise ValueError(f"time filter must be in [-1, 1439], got {minute}")
    return minute
