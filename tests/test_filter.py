"""Tests for the time-of-day trip filter."""

import pandas as pd
import pytest

from bikeflow.traffic.filter import filter_trips
from bikeflow.traffic.time_of_day import ANY_TIME, minutes_since_midnight


def _within(trip, minute: int) -> bool:
    return (
        abs(minutes_since_midnight(trip.started_at) - minute) <= 60
        or abs(minutes_since_midnight(trip.ended_at) - minute) <= 60
    )


def test_any_time_returns_the_same_frame(day_trips: pd.DataFrame) -> None:
    """Given the any-time sentinel, when filtering, then the input itself comes back."""
    assert filter_trips(day_trips, ANY_TIME) is day_trips


@pytest.mark.parametrize("minute", [0, 10, 480, 540, 600, 720, 1065, 1439])
def test_kept_and_dropped_trips_follow_the_window(day_trips: pd.DataFrame, minute: int) -> None:
    """Given a minute, when filtering, then exactly the trips within an hour at either end remain."""
    kept = filter_trips(day_trips, minute)

    for trip in kept.itertuples():
        assert _within(trip, minute)

    dropped = day_trips.loc[~day_trips.index.isin(kept.index)]
    for trip in dropped.itertuples():
        assert not _within(trip, minute)


def test_window_edges_are_inclusive(trips_factory) -> None:
    """Given a trip starting exactly 60 minutes away, when filtering, then it is kept."""
    trips = trips_factory(
        [
            ("A", "B", "2024-03-01 09:00:00", "2024-03-01 09:10:00"),
            ("A", "B", "2024-03-01 08:59:00", "2024-03-01 08:59:30"),
        ]
    )

    kept = filter_trips(trips, 600)

    assert kept["started_at"].dt.strftime("%H:%M").tolist() == ["09:00"]


def test_end_time_alone_can_match(trips_factory) -> None:
    """Given a long trip that ends near the filter, when filtering, then it is kept."""
    trips = trips_factory([("A", "B", "2024-03-01 06:00:00", "2024-03-01 09:30:00")])

    assert len(filter_trips(trips, 600)) == 1


def test_window_does_not_wrap_around_midnight(trips_factory) -> None:
    """Given a trip at 23:50 and a filter at 00:10, when filtering, then it is excluded."""
    trips = trips_factory([("A", "B", "2024-03-01 23:50:00", "2024-03-01 23:55:00")])

    assert filter_trips(trips, 10).empty


def test_order_is_preserved(day_trips: pd.DataFrame) -> None:
    """Given several matching trips, when filtering, then input order is kept."""
    kept = filter_trips(day_trips, 510)

    assert kept.index.tolist() == sorted(kept.index.tolist())
    assert kept["start_station_id"].tolist() == ["A", "A", "X9"]


def test_empty_trips_stay_empty(trips_factory) -> None:
    """Given no trips, when filtering by a minute, then no trips and no error."""
    assert filter_trips(trips_factory([]), 600).empty


def test_invalid_minute_raises(day_trips: pd.DataFrame) -> None:
    """Given a minute outside the slider range, when filtering, then ValueError."""
    with pytest.raises(ValueError):
        filter_trips(day_trips, 1440)
