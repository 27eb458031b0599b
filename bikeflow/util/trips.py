# bikeflow/util/trips.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd
from tqdm import tqdm

from bikeflow.util.console import done, info, warn
from bikeflow.util.http import is_url

DEFAULT_TRIPS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-traffic-2024-03.csv"

STATION_COLUMNS = ("start_station_id", "end_station_id")
TIME_COLUMNS = ("started_at", "ended_at")

CHUNK_ROWS = 100_000


@dataclass
class LoadedTrips:
    """
    trips: DataFrame with start_station_id, end_station_id (str),
           started_at, ended_at (datetime64) plus any other source columns
    malformed: rows dropped because a timestamp could not be parsed
    """
    trips: pd.DataFrame
    malformed: int = 0


def empty_trips() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "start_station_id": pd.Series(dtype="object"),
            "end_station_id": pd.Series(dtype="object"),
            "started_at": pd.Series(dtype="datetime64[ns]"),
            "ended_at": pd.Series(dtype="datetime64[ns]"),
        }
    )


def _check_columns(df: pd.DataFrame, source) -> None:
    missing = [c for c in STATION_COLUMNS + TIME_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Trips source {source} missing columns: {', '.join(missing)}")


def parse_trip_times(
    df: pd.DataFrame,
    time_format: str | None = "ISO8601",
) -> tuple[pd.DataFrame, int]:
    """
    Parse started_at/ended_at in place of the raw strings.

    Rows where either timestamp does not parse are dropped and counted,
    they never reach filtering or aggregation.
    """
    out = df.copy()
    for col in TIME_COLUMNS:
        out[col] = pd.to_datetime(out[col], format=time_format, errors="coerce")

    bad = out["started_at"].isna() | out["ended_at"].isna()
    return out.loc[~bad], int(bad.sum())


def load_trips(
    source=DEFAULT_TRIPS_URL,
    *,
    time_format: str | None = "ISO8601",
    chunk_rows: int = CHUNK_ROWS,
) -> LoadedTrips:
    """
    Load a Bluebikes trip CSV (local path or URL) with columns like:

      ride_id, rideable_type, started_at, ended_at,
      start_station_id, end_station_id, is_member, ...

    Station ids are kept as strings so they join against station short_name.
    """
    if not is_url(source):
        source = Path(source)

    info(f"Reading trips from {source}…")

    parts = []
    malformed = 0
    with pd.read_csv(
        source,
        dtype={c: str for c in STATION_COLUMNS},
        chunksize=int(chunk_rows),
    ) as reader:
        for chunk in tqdm(reader, desc="Reading trips", unit="chunk"):
            chunk.columns = [c.strip() for c in chunk.columns]
            _check_columns(chunk, source)

            parsed, bad = parse_trip_times(chunk, time_format=time_format)
            parts.append(parsed)
            malformed += bad

    trips = pd.concat(parts, ignore_index=True) if parts else empty_trips()

    if malformed:
        warn(f"Dropped {malformed} trips with unparseable timestamps")
    done(f"Loaded {len(trips):,} trips.")

    return LoadedTrips(trips=trips, malformed=malformed)
