"""Yearly trip statistics.

Counts and distances are aggregated per purpose over complete trips with
numeric odometer readings. Partial trips have no distance yet and are counted
separately.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional

import pandas as pd

from fahrtenbuch.core.enums import TripPurpose
from fahrtenbuch.core.models import Trip
from fahrtenbuch.core.utils import as_reading, parse_date

STAT_COLUMNS = ["vehicle_id", "year", "purpose", "distance"]


def trips_to_frame(trips: Iterable[Trip]) -> pd.DataFrame:
    """Tabulate complete trips with a known distance and a parsable date.

    Returns:
        DataFrame with columns ``vehicle_id``, ``year``, ``purpose`` (enum
        value), ``distance``, ``start_odometer`` and ``end_odometer``.
    """
    rows: List[Dict] = []
    for trip in trips:
        trip_date = parse_date(trip.date)
        if trip.is_partial or trip.distance is None or trip_date is None:
            continue
        purpose = trip.purpose.value if isinstance(trip.purpose, TripPurpose) else trip.purpose
        rows.append(
            {
                "vehicle_id": trip.vehicle_id,
                "year": trip_date.year,
                "purpose": purpose,
                "distance": trip.distance,
                "start_odometer": as_reading(trip.start_odometer),
                "end_odometer": as_reading(trip.end_odometer),
            }
        )
    return pd.DataFrame(
        rows, columns=STAT_COLUMNS + ["start_odometer", "end_odometer"]
    )


def business_share(business_distance: float, total_distance: float) -> float:
    """Business share of the total distance in percent, 0.0 for no distance."""
    if total_distance <= 0:
        return 0.0
    return round(business_distance / total_distance * 100, 1)


@dataclass(frozen=True)
class TripStatistics:
    """Trip counts and distances per purpose for one year (or all years)."""

    year: Optional[int]
    total_trips: int = 0
    business_trips: int = 0
    private_trips: int = 0
    commute_trips: int = 0
    partial_trips: int = 0
    total_distance: int = 0
    business_distance: int = 0
    private_distance: int = 0
    commute_distance: int = 0

    @property
    def business_share(self) -> float:
        return business_share(self.business_distance, self.total_distance)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["business_share"] = self.business_share
        return data


def calculate_yearly_stats(trips: Iterable[Trip], year: Optional[int] = None) -> TripStatistics:
    """Aggregate trip statistics, optionally restricted to one calendar year.

    Args:
        trips: Trip records in any order.
        year: Calendar year to restrict to; None aggregates all trips.

    Returns:
        TripStatistics for the selected trips.

    Examples:
        >>> stats = calculate_yearly_stats(trips, year=2024)
        >>> stats.business_distance, stats.business_share
        (1200, 60.0)
    """
    trips = list(trips)
    partial = sum(
        1
        for t in trips
        if t.is_partial and (year is None or getattr(parse_date(t.date), "year", None) == year)
    )

    df = trips_to_frame(trips)
    if year is not None:
        df = df[df["year"] == year]

    counts = df.groupby("purpose")["distance"].count().to_dict()
    distances = df.groupby("purpose")["distance"].sum().to_dict()

    return TripStatistics(
        year=year,
        total_trips=len(df),
        business_trips=int(counts.get(TripPurpose.BUSINESS.value, 0)),
        private_trips=int(counts.get(TripPurpose.PRIVATE.value, 0)),
        commute_trips=int(counts.get(TripPurpose.COMMUTE.value, 0)),
        partial_trips=partial,
        total_distance=int(df["distance"].sum()),
        business_distance=int(distances.get(TripPurpose.BUSINESS.value, 0)),
        private_distance=int(distances.get(TripPurpose.PRIVATE.value, 0)),
        commute_distance=int(distances.get(TripPurpose.COMMUTE.value, 0)),
    )
