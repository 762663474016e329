"""Per-vehicle grouping and chronological ordering of trips.

Every per-vehicle check walks the same ordered sequences, so they are built
once per validation run and shared through ``ValidationContext``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from fahrtenbuch.core.models import Trip, Vehicle
from .config import DEFAULT_CONFIG, ValidationConfig


def _chronological_key(trip: Trip) -> Tuple[int, datetime]:
    # Unparsable start instants sort after all parsable ones.
    instant = trip.start_instant
    if instant is None:
        return (1, datetime.min)
    return (0, instant)


def group_trips_by_vehicle(trips: Iterable[Trip]) -> Dict[str, List[Trip]]:
    """Partition trips by vehicle and sort each partition chronologically.

    Trips without a vehicle reference are left out. Partitions are sorted by
    the combined date and start time; the sort is stable, so trips with equal
    start instants keep their input order.

    Args:
        trips: Trip records in any order.

    Returns:
        Mapping of vehicle id to its trips in chronological order. Vehicles
        appear in the order they are first referenced in the input.

    Examples:
        >>> grouped = group_trips_by_vehicle([late_trip, early_trip, other_vehicle_trip])
        >>> [t.id for t in grouped["v1"]]
        ['early', 'late']
    """
    grouped: Dict[str, List[Trip]] = {}
    for trip in trips:
        if not trip.has_vehicle:
            continue
        grouped.setdefault(str(trip.vehicle_id), []).append(trip)

    for vehicle_trips in grouped.values():
        vehicle_trips.sort(key=_chronological_key)
    return grouped


@dataclass(frozen=True)
class ValidationContext:
    """Snapshot of everything a check may look at during one validation run.

    Attributes:
        trips: All input trips, in input order.
        trips_by_vehicle: Output of ``group_trips_by_vehicle`` for ``trips``.
        vehicles: Known vehicles keyed by id, as a string like the trip groups.
        config: Thresholds for the plausibility rules.
    """

    trips: Tuple[Trip, ...]
    trips_by_vehicle: Mapping[str, List[Trip]]
    vehicles: Mapping[str, Vehicle] = field(default_factory=dict)
    config: ValidationConfig = DEFAULT_CONFIG

    @classmethod
    def build(
        cls,
        trips: Sequence[Trip],
        vehicles: Optional[Iterable[Vehicle]] = None,
        config: Optional[ValidationConfig] = None,
    ) -> "ValidationContext":
        trips = tuple(trips)
        return cls(
            trips=trips,
            trips_by_vehicle=group_trips_by_vehicle(trips),
            vehicles={str(v.id): v for v in (vehicles or [])},
            config=config or DEFAULT_CONFIG,
        )

    def vehicle_name(self, vehicle_id: str) -> str:
        """Display name of a vehicle, falling back to its id when unknown."""
        vehicle = self.vehicles.get(str(vehicle_id))
        return vehicle.display_name if vehicle is not None else str(vehicle_id)


def trip_label(trip: Trip) -> str:
    """Identify a trip in messages by its date and id."""
    return f"Fahrt am {trip.date or '?'} (ID {trip.id})"
