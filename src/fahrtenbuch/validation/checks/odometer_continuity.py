"""Odometer continuity validation check.

For each vehicle, consecutive complete trips must form a continuous odometer
chain: the next trip starts where the previous one ended. A start below the
previous end means the odometer went backwards in time and is an error. A
start above it means trips were seemingly not logged; since the logbook cannot
know whether the vehicle actually moved in between, that is only a warning.

Partial trips break the chain: no comparison is made across them. Very long
single trips are flagged as implausible jumps for human review.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from fahrtenbuch.core.models import Trip
from fahrtenbuch.core.utils import as_reading
from ..grouping import ValidationContext
from ..models import CheckResult


class OdometerContinuityCheck:
    """Validate odometer overlaps, gaps and implausible jumps per vehicle."""

    check_id = "odometer_continuity"

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        """Walk every vehicle's chronological trip sequence.

        Args:
            context: Validation context with per-vehicle ordered trips.

        Returns:
            Three CheckResults: overlaps (error), gaps and jumps (warnings).
        """
        overlaps: List[str] = []
        gaps: List[str] = []
        jumps: List[str] = []
        max_distance = context.config.max_trip_distance_km

        for vehicle_id, trips in context.trips_by_vehicle.items():
            name = context.vehicle_name(vehicle_id)
            previous: Optional[Trip] = None

            for trip in trips:
                if trip.is_partial:
                    previous = None
                    continue

                distance = trip.distance
                if distance is not None and distance > max_distance:
                    jumps.append(
                        f"Fahrzeug {name}: Unrealistischer Kilometersprung am {trip.date} "
                        f"({distance} km in einer Fahrt, ID {trip.id})"
                    )

                if previous is not None:
                    message = self._compare(name, previous, trip)
                    if message is not None:
                        kind, text = message
                        (overlaps if kind == "overlap" else gaps).append(text)
                previous = trip

        return [
            CheckResult.for_rule(self.check_id, "overlap", overlaps),
            CheckResult.for_rule(self.check_id, "gap", gaps),
            CheckResult.for_rule(self.check_id, "jump", jumps),
        ]

    @staticmethod
    def _compare(name: str, earlier: Trip, later: Trip) -> Optional[Tuple[str, str]]:
        previous_end = as_reading(earlier.end_odometer)
        next_start = as_reading(later.start_odometer)
        if previous_end is None or next_start is None:
            return None

        if next_start < previous_end:
            return (
                "overlap",
                f"Fahrzeug {name}: Kilometerstand-Überschneidung: Fahrt am {later.date} "
                f"beginnt bei {next_start} km, die vorherige Fahrt am {earlier.date} "
                f"endete bei {previous_end} km",
            )
        if next_start > previous_end:
            return (
                "gap",
                f"Fahrzeug {name}: Lücke von {next_start - previous_end} km zwischen "
                f"Fahrt am {earlier.date} (Ende {previous_end} km) und "
                f"Fahrt am {later.date} (Start {next_start} km)",
            )
        return None
