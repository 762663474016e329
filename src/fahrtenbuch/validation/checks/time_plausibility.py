"""Time plausibility validation check.

Only complete trips take part; partial trips have no meaningful end time and
break the neighbour chain. Per trip, the end must not precede the start and
the duration should stay within a plausible bound. Per vehicle, consecutive
trips must not overlap in wall-clock time; touching trips are fine.
"""

from __future__ import annotations

from datetime import timedelta
from typing import List, Optional

from fahrtenbuch.core.models import Trip
from ..grouping import ValidationContext, trip_label
from ..models import CheckResult


class TimePlausibilityCheck:
    """Validate trip time order, durations and temporal overlaps per vehicle."""

    check_id = "time_plausibility"

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        """Walk every vehicle's chronological sequence of complete trips.

        Args:
            context: Validation context with per-vehicle ordered trips.

        Returns:
            Three CheckResults: end before start and overlaps (errors),
            long durations (warning).
        """
        reversed_times: List[str] = []
        overlaps: List[str] = []
        long_trips: List[str] = []
        max_duration = timedelta(hours=context.config.max_trip_duration_hours)

        for vehicle_id, trips in context.trips_by_vehicle.items():
            name = context.vehicle_name(vehicle_id)
            previous: Optional[Trip] = None

            for trip in trips:
                if trip.is_partial:
                    previous = None
                    continue

                start, end = trip.start_instant, trip.end_instant
                if start is not None and end is not None:
                    if end < start:
                        reversed_times.append(
                            f"{trip_label(trip)}: Endzeit ({trip.end_time}) liegt vor "
                            f"der Startzeit ({trip.start_time})"
                        )
                    elif end - start > max_duration:
                        hours = (end - start).total_seconds() / 3600
                        long_trips.append(
                            f"{trip_label(trip)}: Fahrtdauer von {hours:.1f} Stunden ist "
                            f"unrealistisch lang (Fahrzeug {name})"
                        )

                if previous is not None:
                    previous_end = previous.end_instant
                    if previous_end is not None and start is not None and previous_end > start:
                        overlaps.append(
                            f"Fahrzeug {name}: Zeitliche Überschneidung: Fahrt am "
                            f"{previous.date} ({previous.start_time}-{previous.end_time}) "
                            f"endet nach Beginn der Fahrt am {trip.date} "
                            f"({trip.start_time}-{trip.end_time})"
                        )
                previous = trip

        return [
            CheckResult.for_rule(self.check_id, "end_before_start", reversed_times),
            CheckResult.for_rule(self.check_id, "overlap", overlaps),
            CheckResult.for_rule(self.check_id, "long_duration", long_trips),
        ]
