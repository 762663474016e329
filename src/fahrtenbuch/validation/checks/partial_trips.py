"""Partial trip gating check.

A logbook with unfinished trips cannot back a tax report. Any partial trip
produces exactly one aggregate error for the whole collection, plus one
informational warning per partial trip so users can find them. The other
checks still run on the complete trips of the same collection.
"""

from __future__ import annotations

from typing import List

from ..grouping import ValidationContext
from ..models import CheckResult


class PartialTripsCheck:
    """Gate validity on the absence of partial trips."""

    check_id = "partial_trips"

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        """Scan all input trips, including those without a vehicle.

        Returns:
            Two CheckResults: the aggregate error and the per-trip notices.
        """
        partial = [trip for trip in context.trips if trip.is_partial]

        errors: List[str] = []
        if partial:
            errors.append(
                f"{len(partial)} unvollständige Fahrten gefunden. Bitte vervollständigen "
                f"Sie diese Fahrten, bevor Sie einen Bericht erstellen."
            )

        notices = [
            f"Unvollständige Fahrt am {trip.date or '?'} um {trip.start_time or '?'} "
            f"ab {trip.start_location or '?'} (ID {trip.id})"
            for trip in partial
        ]

        return [
            CheckResult.for_rule(self.check_id, "incomplete", errors),
            CheckResult.for_rule(self.check_id, "notice", notices),
        ]
