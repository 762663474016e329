"""Record-level field validation check.

Every trip is checked on its own: required fields must be populated for its
completion state, dates and times must parse, and odometer readings must be
non-negative numbers with the end reading not below the start reading.
All violations of a trip are reported; there is no early exit.
"""

from __future__ import annotations

from typing import List

from fahrtenbuch.core.enums import TripPurpose
from fahrtenbuch.core.models import Trip
from fahrtenbuch.core.schemas import ODOMETER_FIELDS, get_required_fields
from fahrtenbuch.core.utils import as_reading, is_blank, parse_date, parse_time
from ..grouping import ValidationContext, trip_label
from ..models import CheckResult


def _is_valid_purpose(value: object) -> bool:
    if isinstance(value, TripPurpose):
        return True
    try:
        TripPurpose(value)
    except ValueError:
        return False
    return True


class RecordFieldsCheck:
    """Validate required fields, value formats and odometer order per trip."""

    check_id = "record_fields"

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        """Check every trip's fields independently of its neighbours.

        Args:
            context: Validation context; only ``context.trips`` is used.

        Returns:
            Three CheckResults: missing fields, invalid values, odometer order.
        """
        missing: List[str] = []
        invalid: List[str] = []
        order: List[str] = []

        for trip in context.trips:
            missing.extend(self._missing_fields(trip))
            invalid.extend(self._invalid_values(trip))
            order.extend(self._odometer_order(trip))

        return [
            CheckResult.for_rule(self.check_id, "missing_field", missing),
            CheckResult.for_rule(self.check_id, "invalid_value", invalid),
            CheckResult.for_rule(self.check_id, "odometer_order", order),
        ]

    def _missing_fields(self, trip: Trip) -> List[str]:
        messages = []
        for attr, label in get_required_fields(trip.status):
            if is_blank(getattr(trip, attr)):
                messages.append(f"{trip_label(trip)}: {label} fehlt")
        if not trip.is_partial:
            for attr, label in ODOMETER_FIELDS:
                if is_blank(getattr(trip, attr)):
                    messages.append(f"{trip_label(trip)}: {label} fehlt")
        return messages

    def _invalid_values(self, trip: Trip) -> List[str]:
        messages = []
        label = trip_label(trip)

        if not is_blank(trip.date) and parse_date(trip.date) is None:
            messages.append(f"{label}: Ungültiges Datum '{trip.date}'")
        if not is_blank(trip.start_time) and parse_time(trip.start_time) is None:
            messages.append(f"{label}: Ungültige Startzeit '{trip.start_time}'")
        if not is_blank(trip.end_time) and parse_time(trip.end_time) is None:
            messages.append(f"{label}: Ungültige Endzeit '{trip.end_time}'")
        if not is_blank(trip.purpose) and not _is_valid_purpose(trip.purpose):
            messages.append(f"{label}: Ungültiger Zweck '{trip.purpose}'")

        # Readings recorded on partial trips must be sane as well.
        for attr, field_label in ODOMETER_FIELDS:
            value = getattr(trip, attr)
            if is_blank(value):
                continue
            reading = as_reading(value)
            if reading is None:
                messages.append(f"{label}: {field_label} ist keine gültige Zahl ('{value}')")
            elif reading < 0:
                messages.append(f"{label}: {field_label} darf nicht negativ sein ({reading})")
        return messages

    def _odometer_order(self, trip: Trip) -> List[str]:
        start = as_reading(trip.start_odometer)
        end = as_reading(trip.end_odometer)
        if start is None or end is None or end >= start:
            return []
        return [
            f"{trip_label(trip)}: End-Kilometerstand ({end}) ist kleiner als "
            f"Start-Kilometerstand ({start})"
        ]
