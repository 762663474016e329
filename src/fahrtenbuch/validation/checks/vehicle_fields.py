"""Vehicle record validation check.

Vehicles only name the trips in messages, so missing descriptive fields and an
implausible year of manufacture are warnings. Odometer readings outside their
valid range are errors: a current reading below the initial one means the
vehicle master data contradicts the logbook it anchors.
"""

from __future__ import annotations

from datetime import date
from typing import List

from fahrtenbuch.core.models import Vehicle
from fahrtenbuch.core.utils import as_reading, is_blank
from ..config import MIN_VEHICLE_YEAR
from ..grouping import ValidationContext
from ..models import CheckResult

REQUIRED_VEHICLE_FIELDS = [
    ("license_plate", "Kennzeichen"),
    ("make", "Marke"),
    ("model", "Modell"),
]


class VehicleFieldsCheck:
    """Validate required fields, year and odometer range of every vehicle."""

    check_id = "vehicle_fields"

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        """Check each known vehicle on its own.

        Returns:
            Three CheckResults: missing fields and invalid years (warnings),
            odometer range (error).
        """
        missing: List[str] = []
        invalid_years: List[str] = []
        odometer: List[str] = []
        max_year = date.today().year + 1

        for vehicle_id, vehicle in context.vehicles.items():
            label = f"Fahrzeug {context.vehicle_name(vehicle_id)}"
            for attr, field_label in REQUIRED_VEHICLE_FIELDS:
                if is_blank(getattr(vehicle, attr)):
                    missing.append(f"{label}: {field_label} ist erforderlich")

            if vehicle.year is not None:
                year = as_reading(vehicle.year)
                if year is None or not MIN_VEHICLE_YEAR <= year <= max_year:
                    invalid_years.append(
                        f"{label}: Baujahr muss zwischen {MIN_VEHICLE_YEAR} und "
                        f"{max_year} liegen ({vehicle.year})"
                    )

            odometer.extend(self._odometer_range(label, vehicle))

        return [
            CheckResult.for_rule(self.check_id, "missing_field", missing),
            CheckResult.for_rule(self.check_id, "invalid_year", invalid_years),
            CheckResult.for_rule(self.check_id, "odometer_range", odometer),
        ]

    @staticmethod
    def _odometer_range(label: str, vehicle: Vehicle) -> List[str]:
        initial = as_reading(vehicle.initial_odometer)
        current = as_reading(vehicle.current_odometer)
        messages = []
        if initial is not None and initial < 0:
            messages.append(f"{label}: Anfangs-Kilometerstand darf nicht negativ sein ({initial})")
        if initial is not None and current is not None and current < initial:
            messages.append(
                f"{label}: Aktueller Kilometerstand ({current}) ist kleiner als "
                f"Anfangs-Kilometerstand ({initial})"
            )
        return messages
