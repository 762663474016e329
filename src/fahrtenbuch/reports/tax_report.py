"""Per-vehicle tax report (Finanzamtbericht) for one calendar year.

A report is only built from a logbook that passes validation; otherwise
``InvalidLogbookError`` is raised carrying the validation result, so callers
can show the blocking errors instead.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from fahrtenbuch.core.enums import TripPurpose
from fahrtenbuch.core.models import Trip, Vehicle
from fahrtenbuch.core.utils import format_distance, parse_date
from fahrtenbuch.validation import ValidationConfig, ValidationResult, validate
from .statistics import business_share, trips_to_frame

logger = logging.getLogger(__name__)


class InvalidLogbookError(ValueError):
    """Raised when a tax report is requested for a logbook with validation errors."""

    def __init__(self, result: ValidationResult, year: Optional[int] = None):
        self.result = result
        self.year = year
        scope = f" for {year}" if year is not None else ""
        super().__init__(
            f"Logbook{scope} has {len(result.errors)} validation errors; "
            f"a tax report cannot be generated"
        )


@dataclass(frozen=True)
class VehicleSummary:
    """Yearly odometer range and distances by purpose of one vehicle."""

    vehicle: Vehicle
    initial_odometer: int
    final_odometer: int
    business: int = 0
    private: int = 0
    commute: int = 0
    total: int = 0

    @property
    def business_share(self) -> float:
        return business_share(self.business, self.total)


@dataclass(frozen=True)
class TaxReport:
    """Tax report of one year, built from a validated logbook.

    Attributes:
        year: Calendar year covered.
        vehicles: One summary per vehicle with trips in that year.
        warnings: Validation warnings that remain for human review.
    """

    year: int
    vehicles: List[VehicleSummary] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def business(self) -> int:
        return sum(v.business for v in self.vehicles)

    @property
    def private(self) -> int:
        return sum(v.private for v in self.vehicles)

    @property
    def commute(self) -> int:
        return sum(v.commute for v in self.vehicles)

    @property
    def total(self) -> int:
        return sum(v.total for v in self.vehicles)

    @property
    def business_share(self) -> float:
        return business_share(self.business, self.total)

    def to_markdown(self) -> str:
        """Render the report as Markdown with German headings."""
        lines = [f"# Finanzamtbericht {self.year}", ""]
        if not self.vehicles:
            lines.append(f"Keine Fahrten für das Jahr {self.year} vorhanden.")
            lines.append("")
            return "\n".join(lines)

        lines.extend(
            [
                "| Fahrzeug | KM Anfang | KM Ende | Geschäftlich | Privat | Pendeln | Gesamt | Anteil geschäftlich |",
                "|---|---:|---:|---:|---:|---:|---:|---:|",
            ]
        )
        for s in self.vehicles:
            lines.append(
                f"| {s.vehicle.display_name} | {s.initial_odometer} | {s.final_odometer} "
                f"| {format_distance(s.business)} | {format_distance(s.private)} "
                f"| {format_distance(s.commute)} | {format_distance(s.total)} "
                f"| {s.business_share:.1f} % |"
            )
        lines.append(
            f"| **Gesamt** | | | {format_distance(self.business)} "
            f"| {format_distance(self.private)} | {format_distance(self.commute)} "
            f"| {format_distance(self.total)} | {self.business_share:.1f} % |"
        )
        lines.append("")

        if self.warnings:
            lines.append("## Hinweise")
            lines.append("")
            for msg in self.warnings:
                lines.append(f"- {msg}")
            lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        data = {
            "year": self.year,
            "vehicles": [
                {
                    "vehicle_id": s.vehicle.id,
                    "license_plate": s.vehicle.license_plate,
                    "initial_odometer": s.initial_odometer,
                    "final_odometer": s.final_odometer,
                    TripPurpose.BUSINESS.value: s.business,
                    TripPurpose.PRIVATE.value: s.private,
                    TripPurpose.COMMUTE.value: s.commute,
                    "total": s.total,
                    "business_share": s.business_share,
                }
                for s in self.vehicles
            ],
            "totals": {
                TripPurpose.BUSINESS.value: self.business,
                TripPurpose.PRIVATE.value: self.private,
                TripPurpose.COMMUTE.value: self.commute,
                "total": self.total,
                "business_share": self.business_share,
            },
            "warnings": self.warnings,
        }
        return json.dumps(data, indent=2, ensure_ascii=False)


def _in_scope(trip: Trip, year: int) -> bool:
    # Trips whose date cannot be attributed to a year still block the report.
    trip_date = parse_date(trip.date)
    return trip_date is None or trip_date.year == year


def build_tax_report(
    trips: Iterable[Trip],
    vehicles: Iterable[Vehicle],
    year: int,
    config: Optional[ValidationConfig] = None,
) -> TaxReport:
    """Validate a year's trips and summarize them per vehicle.

    Args:
        trips: All trips of the user.
        vehicles: The user's vehicles; trips of unknown vehicles are left out
            of the summary.
        year: Calendar year to report.
        config: Validation thresholds.

    Returns:
        TaxReport for the year.

    Raises:
        InvalidLogbookError: If validation of the year's trips finds errors.
    """
    vehicles = list(vehicles)
    year_trips = [t for t in trips if _in_scope(t, year)]

    result = validate(year_trips, vehicles, config)
    if not result.valid:
        logger.warning(
            "Refusing tax report for %s: %d validation errors", year, len(result.errors)
        )
        raise InvalidLogbookError(result, year)

    df = trips_to_frame(year_trips)
    df = df[df["year"] == year]

    summaries = []
    by_id = {str(v.id): v for v in vehicles}
    for vehicle_id, group in df.groupby("vehicle_id", sort=False):
        vehicle = by_id.get(str(vehicle_id))
        if vehicle is None:
            logger.warning("Skipping %d trips of unknown vehicle %s", len(group), vehicle_id)
            continue
        distances = group.groupby("purpose")["distance"].sum().to_dict()
        summaries.append(
            VehicleSummary(
                vehicle=vehicle,
                initial_odometer=int(group["start_odometer"].min()),
                final_odometer=int(group["end_odometer"].max()),
                business=int(distances.get(TripPurpose.BUSINESS.value, 0)),
                private=int(distances.get(TripPurpose.PRIVATE.value, 0)),
                commute=int(distances.get(TripPurpose.COMMUTE.value, 0)),
                total=int(group["distance"].sum()),
            )
        )

    logger.info("Built tax report for %s covering %d vehicles", year, len(summaries))
    return TaxReport(year=year, vehicles=summaries, warnings=list(result.warnings))
