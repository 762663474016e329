"""Validation check registry and runner.

This module orchestrates validation checks:
- ALL_CHECKS: List of all validation check instances, in execution order
- run_validation(): Executes every check and returns a ValidationReport
- validate(): Executes every check and returns the ValidationResult contract
- print_report(): Displays validation results to console
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from fahrtenbuch.core.models import Trip, Vehicle
from .checks.record_fields import RecordFieldsCheck
from .checks.odometer_continuity import OdometerContinuityCheck
from .checks.time_plausibility import TimePlausibilityCheck
from .checks.partial_trips import PartialTripsCheck
from .checks.vehicle_fields import VehicleFieldsCheck
from .config import ValidationConfig
from .grouping import ValidationContext
from .models import CheckResult, ValidationReport, ValidationResult

logger = logging.getLogger(__name__)

# Registry of all validation checks. Every check runs unconditionally; the
# order fixes the order of the concatenated error and warning lists. Vehicle
# master data is checked after all trip checks.
ALL_CHECKS = [
    RecordFieldsCheck(),
    OdometerContinuityCheck(),
    TimePlausibilityCheck(),
    PartialTripsCheck(),
    VehicleFieldsCheck(),
]


def run_validation(
    trips: Sequence[Trip],
    vehicles: Optional[Iterable[Vehicle]] = None,
    config: Optional[ValidationConfig] = None,
    source: Optional[str] = None,
) -> ValidationReport:
    """Run all validation checks on a trip collection.

    Malformed trip data never raises; every problem becomes a message on the
    report. Inputs are not mutated.

    Args:
        trips: Trip records of one user, in any order.
        vehicles: Vehicles referenced by the trips; used for readable messages.
        config: Plausibility thresholds. Defaults to ``DEFAULT_CONFIG``.
        source: Optional label of where the trips came from, shown in reports.

    Returns:
        ValidationReport containing the results of all checks.

    Examples:
        >>> report = run_validation(trips, vehicles)
        >>> print(report.summary())
    """
    context = ValidationContext.build(trips, vehicles, config)

    all_results: List[CheckResult] = []
    for check in ALL_CHECKS:
        results = check.validate(context)
        logger.debug(
            "Check %s: %d failures",
            check.check_id,
            sum(r.fail_count for r in results),
        )
        all_results.extend(results)

    report = ValidationReport(
        results=all_results,
        trip_count=len(context.trips),
        vehicle_count=len(context.trips_by_vehicle),
        source=source,
    )
    logger.info(
        "Validated %d trips across %d vehicles: %d errors, %d warnings",
        report.trip_count,
        report.vehicle_count,
        report.get_error_count(),
        report.get_warning_count(),
    )
    return report


def validate(
    trips: Sequence[Trip],
    vehicles: Optional[Iterable[Vehicle]] = None,
    config: Optional[ValidationConfig] = None,
) -> ValidationResult:
    """Validate a trip collection and return ``{valid, errors, warnings}``.

    ``valid`` is False exactly when at least one error was found; warnings
    never affect it. Consumers must refuse to build a tax report when it is
    False.

    Examples:
        >>> result = validate(trips, vehicles)
        >>> result.valid
        True
    """
    return run_validation(trips, vehicles, config).to_result()


def print_report(report: ValidationReport) -> None:
    """Print validation report to console.

    Displays a summary followed by details of all failed checks.

    Args:
        report: ValidationReport to display.
    """
    print(report.to_console_summary())
