"""Validation system for Fahrtenbuch Tools.

This module provides the logbook consistency validator:

- **Models**: CheckResult, ValidationReport, ValidationResult - validation result data structures
- **Checks**: Individual validation passes (see validation/checks/)
- **Grouping**: Per-vehicle chronological ordering shared by the checks
- **Config**: Plausibility thresholds and severity rules (import from .config)
- **Registry**: run_validation(), validate(), print_report() - check orchestration

Public API:
    ValidationResult: ``{valid, errors, warnings}`` handed to consumers
    ValidationReport: Per-check results with summary and export helpers
    ValidationConfig: Plausibility thresholds, loadable from YAML
    validate: Validate trips and return a ValidationResult
    run_validation: Validate trips and return a ValidationReport
    print_report: Display validation results to console

Usage:
    >>> from fahrtenbuch.validation import validate
    >>> result = validate(trips, vehicles)
    >>> if not result.valid:
    ...     for message in result.errors:
    ...         print(message)
"""

from __future__ import annotations

from .config import ValidationConfig
from .grouping import group_trips_by_vehicle
from .models import CheckResult, ValidationReport, ValidationResult
from .registry import print_report, run_validation, validate

__all__ = [
    # Data models
    "CheckResult",
    "ValidationReport",
    "ValidationResult",
    # Configuration
    "ValidationConfig",
    # Functions
    "group_trips_by_vehicle",
    "print_report",
    "run_validation",
    "validate",
]
