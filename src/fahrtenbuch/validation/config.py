"""Validation configuration constants.

This module centralizes the plausibility thresholds and severity rules of the
logbook validator. Adjust the defaults here, or load overrides from a YAML file
with ``ValidationConfig.from_yaml``.

Severity Levels:
    - "error": Violations that make the logbook unacceptable for a tax report
    - "warning": Plausibility concerns that warrant review but never block

YAML Format:
    max_trip_distance_km: 1000
    max_trip_duration_hours: 24
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union

import yaml

# ============================================================================
# THRESHOLD DEFAULTS
# ============================================================================

# Single-trip distance above which a trip is flagged for review (km)
MAX_TRIP_DISTANCE_KM = 1000

# Single-trip duration above which a trip is flagged for review (hours)
MAX_TRIP_DURATION_HOURS = 24

# Earliest plausible year of manufacture; the latest is next calendar year
MIN_VEHICLE_YEAR = 1900


# ============================================================================
# SEVERITY RULES
# ============================================================================
# Format: {check_id: {rule: severity}}

RECORD_FIELDS_SEVERITY = {
    "missing_field": "error",
    "invalid_value": "error",
    "odometer_order": "error",
}

ODOMETER_CONTINUITY_SEVERITY = {
    "overlap": "error",
    "gap": "warning",
    "jump": "warning",
}

TIME_PLAUSIBILITY_SEVERITY = {
    "end_before_start": "error",
    "overlap": "error",
    "long_duration": "warning",
}

PARTIAL_TRIPS_SEVERITY = {
    "incomplete": "error",
    "notice": "warning",
}

VEHICLE_FIELDS_SEVERITY = {
    "missing_field": "warning",
    "invalid_year": "warning",
    "odometer_range": "error",
}

_SEVERITY_MAP = {
    "record_fields": RECORD_FIELDS_SEVERITY,
    "odometer_continuity": ODOMETER_CONTINUITY_SEVERITY,
    "time_plausibility": TIME_PLAUSIBILITY_SEVERITY,
    "partial_trips": PARTIAL_TRIPS_SEVERITY,
    "vehicle_fields": VEHICLE_FIELDS_SEVERITY,
}


def get_severity(check_id: str, rule: str) -> str:
    """Get severity level for a specific check and rule.

    Args:
        check_id: Validation check identifier (e.g., "odometer_continuity").
        rule: Rule within the check (e.g., "gap").

    Returns:
        Severity level: "error" or "warning".

    Raises:
        ValueError: If check_id is unknown or rule is invalid.

    Examples:
        >>> get_severity("odometer_continuity", "overlap")
        'error'
        >>> get_severity("odometer_continuity", "gap")
        'warning'
    """
    if check_id not in _SEVERITY_MAP:
        raise ValueError(f"Unknown check_id: {check_id}")

    severity_config = _SEVERITY_MAP[check_id]

    if rule not in severity_config:
        raise ValueError(
            f"Invalid rule '{rule}' for check '{check_id}'. "
            f"Valid rules: {list(severity_config.keys())}"
        )

    return severity_config[rule]


# ============================================================================
# RUNTIME CONFIGURATION
# ============================================================================


@dataclass(frozen=True)
class ValidationConfig:
    """Thresholds applied by the plausibility checks.

    Attributes:
        max_trip_distance_km: Distances strictly above this raise a jump warning.
        max_trip_duration_hours: Durations strictly above this raise a warning.
    """

    max_trip_distance_km: float = MAX_TRIP_DISTANCE_KM
    max_trip_duration_hours: float = MAX_TRIP_DURATION_HOURS

    def __post_init__(self) -> None:
        """Validate field constraints."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{f.name} must be a number, got {value!r}")
            if value <= 0:
                raise ValueError(f"{f.name} must be positive, got {value}")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ValidationConfig":
        """Load thresholds from a YAML file; absent keys keep their defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid YAML, is not a mapping, or
                contains unknown keys or invalid values.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Validation config not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse validation config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Validation config {path} must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown keys in validation config {path}: {', '.join(unknown)}. "
                f"Valid keys: {', '.join(sorted(known))}"
            )
        return cls(**data)


DEFAULT_CONFIG = ValidationConfig()
