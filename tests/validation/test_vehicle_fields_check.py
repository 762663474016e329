"""Tests for the VehicleFieldsCheck validation."""

from dataclasses import replace
from datetime import date

import pytest

from fahrtenbuch.core.models import Vehicle
from fahrtenbuch.validation import validate
from fahrtenbuch.validation.checks.vehicle_fields import VehicleFieldsCheck
from fahrtenbuch.validation.grouping import ValidationContext


def _run(vehicles):
    return VehicleFieldsCheck().validate(ValidationContext.build([], vehicles))


def test_complete_vehicle_passes(vehicle):
    """Test that a fully described vehicle passes all rules."""
    results = _run([vehicle])

    assert [r.rule for r in results] == ["missing_field", "invalid_year", "odometer_range"]
    assert [r.severity for r in results] == ["warning", "warning", "error"]
    assert all(r.passed for r in results)


def test_missing_descriptive_fields():
    """Test that plate, make and model are each reported."""
    missing, _, _ = _run([Vehicle(id="v9")])

    assert missing.messages == [
        "Fahrzeug v9: Kennzeichen ist erforderlich",
        "Fahrzeug v9: Marke ist erforderlich",
        "Fahrzeug v9: Modell ist erforderlich",
    ]


@pytest.mark.parametrize("year", [1899, date.today().year + 2, "neu"])
def test_implausible_year(vehicle, year):
    """Test that the year of manufacture must lie between 1900 and next year."""
    _, invalid_years, _ = _run([replace(vehicle, year=year)])

    assert invalid_years.fail_count == 1
    assert "Baujahr muss zwischen 1900" in invalid_years.messages[0]


@pytest.mark.parametrize("year", [1900, date.today().year + 1, None])
def test_plausible_year(vehicle, year):
    _, invalid_years, _ = _run([replace(vehicle, year=year)])

    assert invalid_years.passed


def test_current_below_initial_is_error(vehicle):
    """Test that the current reading may not be below the initial one."""
    _, _, odometer = _run([replace(vehicle, initial_odometer=5000, current_odometer=4000)])

    assert odometer.messages == [
        "Fahrzeug B-AB 1234 (VW Golf): Aktueller Kilometerstand (4000) ist kleiner als "
        "Anfangs-Kilometerstand (5000)"
    ]


def test_negative_initial_reading(vehicle):
    _, _, odometer = _run([replace(vehicle, initial_odometer=-1, current_odometer=None)])

    assert odometer.fail_count == 1
    assert "darf nicht negativ sein (-1)" in odometer.messages[0]


def test_unknown_readings_are_not_checked():
    """Test that missing odometer readings produce no range findings."""
    _, _, odometer = _run([Vehicle(id="v1", license_plate="X", make="Y", model="Z")])

    assert odometer.passed


def test_vehicle_errors_block_validity(continuous_trips, vehicle):
    """Test that an inconsistent vehicle record makes the logbook invalid."""

    broken = replace(vehicle, initial_odometer=300, current_odometer=200)
    result = validate(continuous_trips, [broken])

    assert result.valid is False
    assert result.errors[-1].startswith("Fahrzeug B-AB 1234 (VW Golf): Aktueller Kilometerstand")
