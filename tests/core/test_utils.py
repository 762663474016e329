"""Tests for core parsing helpers and domain records."""

from datetime import date, datetime, time

import pytest

from fahrtenbuch.core.enums import TripPurpose, TripStatus
from fahrtenbuch.core.models import Vehicle
from fahrtenbuch.core.schemas import get_required_fields
from fahrtenbuch.core.utils import (
    as_reading,
    combine_instant,
    format_distance,
    is_blank,
    parse_date,
    parse_time,
)


@pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
def test_is_blank_true(value):
    assert is_blank(value) is True


@pytest.mark.parametrize("value", [0, "x", 0.0, False])
def test_is_blank_false(value):
    """Test that zero and other falsy values are real values."""
    assert is_blank(value) is False


def test_parse_date():
    assert parse_date("2024-03-01") == date(2024, 3, 1)
    assert parse_date(datetime(2024, 3, 1, 12, 0)) == date(2024, 3, 1)
    assert parse_date("2024-02-30") is None
    assert parse_date(20240301) is None
    assert parse_date("20240301") is None
    assert parse_date("2024-3-1") is None


@pytest.mark.parametrize(
    "value,expected",
    [
        ("08:30", time(8, 30)),
        ("8:30", time(8, 30)),
        ("23:59:59", time(23, 59, 59)),
        ("24:00", None),
        ("8.30", None),
        ("", None),
    ],
)
def test_parse_time(value, expected):
    assert parse_time(value) == expected


def test_combine_instant():
    assert combine_instant("2024-03-01", "09:15") == datetime(2024, 3, 1, 9, 15)
    assert combine_instant("2024-03-01", None) is None
    assert combine_instant("bad", "09:15") is None


@pytest.mark.parametrize(
    "value,expected",
    [
        (150, 150),
        (0, 0),
        (150.0, 150),
        (" 42 ", 42),
        (150.5, None),
        (float("inf"), None),
        (True, None),
        ("abc", None),
        (None, None),
    ],
)
def test_as_reading(value, expected):
    assert as_reading(value) == expected


def test_format_distance():
    assert format_distance(0) == "0 km"
    assert format_distance(12345) == "12.345 km"


class TestRecords:
    """Tests for Trip and Vehicle derived properties."""

    def test_distance(self, make_trip):
        assert make_trip(start_odometer=100, end_odometer=150).distance == 50
        assert make_trip(end_odometer=None).distance is None
        assert make_trip(start_odometer="abc").distance is None

    def test_instants(self, make_trip):
        trip = make_trip(date="2024-03-01", start_time="08:00", end_time="09:30")

        assert trip.start_instant == datetime(2024, 3, 1, 8, 0)
        assert trip.end_instant == datetime(2024, 3, 1, 9, 30)

    def test_partial_and_vehicle_flags(self, make_trip, make_partial_trip):
        assert make_partial_trip().is_partial is True
        assert make_trip().is_partial is False
        assert make_trip(vehicle_id="").has_vehicle is False

    def test_vehicle_display_name(self):
        assert Vehicle(id="v1", license_plate="B-AB 1", make="VW", model="Golf").display_name == (
            "B-AB 1 (VW Golf)"
        )
        assert Vehicle(id="v1").display_name == "v1"
        assert Vehicle(id=7).display_name == "7"

    def test_purpose_labels(self):
        assert TripPurpose.BUSINESS.label == "Geschäftlich"
        assert TripPurpose("private") is TripPurpose.PRIVATE


def test_required_fields_depend_on_status():
    """Test that end fields are only required for complete trips."""
    complete = {attr for attr, _ in get_required_fields(TripStatus.COMPLETE)}
    partial = {attr for attr, _ in get_required_fields(TripStatus.PARTIAL)}

    assert complete - partial == {"end_time", "end_location"}
    assert "driver_name" in partial
