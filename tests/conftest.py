"""Shared pytest configuration, fixtures, and builders for logbook testing."""

from typing import Callable

import pytest

from fahrtenbuch.core.enums import TripPurpose, TripStatus
from fahrtenbuch.core.models import Trip, Vehicle


def build_trip(**overrides) -> Trip:
    """Build a complete, valid business trip; keyword arguments override fields."""
    fields = {
        "id": "t1",
        "vehicle_id": "v1",
        "date": "2024-03-01",
        "start_time": "08:00",
        "end_time": "09:00",
        "start_location": "Berlin",
        "end_location": "Potsdam",
        "purpose": TripPurpose.BUSINESS,
        "start_odometer": 100,
        "end_odometer": 150,
        "driver_name": "Max Mustermann",
        "status": TripStatus.COMPLETE,
    }
    fields.update(overrides)
    return Trip(**fields)


def build_partial_trip(**overrides) -> Trip:
    """Build a partial trip that only knows its start."""
    fields = {
        "id": "p1",
        "end_time": None,
        "end_location": None,
        "end_odometer": None,
        "status": TripStatus.PARTIAL,
    }
    fields.update(overrides)
    return build_trip(**fields)


@pytest.fixture
def make_trip() -> Callable[..., Trip]:
    """Fixture exposing the complete-trip builder."""
    return build_trip


@pytest.fixture
def make_partial_trip() -> Callable[..., Trip]:
    """Fixture exposing the partial-trip builder."""
    return build_partial_trip


@pytest.fixture
def vehicle() -> Vehicle:
    """A vehicle matching the default ``vehicle_id`` of built trips."""
    return Vehicle(
        id="v1",
        license_plate="B-AB 1234",
        make="VW",
        model="Golf",
        year=2020,
        initial_odometer=0,
        current_odometer=200,
    )


@pytest.fixture
def continuous_trips(make_trip):
    """Two same-day trips forming a continuous odometer and time chain."""
    return [
        make_trip(id="t1", start_time="08:00", end_time="09:00", start_odometer=100, end_odometer=150),
        make_trip(id="t2", start_time="09:00", end_time="10:00", start_odometer=150, end_odometer=200),
    ]
