"""Domain records for vehicles and trips.

Both records are immutable snapshots handed over by the persistence layer. They
deliberately accept incomplete data: a trip with missing fields is still a
``Trip`` so that validation can report every problem instead of failing on
construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import TripPurpose, TripStatus
from .utils import as_reading, combine_instant, is_blank


@dataclass(frozen=True)
class Vehicle:
    """A vehicle whose trips are logged.

    Attributes:
        id: Opaque unique identifier.
        license_plate: Registration plate, used for display only.
        make: Manufacturer.
        model: Model name.
        year: Year of manufacture.
        initial_odometer: Odometer reading when the vehicle was added, None if unknown.
        current_odometer: Latest known odometer reading, None if unknown.
    """

    id: str
    license_plate: str = ""
    make: str = ""
    model: str = ""
    year: Optional[int] = None
    initial_odometer: Optional[int] = None
    current_odometer: Optional[int] = None

    @property
    def display_name(self) -> str:
        """Human-readable identifier, e.g. ``"B-AB 1234 (VW Golf)"``."""
        name = " ".join(part for part in (self.make, self.model) if part)
        plate = self.license_plate or str(self.id)
        return f"{plate} ({name})" if name else plate


@dataclass(frozen=True)
class Trip:
    """A single logbook entry.

    Odometer readings are ``None`` when not recorded; zero is a real reading.
    ``end_time``, ``end_location`` and ``end_odometer`` stay empty while the
    trip is partial.

    Examples:
        >>> trip = Trip(
        ...     id="t1", vehicle_id="v1", date="2024-03-01",
        ...     start_time="08:00", end_time="09:00",
        ...     start_location="Berlin", end_location="Potsdam",
        ...     purpose=TripPurpose.BUSINESS,
        ...     start_odometer=100, end_odometer=150, driver_name="M. Muster",
        ... )
        >>> trip.distance
        50
    """

    id: str
    vehicle_id: Optional[str] = None
    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    start_location: Optional[str] = None
    end_location: Optional[str] = None
    purpose: Optional[TripPurpose] = None
    start_odometer: Optional[int] = None
    end_odometer: Optional[int] = None
    driver_name: Optional[str] = None
    notes: Optional[str] = None
    status: TripStatus = TripStatus.COMPLETE
    user_id: Optional[str] = None

    @property
    def is_partial(self) -> bool:
        return self.status == TripStatus.PARTIAL

    @property
    def has_vehicle(self) -> bool:
        return not is_blank(self.vehicle_id)

    @property
    def start_instant(self) -> Optional[datetime]:
        """Date and start time combined, or None if either does not parse."""
        return combine_instant(self.date, self.start_time)

    @property
    def end_instant(self) -> Optional[datetime]:
        """Date and end time combined, or None if either does not parse."""
        return combine_instant(self.date, self.end_time)

    @property
    def distance(self) -> Optional[int]:
        """Driven kilometres, or None unless both readings are numeric."""
        start = as_reading(self.start_odometer)
        end = as_reading(self.end_odometer)
        if start is None or end is None:
            return None
        return end - start


__all__ = ["Trip", "Vehicle"]
