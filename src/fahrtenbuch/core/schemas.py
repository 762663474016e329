"""Field definitions for trip and vehicle records.

This module defines which trip fields are required in which state and how
columns of exported logbook files map onto record attributes. Used by the
validation checks and the ingestion loader to stay consistent.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .enums import TripPurpose, TripStatus

# (attribute, German label) pairs; the label is used in validation messages.
ALWAYS_REQUIRED_TRIP_FIELDS: List[Tuple[str, str]] = [
    ("vehicle_id", "Fahrzeug"),
    ("date", "Datum"),
    ("start_time", "Startzeit"),
    ("start_location", "Startort"),
    ("purpose", "Zweck"),
    ("driver_name", "Fahrername"),
]

COMPLETE_ONLY_TRIP_FIELDS: List[Tuple[str, str]] = [
    ("end_time", "Endzeit"),
    ("end_location", "Zielort"),
]

ODOMETER_FIELDS: List[Tuple[str, str]] = [
    ("start_odometer", "Start-Kilometerstand"),
    ("end_odometer", "End-Kilometerstand"),
]


def get_required_fields(status: TripStatus) -> List[Tuple[str, str]]:
    """Get the non-odometer fields a trip must populate in a given state.

    Partial trips only need the fields known when a trip starts; complete
    trips additionally need their end time and destination.

    Args:
        status: Completion state of the trip.

    Returns:
        List of (attribute, label) pairs.

    Examples:
        >>> [f for f, _ in get_required_fields(TripStatus.PARTIAL)]
        ['vehicle_id', 'date', 'start_time', 'start_location', 'purpose', 'driver_name']
    """
    if status == TripStatus.COMPLETE:
        return ALWAYS_REQUIRED_TRIP_FIELDS + COMPLETE_ONLY_TRIP_FIELDS
    return list(ALWAYS_REQUIRED_TRIP_FIELDS)


# Column aliases accepted when reading exported trip lists. The first alias
# is the canonical camelCase name used by the web application's JSON export.
TRIP_COLUMN_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "ID", "Id"],
    "vehicle_id": ["vehicleId", "vehicle_id", "Fahrzeug", "Vehicle"],
    "user_id": ["userId", "user_id"],
    "date": ["date", "Datum", "Date", "datum"],
    "start_time": ["startTime", "start_time", "Startzeit", "Start Time", "startzeit", "Start"],
    "end_time": ["endTime", "end_time", "Endzeit", "End Time", "endzeit", "Ende"],
    "start_location": [
        "startLocation", "start_location", "Von", "From", "Start Location", "von", "startort",
    ],
    "end_location": [
        "endLocation", "end_location", "Nach", "To", "End Location", "nach", "zielort",
    ],
    "purpose": ["purpose", "Zweck", "Purpose", "zweck", "Grund"],
    "start_odometer": [
        "startOdometer", "start_odometer", "KM Start", "Start KM", "Start Odometer", "km_start",
    ],
    "end_odometer": [
        "endOdometer", "end_odometer", "KM Ende", "End KM", "End Odometer", "km_ende",
    ],
    "driver_name": ["driverName", "driver_name", "Fahrer", "Driver", "fahrer", "Fahrzeugführer"],
    "notes": ["notes", "Notizen", "Notes", "notizen", "Bemerkungen"],
    "status": ["status", "Status"],
}

VEHICLE_COLUMN_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "ID", "Id"],
    "license_plate": ["licensePlate", "license_plate", "Kennzeichen"],
    "make": ["make", "Marke"],
    "model": ["model", "Modell"],
    "year": ["year", "Baujahr"],
    "initial_odometer": ["initialOdometer", "initial_odometer", "Anfangs-Kilometerstand"],
    "current_odometer": ["currentOdometer", "current_odometer", "Aktueller Kilometerstand"],
}

# Lower-cased substrings recognised when mapping free-text purposes.
PURPOSE_KEYWORDS: List[Tuple[str, TripPurpose]] = [
    ("privat", TripPurpose.PRIVATE),
    ("pendel", TripPurpose.COMMUTE),
    ("commute", TripPurpose.COMMUTE),
    ("gesch", TripPurpose.BUSINESS),
    ("business", TripPurpose.BUSINESS),
    ("dienst", TripPurpose.BUSINESS),
]


__all__ = [
    "ALWAYS_REQUIRED_TRIP_FIELDS",
    "COMPLETE_ONLY_TRIP_FIELDS",
    "ODOMETER_FIELDS",
    "PURPOSE_KEYWORDS",
    "TRIP_COLUMN_ALIASES",
    "VEHICLE_COLUMN_ALIASES",
    "get_required_fields",
]
