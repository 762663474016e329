"""Read exported trip and vehicle lists into domain records.

Supported inputs are CSV, Excel (``.xlsx``/``.xls``) and JSON (a list of
records, or an object holding such a list under ``"trips"``/``"vehicles"``).
Column headers are matched against the aliases in ``core.schemas`` so both the
web application's JSON export and the German Excel export can be read.

The loader is lenient on cell values: anything it cannot interpret is kept
empty or verbatim so that the validator reports it, rather than failing the
whole import.
"""

from __future__ import annotations

import json
import logging
import numbers
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from fahrtenbuch.core.enums import TripPurpose, TripStatus
from fahrtenbuch.core.models import Trip, Vehicle
from fahrtenbuch.core.schemas import (
    PURPOSE_KEYWORDS,
    TRIP_COLUMN_ALIASES,
    VEHICLE_COLUMN_ALIASES,
)
from fahrtenbuch.core.utils import as_reading, is_blank, parse_date

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xls")
# Day zero of Excel's 1900 date system (accounting for its 1900 leap-year bug)
EXCEL_EPOCH = date(1899, 12, 30)

_PARTIAL_MARKERS = ("partial", "unvollständig", "teilweise", "offen")
_COMPLETE_MARKERS = ("complete", "vollständig", "abgeschlossen")


def read_table(path: Union[str, Path], records_key: Optional[str] = None) -> pd.DataFrame:
    """Read a CSV, Excel or JSON file into a DataFrame of raw cell values.

    Args:
        path: File to read; the format is chosen by suffix.
        records_key: For JSON objects, the key holding the record list.

    Returns:
        DataFrame with one row per record. CSV cells are read as strings.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file type is unsupported or the file cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            return pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        if suffix in EXCEL_SUFFIXES:
            return pd.read_excel(path, dtype=object)
        if suffix == ".json":
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict) and records_key is not None:
                data = data.get(records_key, [])
            if not isinstance(data, list):
                raise ValueError(f"Expected a list of records in {path}")
            return pd.DataFrame.from_records(data)
    except (OSError, pd.errors.ParserError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to read input file {path}: {e}") from e

    raise ValueError(
        f"Unsupported file type '{suffix}' for {path}. Expected .csv, .xlsx, .xls or .json"
    )


def _resolve_columns(df: pd.DataFrame, aliases: Dict[str, List[str]]) -> Dict[str, str]:
    """Map record attributes to the first matching column of the table."""
    resolved = {}
    columns = {str(c).strip(): c for c in df.columns}
    for attr, names in aliases.items():
        for name in names:
            if name in columns:
                resolved[attr] = columns[name]
                break
    return resolved


def _cell(row: pd.Series, columns: Dict[str, str], attr: str) -> Any:
    column = columns.get(attr)
    if column is None:
        return None
    value = row[column]
    if is_blank(value) or value is pd.NaT or value is pd.NA:
        return None
    return value


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def _date_text(value: Any) -> Optional[str]:
    """Normalize a date cell to ISO format; unknown formats are kept verbatim."""
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return parse_date(value).isoformat()
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        try:
            return (EXCEL_EPOCH + timedelta(days=int(value))).isoformat()
        except (OverflowError, ValueError):
            # Out of range for a serial date (e.g. 20240301); the validator reports it.
            return str(value)
    text = str(value).strip()
    if parse_date(text) is not None:
        return text
    try:
        return datetime.strptime(text, "%d.%m.%Y").date().isoformat()
    except ValueError:
        return text


def _time_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (datetime, time)):
        return value.strftime("%H:%M")
    return _text(value)


def _reading(value: Any, row_label: str, attr: str) -> Optional[int]:
    if value is None:
        return None
    reading = as_reading(value)
    if reading is None and isinstance(value, str):
        try:
            reading = as_reading(float(value.replace(",", ".")))
        except ValueError:
            reading = None
    if reading is None:
        logger.warning("%s: ignoring non-numeric %s %r", row_label, attr, value)
    return reading


def parse_purpose(value: Any) -> Optional[TripPurpose]:
    """Map free-text purposes (German or English) onto ``TripPurpose``.

    Examples:
        >>> parse_purpose("Geschäftlich")
        <TripPurpose.BUSINESS: 'business'>
        >>> parse_purpose("Urlaub") is None
        True
    """
    if is_blank(value):
        return None
    text = str(value).strip().lower()
    try:
        return TripPurpose(text)
    except ValueError:
        pass
    for keyword, purpose in PURPOSE_KEYWORDS:
        if keyword in text:
            return purpose
    return None


def _status(value: Any, end_time: Any, end_location: Any, end_odometer: Any) -> TripStatus:
    if value is not None:
        text = str(value).strip().lower()
        if text in _PARTIAL_MARKERS:
            return TripStatus.PARTIAL
        if text in _COMPLETE_MARKERS:
            return TripStatus.COMPLETE
        logger.warning("Unknown trip status %r; inferring from end fields", value)
    if end_time is None and end_location is None and end_odometer is None:
        return TripStatus.PARTIAL
    return TripStatus.COMPLETE


def trips_from_frame(df: pd.DataFrame, default_vehicle_id: Optional[str] = None) -> List[Trip]:
    """Convert a table of raw trip rows into ``Trip`` records.

    Args:
        df: Table as returned by ``read_table``.
        default_vehicle_id: Vehicle assigned to rows without one (the Excel
            export carries no vehicle column).

    Returns:
        Trips in table order. Rows without an id get ``row-<n>`` ids.
    """
    columns = _resolve_columns(df, TRIP_COLUMN_ALIASES)
    missing = sorted(set(TRIP_COLUMN_ALIASES) - set(columns))
    if missing:
        logger.debug("Trip table has no column for: %s", ", ".join(missing))

    trips = []
    for position, (_, row) in enumerate(df.iterrows(), start=1):
        trip_id = _text(_cell(row, columns, "id")) or f"row-{position}"
        label = f"Trip {trip_id}"
        end_time = _time_text(_cell(row, columns, "end_time"))
        end_location = _text(_cell(row, columns, "end_location"))
        end_odometer = _reading(_cell(row, columns, "end_odometer"), label, "end_odometer")
        raw_purpose = _cell(row, columns, "purpose")
        purpose = parse_purpose(raw_purpose)
        if raw_purpose is not None and purpose is None:
            logger.warning("%s: unknown purpose %r", label, raw_purpose)
        status = _status(_cell(row, columns, "status"), end_time, end_location, end_odometer)
        if status == TripStatus.PARTIAL and end_odometer == 0:
            # Older exports store 0 for the unknown end reading of partial trips.
            end_odometer = None

        trips.append(
            Trip(
                id=trip_id,
                vehicle_id=_text(_cell(row, columns, "vehicle_id")) or default_vehicle_id,
                user_id=_text(_cell(row, columns, "user_id")),
                date=_date_text(_cell(row, columns, "date")),
                start_time=_time_text(_cell(row, columns, "start_time")),
                end_time=end_time,
                start_location=_text(_cell(row, columns, "start_location")),
                end_location=end_location,
                purpose=purpose,
                start_odometer=_reading(
                    _cell(row, columns, "start_odometer"), label, "start_odometer"
                ),
                end_odometer=end_odometer,
                driver_name=_text(_cell(row, columns, "driver_name")),
                notes=_text(_cell(row, columns, "notes")),
                status=status,
            )
        )
    return trips


def vehicles_from_frame(df: pd.DataFrame) -> List[Vehicle]:
    """Convert a table of raw vehicle rows into ``Vehicle`` records.

    Raises:
        ValueError: If the table has no id column or a row has no id.
    """
    columns = _resolve_columns(df, VEHICLE_COLUMN_ALIASES)
    if "id" not in columns:
        raise ValueError("Vehicle table has no id column")

    vehicles = []
    for position, (_, row) in enumerate(df.iterrows(), start=1):
        vehicle_id = _text(_cell(row, columns, "id"))
        if vehicle_id is None:
            raise ValueError(f"Vehicle row {position} has no id")
        label = f"Vehicle {vehicle_id}"
        vehicles.append(
            Vehicle(
                id=vehicle_id,
                license_plate=_text(_cell(row, columns, "license_plate")) or "",
                make=_text(_cell(row, columns, "make")) or "",
                model=_text(_cell(row, columns, "model")) or "",
                year=_reading(_cell(row, columns, "year"), label, "year"),
                initial_odometer=_reading(
                    _cell(row, columns, "initial_odometer"), label, "initial_odometer"
                ),
                current_odometer=_reading(
                    _cell(row, columns, "current_odometer"), label, "current_odometer"
                ),
            )
        )
    return vehicles


def load_trips(path: Union[str, Path], default_vehicle_id: Optional[str] = None) -> List[Trip]:
    """Load trips from a CSV, Excel or JSON file.

    Examples:
        >>> trips = load_trips("data/trips.csv")
        >>> trips[0].status
        <TripStatus.COMPLETE: 'complete'>
    """
    df = read_table(path, records_key="trips")
    trips = trips_from_frame(df, default_vehicle_id=default_vehicle_id)
    logger.info("Loaded %d trips from %s", len(trips), path)
    return trips


def load_vehicles(path: Union[str, Path]) -> List[Vehicle]:
    """Load vehicles from a CSV, Excel or JSON file."""
    df = read_table(path, records_key="vehicles")
    vehicles = vehicles_from_frame(df)
    logger.info("Loaded %d vehicles from %s", len(vehicles), path)
    return vehicles
