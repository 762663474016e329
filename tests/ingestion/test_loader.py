"""Tests for reading trip and vehicle lists from exported files."""

from __future__ import annotations

import json
import logging

import pandas as pd
import pytest

from fahrtenbuch.core.enums import TripPurpose, TripStatus
from fahrtenbuch.ingestion import load_trips, load_vehicles, read_table
from fahrtenbuch.ingestion.loader import parse_purpose, trips_from_frame

APP_EXPORT_HEADER = (
    "id,vehicleId,date,startTime,endTime,startLocation,endLocation,"
    "purpose,startOdometer,endOdometer,driverName,status\n"
)


@pytest.fixture
def app_csv(tmp_path):
    """CSV in the column layout of the web application's export."""
    path = tmp_path / "trips.csv"
    path.write_text(
        APP_EXPORT_HEADER
        + "t1,v1,2024-03-01,08:00,09:00,Berlin,Potsdam,business,100,150,Max,complete\n"
        + "t2,v1,2024-03-01,10:00,,Potsdam,,private,150,0,Max,partial\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def german_csv(tmp_path):
    """CSV with the German column headers of the Excel export."""
    path = tmp_path / "fahrtenbuch.csv"
    path.write_text(
        "Datum,Startzeit,Endzeit,Von,Nach,Zweck,KM Start,KM Ende,Fahrer,Notizen\n"
        "01.03.2024,08:00,09:30,Berlin,Leipzig,Geschäftlich,1000,1190,Erika,Kunde A\n"
        "02.03.2024,07:15,,Leipzig,,Privatfahrt,1190,,Erika,\n",
        encoding="utf-8",
    )
    return path


class TestLoadTrips:
    """Tests for load_trips()."""

    def test_app_export_columns(self, app_csv):
        """Test that camelCase columns map onto trip attributes."""
        trips = load_trips(app_csv)

        assert [t.id for t in trips] == ["t1", "t2"]
        first = trips[0]
        assert first.vehicle_id == "v1"
        assert first.purpose == TripPurpose.BUSINESS
        assert first.start_odometer == 100
        assert first.end_odometer == 150
        assert first.status == TripStatus.COMPLETE

    def test_partial_zero_end_reading_becomes_none(self, app_csv):
        """Test that a stored 0 end reading of a partial trip is treated as unknown."""
        partial = load_trips(app_csv)[1]

        assert partial.status == TripStatus.PARTIAL
        assert partial.end_odometer is None
        assert partial.end_time is None
        assert partial.end_location is None

    def test_german_headers(self, german_csv):
        """Test the German export layout, dates and free-text purposes."""
        trips = load_trips(german_csv, default_vehicle_id="car-1")

        assert [t.id for t in trips] == ["row-1", "row-2"]
        assert trips[0].date == "2024-03-01"
        assert trips[0].vehicle_id == "car-1"
        assert trips[0].purpose == TripPurpose.BUSINESS
        assert trips[0].notes == "Kunde A"
        assert trips[1].purpose == TripPurpose.PRIVATE

    def test_status_inferred_from_missing_end_fields(self, german_csv):
        """Test that rows without any end field are partial trips."""
        trips = load_trips(german_csv)

        assert trips[0].status == TripStatus.COMPLETE
        assert trips[1].status == TripStatus.PARTIAL

    def test_json_object_with_trips_key(self, tmp_path):
        """Test JSON objects that hold the record list under "trips"."""
        path = tmp_path / "export.json"
        path.write_text(
            json.dumps(
                {
                    "trips": [
                        {
                            "id": "a",
                            "vehicleId": "v1",
                            "date": "2024-05-01",
                            "startTime": "08:00",
                            "endTime": "08:45",
                            "startLocation": "Köln",
                            "endLocation": "Bonn",
                            "purpose": "commute",
                            "startOdometer": 10,
                            "endOdometer": 40,
                            "driverName": "Jo",
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        (trip,) = load_trips(path)

        assert trip.purpose == TripPurpose.COMMUTE
        assert trip.distance == 30

    def test_non_numeric_reading_is_dropped_with_warning(self, tmp_path, caplog):
        """Test that unreadable odometer cells become None and are logged."""
        path = tmp_path / "trips.csv"
        path.write_text(
            APP_EXPORT_HEADER + "t1,v1,2024-03-01,08:00,09:00,A,B,business,abc,150,Max,\n",
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING):
            (trip,) = load_trips(path)

        assert trip.start_odometer is None
        assert "non-numeric" in caplog.text

    def test_unknown_purpose_is_none(self, tmp_path, caplog):
        """Test that unmapped purposes are left empty for the validator to report."""
        path = tmp_path / "trips.csv"
        path.write_text(
            APP_EXPORT_HEADER + "t1,v1,2024-03-01,08:00,09:00,A,B,Urlaub,100,150,Max,\n",
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING):
            (trip,) = load_trips(path)

        assert trip.purpose is None
        assert "unknown purpose" in caplog.text

    def test_unknown_date_format_kept_verbatim(self, tmp_path):
        """Test that unparsable dates survive so validation can name them."""
        path = tmp_path / "trips.csv"
        path.write_text(
            APP_EXPORT_HEADER + "t1,v1,März 2024,08:00,09:00,A,B,business,100,150,Max,\n",
            encoding="utf-8",
        )
        (trip,) = load_trips(path)

        assert trip.date == "März 2024"


class TestTripsFromFrame:
    """Tests for cell conversion of typed (Excel-like) tables."""

    def test_excel_cell_types(self):
        """Test timestamps, times, serial dates and float readings."""
        df = pd.DataFrame(
            [
                {
                    "Datum": pd.Timestamp("2024-03-01"),
                    "Startzeit": pd.Timestamp("2024-03-01 08:05").time(),
                    "Endzeit": "09:00",
                    "KM Start": 100.0,
                    "KM Ende": 150.0,
                },
                {
                    "Datum": 45353,
                    "Startzeit": "10:00",
                    "Endzeit": "11:00",
                    "KM Start": 150.0,
                    "KM Ende": float("nan"),
                },
            ]
        )
        first, second = trips_from_frame(df)

        assert first.date == "2024-03-01"
        assert first.start_time == "08:05"
        assert first.start_odometer == 100
        assert second.date == "2024-03-02"
        assert second.end_odometer is None
        assert second.status == TripStatus.COMPLETE


class TestLoadVehicles:
    """Tests for load_vehicles()."""

    def test_csv(self, tmp_path):
        """Test reading vehicles with readable names."""
        path = tmp_path / "vehicles.csv"
        path.write_text(
            "id,licensePlate,make,model,year,initialOdometer,currentOdometer\n"
            "v1,B-AB 1234,VW,Golf,2020,0,200\n",
            encoding="utf-8",
        )
        (vehicle,) = load_vehicles(path)

        assert vehicle.display_name == "B-AB 1234 (VW Golf)"
        assert vehicle.year == 2020
        assert vehicle.current_odometer == 200

    def test_missing_id_column(self, tmp_path):
        """Test that a vehicle list without ids is rejected."""
        path = tmp_path / "vehicles.csv"
        path.write_text("Kennzeichen\nB-AB 1234\n", encoding="utf-8")

        with pytest.raises(ValueError, match="no id column"):
            load_vehicles(path)


class TestReadTable:
    """Tests for read_table() error handling."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_table(tmp_path / "missing.csv")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "trips.txt"
        path.write_text("x", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported file type"):
            read_table(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "trips.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to read"):
            read_table(path)

    def test_json_scalar_rejected(self, tmp_path):
        path = tmp_path / "trips.json"
        path.write_text("42", encoding="utf-8")

        with pytest.raises(ValueError, match="Expected a list"):
            read_table(path)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("business", TripPurpose.BUSINESS),
        ("Geschäftlich", TripPurpose.BUSINESS),
        ("Dienstreise", TripPurpose.BUSINESS),
        ("privat", TripPurpose.PRIVATE),
        ("Pendelfahrt", TripPurpose.COMMUTE),
        ("", None),
        ("Urlaub", None),
    ],
)
def test_parse_purpose(text, expected):
    """Test mapping of free-text purposes."""
    assert parse_purpose(text) == expected


@pytest.mark.parametrize("serial", [20240301, -800000, 1e12])
def test_out_of_range_numeric_date_kept_verbatim(serial):
    """Test that numbers beyond the serial date range are kept for the validator."""
    (trip,) = trips_from_frame(pd.DataFrame([{"date": serial, "startTime": "08:00"}]))

    assert trip.date == str(serial)


def test_json_numeric_date_is_reported_not_raised(tmp_path):
    """Test that a compact numeric date in JSON becomes an invalid-date finding."""
    from fahrtenbuch.validation import validate

    path = tmp_path / "trips.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "t1",
                    "vehicleId": "v1",
                    "date": 20240301,
                    "startTime": "08:00",
                    "endTime": "09:00",
                    "startLocation": "A",
                    "endLocation": "B",
                    "purpose": "business",
                    "startOdometer": 100,
                    "endOdometer": 150,
                    "driverName": "Max",
                }
            ]
        ),
        encoding="utf-8",
    )
    trips = load_trips(path)

    assert trips[0].date == "20240301"
    assert validate(trips).errors == (
        "Fahrt am 20240301 (ID t1): Ungültiges Datum '20240301'",
    )


def test_vehicle_missing_odometers_stay_unknown(tmp_path):
    """Test that absent odometer cells are not turned into zero readings."""
    path = tmp_path / "vehicles.csv"
    path.write_text("id,licensePlate,make,model\nv1,B-AB 1234,VW,Golf\n", encoding="utf-8")
    (vehicle,) = load_vehicles(path)

    assert vehicle.initial_odometer is None
    assert vehicle.current_odometer is None
