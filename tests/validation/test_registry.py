"""Unit tests for the validation registry and runner."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from fahrtenbuch.validation import run_validation
from fahrtenbuch.validation.grouping import ValidationContext
from fahrtenbuch.validation.models import CheckResult
from fahrtenbuch.validation.registry import ALL_CHECKS


def test_check_order():
    """Test the fixed execution order that determines message order."""
    assert [c.check_id for c in ALL_CHECKS] == [
        "record_fields",
        "odometer_continuity",
        "time_plausibility",
        "partial_trips",
        "vehicle_fields",
    ]


def test_run_validation_calls_every_check_once(continuous_trips):
    """
    Test that run_validation() runs all checks unconditionally.
    `ALL_CHECKS` is a list of INSTANCES, so we patch it with mock INSTANCES.
    """
    mock_instances = []
    for original_instance in ALL_CHECKS:
        mock_instance = MagicMock(spec=original_instance)
        mock_instance.check_id = original_instance.check_id
        mock_instance.validate.return_value = [
            CheckResult.from_messages(original_instance.check_id, "error", [])
        ]
        mock_instances.append(mock_instance)

    with patch("fahrtenbuch.validation.registry.ALL_CHECKS", mock_instances):
        report = run_validation(continuous_trips)

    for mock_instance in mock_instances:
        mock_instance.validate.assert_called_once()
        (context,) = mock_instance.validate.call_args.args
        assert isinstance(context, ValidationContext)
        assert context.trips == tuple(continuous_trips)
    assert len(report.results) == len(ALL_CHECKS)


def test_results_follow_check_order(make_trip, make_partial_trip):
    """Test that errors are concatenated in check order."""
    trips = [
        make_partial_trip(id="p1", start_time="12:00"),
        make_trip(id="t1", driver_name=None),
    ]
    errors = run_validation(trips).errors

    assert "Fahrername fehlt" in errors[0]
    assert "unvollständige Fahrten" in errors[-1]
