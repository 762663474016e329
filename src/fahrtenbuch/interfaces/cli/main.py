import argparse
import logging
from pathlib import Path
from typing import List, Optional

import colorlog

from fahrtenbuch.core.models import Trip, Vehicle

try:
    from fahrtenbuch import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _load_inputs(args: argparse.Namespace) -> Optional[tuple]:
    """Load trips (and vehicles, if given) named on the command line.

    Returns None after logging when an input cannot be read.
    """
    from fahrtenbuch.ingestion import load_trips, load_vehicles

    vehicles: List[Vehicle] = []
    try:
        trips: List[Trip] = load_trips(
            Path(args.trips), default_vehicle_id=getattr(args, "vehicle", None)
        )
        if getattr(args, "vehicles", None):
            vehicles = load_vehicles(Path(args.vehicles))
    except FileNotFoundError as e:
        logging.error("Input not found: %s", e)
        return None
    except ValueError as e:
        logging.error("Failed to read input: %s", e)
        return None
    return trips, vehicles


def _load_config(args: argparse.Namespace):
    from fahrtenbuch.validation import ValidationConfig

    if not getattr(args, "config", None):
        return ValidationConfig()
    return ValidationConfig.from_yaml(Path(args.config))


def _write_output(content: str, target, default_path: Path, label: str) -> None:
    """Write ``content`` to ``target`` (True means ``default_path``)."""
    path = default_path if target is True else Path(target)
    if path.is_dir():
        path = path / default_path.name
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logging.info("%s saved: %s", label, path)


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a trip list.

    Returns:
        0 if the logbook is valid
        1 if the inputs or the config could not be read
        2 if validation errors were found (or warnings, with --strict)
    """
    from fahrtenbuch.validation import print_report, run_validation

    try:
        config = _load_config(args)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Invalid validation config: %s", e)
        return 1

    loaded = _load_inputs(args)
    if loaded is None:
        return 1
    trips, vehicles = loaded

    vehicle_filter = getattr(args, "vehicle", None)
    if vehicle_filter:
        trips = [t for t in trips if t.vehicle_id == vehicle_filter]
        logging.info("Restricting validation to vehicle %s (%d trips)", vehicle_filter, len(trips))

    trips_path = Path(args.trips)
    report = run_validation(trips, vehicles, config, source=trips_path.name)
    print_report(report)

    stem = trips_path.with_suffix("")
    if getattr(args, "report", False):
        _write_output(
            report.to_markdown(),
            args.report,
            Path(f"{stem}_validation.md"),
            "Markdown report",
        )
    if getattr(args, "report_json", False):
        _write_output(
            report.to_json(),
            args.report_json,
            Path(f"{stem}_validation.json"),
            "JSON report",
        )

    strict = bool(getattr(args, "strict", False))
    if report.has_errors(strict=strict):
        logging.error(
            "Validation failed: %d errors, %d warnings",
            report.get_error_count(),
            report.get_warning_count(),
        )
        return 2
    logging.info("Validation passed")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Print trip statistics, for one year or all years."""
    from fahrtenbuch.core.utils import format_distance
    from fahrtenbuch.reports import calculate_yearly_stats

    loaded = _load_inputs(args)
    if loaded is None:
        return 1
    trips, _ = loaded

    stats = calculate_yearly_stats(trips, year=getattr(args, "year", None))
    title = f"Fahrtenstatistik {stats.year}" if stats.year is not None else "Fahrtenstatistik"
    print(title)
    print(f"  Gesamtstrecke: {format_distance(stats.total_distance)} ({stats.total_trips} Fahrten)")
    print(
        f"  Geschäftlich:  {format_distance(stats.business_distance)} "
        f"({stats.business_trips} Fahrten, {stats.business_share:.1f} %)"
    )
    print(f"  Privat:        {format_distance(stats.private_distance)} ({stats.private_trips} Fahrten)")
    print(f"  Pendeln:       {format_distance(stats.commute_distance)} ({stats.commute_trips} Fahrten)")
    if stats.partial_trips:
        print(f"  Unvollständig: {stats.partial_trips} Fahrten")
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Build the yearly tax report; refuses when the logbook is invalid.

    Returns:
        0 on success, 1 if inputs could not be read, 2 if validation failed.
    """
    from fahrtenbuch.reports import InvalidLogbookError, build_tax_report

    try:
        config = _load_config(args)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Invalid validation config: %s", e)
        return 1

    loaded = _load_inputs(args)
    if loaded is None:
        return 1
    trips, vehicles = loaded

    try:
        report = build_tax_report(trips, vehicles, args.year, config)
    except InvalidLogbookError as e:
        logging.error("%s", e)
        for msg in e.result.errors:
            print(f"❌ {msg}")
        return 2

    output = getattr(args, "output", None)
    if output:
        content = report.to_json() if Path(output).suffix.lower() == ".json" else report.to_markdown()
        _write_output(content, output, Path(output), "Tax report")
    else:
        print(report.to_markdown())
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fahrtenbuch", description="Fahrtenbuch consistency validator and tax reports"
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_PACKAGE_VERSION}")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Only show warnings and errors in logs",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Only show errors in logs",
    )
    sub = p.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Validate a trip list")
    p_validate.add_argument(
        "--trips", required=True, help="Trip list (.csv, .xlsx, .xls or .json)"
    )
    p_validate.add_argument(
        "--vehicles",
        default=None,
        help="Vehicle list, used for readable vehicle names in messages",
    )
    p_validate.add_argument(
        "--vehicle",
        default=None,
        help="Only validate trips of this vehicle id (also assigned to rows without a vehicle)",
    )
    p_validate.add_argument(
        "--config", default=None, help="YAML file overriding plausibility thresholds"
    )
    p_validate.add_argument(
        "--strict", action="store_true", help="Treat warnings as errors for the exit code"
    )
    p_validate.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Generate detailed Markdown report. Optionally specify a file or directory path.",
    )
    p_validate.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Generate detailed JSON report. Optionally specify a file or directory path.",
    )
    p_validate.set_defaults(func=cmd_validate)

    p_stats = sub.add_parser("stats", help="Print trip statistics")
    p_stats.add_argument("--trips", required=True, help="Trip list (.csv, .xlsx, .xls or .json)")
    p_stats.add_argument("--year", type=int, default=None, help="Calendar year (default: all)")
    p_stats.set_defaults(func=cmd_stats)

    p_report = sub.add_parser("report", help="Build the yearly tax report")
    p_report.add_argument("--trips", required=True, help="Trip list (.csv, .xlsx, .xls or .json)")
    p_report.add_argument("--vehicles", required=True, help="Vehicle list")
    p_report.add_argument("--year", type=int, required=True, help="Calendar year to report")
    p_report.add_argument(
        "--config", default=None, help="YAML file overriding plausibility thresholds"
    )
    p_report.add_argument(
        "--output",
        default=None,
        help="Write the report to this file (.json for JSON, Markdown otherwise)",
    )
    p_report.set_defaults(func=cmd_report)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
