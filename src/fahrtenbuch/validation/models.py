"""Validation data models.

This module defines core data structures for validation results:
- CheckResult: Outcome of a single validation rule
- ValidationReport: Aggregated results from all checks
- ValidationResult: The ``{valid, errors, warnings}`` contract handed to consumers
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from .config import get_severity


@dataclass(frozen=True)
class CheckResult:
    """Result of a single validation rule.

    Attributes:
        check_id: Identifier of the check that produced it (e.g., "odometer_continuity").
        severity: Severity level - "error" for hard violations, "warning" for review items.
        passed: True if the rule found no issues, False otherwise.
        fail_count: Number of failures detected (0 if passed).
        messages: One human-readable message per failure.
        rule: Rule within the check (e.g., "gap"), None for single-rule checks.

    Examples:
        >>> CheckResult(
        ...     check_id="odometer_continuity",
        ...     severity="warning",
        ...     passed=False,
        ...     fail_count=1,
        ...     messages=["Lücke im Kilometerstand ..."]
        ... )
    """

    check_id: str
    severity: str  # "error" | "warning"
    passed: bool
    fail_count: int
    messages: List[str] = field(default_factory=list)
    rule: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.severity not in ("error", "warning"):
            raise ValueError(f"Invalid severity: {self.severity}. Must be 'error' or 'warning'.")
        if self.passed and self.fail_count != 0:
            raise ValueError("passed=True requires fail_count=0")
        if not self.passed and self.fail_count == 0:
            raise ValueError("passed=False requires fail_count > 0")

    @classmethod
    def from_messages(
        cls, check_id: str, severity: str, messages: List[str], rule: Optional[str] = None
    ) -> "CheckResult":
        """Build a result whose pass/fail state follows from the message list."""
        return cls(
            check_id=check_id,
            severity=severity,
            passed=not messages,
            fail_count=len(messages),
            messages=list(messages),
            rule=rule,
        )

    @classmethod
    def for_rule(cls, check_id: str, rule: str, messages: List[str]) -> "CheckResult":
        """Build a result for a configured rule, looking up its severity."""
        return cls.from_messages(check_id, get_severity(check_id, rule), messages, rule=rule)

    @property
    def name(self) -> str:
        """``check_id/rule``, or just the check id when no rule is set."""
        return f"{self.check_id}/{self.rule}" if self.rule else self.check_id


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a trip collection.

    ``valid`` is strictly a function of ``errors``; warnings never affect it.
    Consumers must not generate a tax report when ``valid`` is False.
    """

    valid: bool
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.valid != (len(self.errors) == 0):
            raise ValueError("valid must be True exactly when there are no errors")

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass
class ValidationReport:
    """Aggregated validation results for a trip collection.

    Attributes:
        results: List of check results, in execution order.
        trip_count: Number of trips that were validated.
        vehicle_count: Number of distinct vehicles referenced by the trips.
        source: Optional label of where the trips came from (e.g., a file name).

    Examples:
        >>> report = ValidationReport(results=[check1, check2], trip_count=12, vehicle_count=2)
        >>> report.has_errors()
        True
        >>> report.to_result().valid
        False
    """

    results: List[CheckResult]
    trip_count: int = 0
    vehicle_count: int = 0
    source: Optional[str] = None

    @property
    def errors(self) -> List[str]:
        """All error messages, concatenated in check order."""
        return [m for r in self.results if r.severity == "error" for m in r.messages]

    @property
    def warnings(self) -> List[str]:
        """All warning messages, concatenated in check order."""
        return [m for r in self.results if r.severity == "warning" for m in r.messages]

    @property
    def valid(self) -> bool:
        return not self.has_errors()

    def to_result(self) -> ValidationResult:
        """Collapse the report into the consumer-facing result."""
        errors = tuple(self.errors)
        return ValidationResult(valid=not errors, errors=errors, warnings=tuple(self.warnings))

    def has_errors(self, strict: bool = False) -> bool:
        """Check if validation failed.

        Args:
            strict: If True, treat warnings as errors. Default False.

        Returns:
            True if any errors found (or warnings in strict mode), False otherwise.
        """
        for result in self.results:
            if result.severity == "error" and not result.passed:
                return True
            if strict and result.severity == "warning" and not result.passed:
                return True
        return False

    def get_error_count(self) -> int:
        """Count total number of error-level failures."""
        return sum(r.fail_count for r in self.results if r.severity == "error" and not r.passed)

    def get_warning_count(self) -> int:
        """Count total number of warning-level failures."""
        return sum(r.fail_count for r in self.results if r.severity == "warning" and not r.passed)

    def get_failed_checks(self, severity: Optional[str] = None) -> List[CheckResult]:
        """Get all failed checks, optionally filtered by severity.

        Args:
            severity: Filter by severity level ("error" or "warning"). None returns all.

        Returns:
            List of failed CheckResult objects.
        """
        return [
            r for r in self.results if not r.passed and (severity is None or r.severity == severity)
        ]

    def summary(self) -> str:
        """Generate a concise text summary of validation results.

        Examples:
            >>> print(report.summary())
            Validation Summary:
              Source: trips.csv (12 trips, 2 vehicles)
              Checks: 8 executed (6 passed, 1 warnings, 1 failed)
              Issues: 1 errors, 3 warnings
        """
        total = len(self.results)
        passed = sum(1 for r in self.results if r.passed)
        warning_checks = sum(1 for r in self.results if not r.passed and r.severity == "warning")
        failed_checks = sum(1 for r in self.results if not r.passed and r.severity == "error")

        return (
            f"Validation Summary:\n"
            f"  Source: {self.source or '<in-memory>'} "
            f"({self.trip_count} trips, {self.vehicle_count} vehicles)\n"
            f"  Checks: {total} executed ({passed} passed, {warning_checks} warnings, "
            f"{failed_checks} failed)\n"
            f"  Issues: {self.get_error_count()} errors, {self.get_warning_count()} warnings"
        )

    def _grouped(self) -> Tuple[List[CheckResult], List[CheckResult], List[CheckResult]]:
        passed_checks = [r for r in self.results if r.passed]
        warning_checks = [r for r in self.results if not r.passed and r.severity == "warning"]
        error_checks = [r for r in self.results if not r.passed and r.severity == "error"]
        return passed_checks, warning_checks, error_checks

    def to_markdown(self) -> str:
        """Generate a detailed Markdown validation report.

        The report lists passed rules, warnings and errors with every message,
        and states whether a tax report may be generated from the data.
        """
        passed_checks, warning_checks, error_checks = self._grouped()
        errors = self.get_error_count()
        warnings = self.get_warning_count()

        lines = [
            f"# Fahrtenbuch-Prüfung: {self.source or 'Fahrten'}",
            "",
            f"**Fahrten:** {self.trip_count}",
            f"**Fahrzeuge:** {self.vehicle_count}",
            f"**Erstellt:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Zusammenfassung",
            "",
            f"- **Geprüfte Regeln:** {len(self.results)}",
            f"- **Bestanden:** {len(passed_checks)} ✅",
            f"- **Mit Warnungen:** {len(warning_checks)} ⚠️",
            f"- **Mit Fehlern:** {len(error_checks)} ❌",
            "",
            f"- **Fehler:** {errors} ❌" if errors > 0 else f"- **Fehler:** {errors}",
            f"- **Warnungen:** {warnings} ⚠️" if warnings > 0 else f"- **Warnungen:** {warnings}",
            "",
        ]

        if passed_checks:
            lines.append("## ✅ Bestandene Regeln")
            lines.append("")
            for result in passed_checks:
                lines.append(f"- **{result.name}** ({result.severity})")
            lines.append("")

        for title, icon, group in (
            ("Fehler", "❌", error_checks),
            ("Warnungen", "⚠️", warning_checks),
        ):
            if not group:
                continue
            lines.append(f"## {icon} {title}")
            lines.append("")
            for result in group:
                lines.append(f"### {icon} {result.name} ({result.fail_count} Fehler)")
                lines.append("")
                for msg in result.messages:
                    lines.append(f"- {msg}")
                lines.append("")

        lines.append("---")
        lines.append("")
        if self.has_errors():
            lines.append("Das Fahrtenbuch ist nicht ordnungsgemäß; ein Finanzamtbericht kann nicht erstellt werden.")
        else:
            lines.append("Das Fahrtenbuch ist ordnungsgemäß geführt.")
        lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Generate a detailed JSON validation report."""
        passed_checks, warning_checks, error_checks = self._grouped()

        def _entry(r: CheckResult) -> dict:
            return {
                "check_id": r.check_id,
                "rule": r.rule,
                "severity": r.severity,
                "fail_count": r.fail_count,
                "messages": r.messages,
            }

        report_data = {
            "metadata": {
                "source": self.source,
                "trip_count": self.trip_count,
                "vehicle_count": self.vehicle_count,
                "generated_at": datetime.now().isoformat(),
            },
            "summary": {
                "valid": self.valid,
                "total_rules": len(self.results),
                "passed": len(passed_checks),
                "with_warnings": len(warning_checks),
                "with_errors": len(error_checks),
                "errors": self.get_error_count(),
                "warnings": self.get_warning_count(),
            },
            "result": self.to_result().to_dict(),
            "warning_checks": [_entry(r) for r in warning_checks],
            "error_checks": [_entry(r) for r in error_checks],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)

    def to_console_summary(self) -> str:
        """Generate the console summary listing every failure message."""
        lines = [self.summary(), ""]

        failed_checks = self.get_failed_checks()

        if not failed_checks:
            lines.append("✅ All validation checks passed!")
        else:
            lines.append("Failed Checks:")
            for result in failed_checks:
                icon = "❌" if result.severity == "error" else "⚠️"
                lines.append(
                    f"{icon} {result.name} ({result.severity}): {result.fail_count} failures"
                )
                for msg in result.messages:
                    lines.append(f"   - {msg}")

        return "\n".join(lines)
