"""Statistics and tax reports built on top of validated trip collections."""

from .statistics import TripStatistics, calculate_yearly_stats
from .tax_report import InvalidLogbookError, TaxReport, VehicleSummary, build_tax_report

__all__ = [
    "InvalidLogbookError",
    "TaxReport",
    "TripStatistics",
    "VehicleSummary",
    "build_tax_report",
    "calculate_yearly_stats",
]
