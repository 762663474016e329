"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class TripPurpose(str, Enum):
    """Tax-relevant purpose of a trip.

    Values are strings to ease serialization and CLI interchange.
    """

    BUSINESS = "business"
    PRIVATE = "private"
    COMMUTE = "commute"

    @property
    def label(self) -> str:
        """German display label as used in exported logbooks."""
        return _PURPOSE_LABELS[self]


class TripStatus(str, Enum):
    """Completion state of a trip record.

    A partial trip only records that a trip started; its end is not yet known.
    """

    COMPLETE = "complete"
    PARTIAL = "partial"


_PURPOSE_LABELS = {
    TripPurpose.BUSINESS: "Geschäftlich",
    TripPurpose.PRIVATE: "Privat",
    TripPurpose.COMMUTE: "Pendeln",
}


__all__ = ["TripPurpose", "TripStatus"]
