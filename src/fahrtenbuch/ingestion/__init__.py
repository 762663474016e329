"""Input adapters turning exported trip lists into domain records."""

from .loader import load_trips, load_vehicles, read_table

__all__ = ["load_trips", "load_vehicles", "read_table"]
