"""Fahrtenbuch Tools: consistency validation for digital driving logbooks.

The package checks recorded vehicle trips for the properties a tax authority
expects from a legally sound logbook and builds yearly statistics and tax
reports on top of a validated trip set. A minimal CLI (validate, stats, report)
operates on exported trip lists.
"""

__all__ = [
    "__version__",
]

__version__ = "0.2.0"
