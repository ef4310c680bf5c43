"""Filterable, paginated browser for a cashback store directory."""

__version__ = "0.1.0"
