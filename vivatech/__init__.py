"""Scrape VivaTech speaker and partner data from embedded page JSON into CSV."""

__version__ = "0.1.0"
__all__ = ["cli", "extract", "partners", "speakers"]