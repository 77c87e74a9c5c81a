"""Household net worth projection."""

__version__ = "0.1.0"
