"""Salary Calendar - upcoming salary payments for a fixed monthly salary."""

__version__ = "0.1.0"
