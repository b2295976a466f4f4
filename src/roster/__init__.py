"""Roster - student record management with JSON or SQL storage."""

__version__ = "0.1.0"
