"""Wizard Chess rules engine and room relay."""

__version__ = "1.0.0"
