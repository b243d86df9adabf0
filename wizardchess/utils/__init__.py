"""Utility modules for the Wizard Chess service.

Modules:
    exceptions: Exception type tuples and logging helpers for narrow handlers
    error_utils: Sanitised error details for HTTP responses
"""
