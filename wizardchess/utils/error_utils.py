"""HTTP error detail helpers."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

__all__ = [
    "is_production_request",
    "sanitize_error_detail",
]


def is_production_request(request: Optional[Request]) -> bool:
    """True when the app serving ``request`` was built with a production config."""
    if request is None:
        return False
    config = getattr(request.app.state, "config", None)
    return bool(config is not None and config.is_production)


def sanitize_error_detail(
    error: Exception,
    fallback: str = "Invalid request",
    production: bool = False,
) -> str:
    """Error text for an HTTP response.

    Production deployments get ``fallback`` only; elsewhere the raw error
    message is returned to help debugging.
    """
    if production:
        return fallback
    return str(error)
