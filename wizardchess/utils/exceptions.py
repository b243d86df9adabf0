"""Exception utilities for narrow exception catching.

This module provides exception type tuples for use in narrow exception
handlers, replacing broad ``except Exception:`` with specific exception
types. Programming errors (NameError, AttributeError, etc.) bubble up
immediately while expected operational errors are handled gracefully.

Usage:
    from wizardchess.utils.exceptions import NETWORK_ERRORS, PARSE_ERRORS

    # Relay message parsing
    try:
        data = json.loads(raw)
    except PARSE_ERRORS as e:
        log_and_continue(e, "relay_parse", logger)

    # Socket sends
    try:
        await client.send_text(payload)
    except NETWORK_ERRORS as e:
        logger.warning(f"Network error: {e}")
"""

from __future__ import annotations

import asyncio
import json
import logging

# =============================================================================
# Exception Type Tuples
# =============================================================================

# Network-related exceptions to catch for I/O operations
# Use for: socket sends, client disconnects
NETWORK_ERRORS: tuple[type[BaseException], ...] = (
    ConnectionError,      # Connection refused, reset, aborted
    TimeoutError,         # Socket/connect timeout
    OSError,              # Low-level I/O errors (includes socket.error)
    asyncio.TimeoutError, # Async operation timeout
)

# JSON/parsing exceptions for data deserialization
# Use for: JSON decoding, env parsing, relay message handling
PARSE_ERRORS: tuple[type[BaseException], ...] = (
    json.JSONDecodeError,  # Malformed JSON
    KeyError,              # Missing expected key
    TypeError,             # Wrong type in data structure
    ValueError,            # Invalid value format
)


# =============================================================================
# Relay Errors
# =============================================================================


class RelayError(Exception):
    """Base class for relay rejections reported back to the client."""


class RoomFullError(RelayError):
    """Raised when a room is already at its client limit."""


class StaleSnapshotError(RelayError):
    """Raised in strict mode when a snapshot does not advance the version."""


# =============================================================================
# Utility Functions
# =============================================================================

def log_and_continue(
    e: BaseException,
    context: str,
    logger_instance: logging.Logger,
    level: int = logging.WARNING,
) -> None:
    """Log exception with context, allowing the caller to continue.

    Use this for expected errors that should not crash the program.

    Args:
        e: The exception that was caught
        context: Short description of the operation (e.g., "relay_parse")
        logger_instance: Logger to use for logging
        level: Logging level (default: WARNING)
    """
    logger_instance.log(
        level,
        f"[{context}] Caught {type(e).__name__}: {e}",
    )
