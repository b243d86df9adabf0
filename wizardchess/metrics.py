"""Prometheus metrics for the Wizard Chess service.

Relay bookkeeping (rooms, clients, messages) and the REST rules surface
record lightweight telemetry here so that handlers do not manage their
own metric instances.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Gauge


RELAY_ROOMS: Final[Gauge] = Gauge(
    "wizardchess_relay_rooms",
    "Current number of open relay rooms in this process.",
)

RELAY_CLIENTS: Final[Gauge] = Gauge(
    "wizardchess_relay_clients",
    "Current number of clients that have joined a relay room.",
)

RELAY_MESSAGES: Final[Counter] = Counter(
    "wizardchess_relay_messages_total",
    "Total relay messages received, labeled by message type.",
    labelnames=("type",),
)

RELAY_REJECTIONS: Final[Counter] = Counter(
    "wizardchess_relay_rejections_total",
    "Total relay requests answered with an error, labeled by reason.",
    labelnames=("reason",),
)

RULES_REQUESTS: Final[Counter] = Counter(
    "wizardchess_rules_requests_total",
    "Total /rules requests, labeled by endpoint and outcome.",
    labelnames=("endpoint", "outcome"),
)
