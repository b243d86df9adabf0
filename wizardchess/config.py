"""Service configuration.

Read once from the environment at startup:

    WIZARDCHESS_HOST            bind address (0.0.0.0)
    WIZARDCHESS_PORT            bind port (3001)
    RELAY_WS_PATH               WebSocket path (/ws)
    RELAY_STRICT_SNAPSHOTS      reject snapshots that do not advance ``version``
    RELAY_MAX_CLIENTS_PER_ROOM  0 for unlimited
    WIZARDCHESS_LOG_LEVEL       logging level name (INFO)
    WIZARDCHESS_ENV             ``production`` hides error details
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import ClassVar, Mapping, Optional

from wizardchess.utils.exceptions import PARSE_ERRORS, log_and_continue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceConfig:
    """Relay and REST service settings."""

    host: str = "0.0.0.0"
    port: int = 3001
    ws_path: str = "/ws"
    strict_snapshots: bool = False
    max_clients_per_room: int = 0
    log_level: str = "INFO"
    environment: str = "development"

    TRUE_VALUES: ClassVar[frozenset] = frozenset({"1", "true", "yes", "on"})

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get("WIZARDCHESS_HOST", defaults.host),
            port=cls._int(env, "WIZARDCHESS_PORT", defaults.port),
            ws_path=env.get("RELAY_WS_PATH", defaults.ws_path),
            strict_snapshots=env.get("RELAY_STRICT_SNAPSHOTS", "").strip().lower() in cls.TRUE_VALUES,
            max_clients_per_room=max(0, cls._int(env, "RELAY_MAX_CLIENTS_PER_ROOM", 0)),
            log_level=env.get("WIZARDCHESS_LOG_LEVEL", defaults.log_level).upper(),
            environment=env.get("WIZARDCHESS_ENV", defaults.environment),
        )

    @staticmethod
    def _int(env: Mapping[str, str], name: str, default: int) -> int:
        raw = env.get(name)
        if raw is None or raw.strip() == "":
            return default
        try:
            return int(raw)
        except PARSE_ERRORS as e:
            log_and_continue(e, f"config:{name}", logger)
            return default
