"""Tests for environment-driven service configuration."""

import dataclasses

import pytest

from wizardchess.config import ServiceConfig


class TestServiceConfig:
    def test_defaults(self):
        config = ServiceConfig.from_env({})
        assert config == ServiceConfig()
        assert config.port == 3001
        assert config.ws_path == "/ws"
        assert not config.strict_snapshots
        assert config.max_clients_per_room == 0
        assert not config.is_production

    def test_environment_overrides(self):
        config = ServiceConfig.from_env({
            "WIZARDCHESS_HOST": "127.0.0.1",
            "WIZARDCHESS_PORT": "8080",
            "RELAY_WS_PATH": "/relay",
            "RELAY_STRICT_SNAPSHOTS": "yes",
            "RELAY_MAX_CLIENTS_PER_ROOM": "2",
            "WIZARDCHESS_LOG_LEVEL": "debug",
            "WIZARDCHESS_ENV": "Production",
        })
        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.ws_path == "/relay"
        assert config.strict_snapshots
        assert config.max_clients_per_room == 2
        assert config.log_level == "DEBUG"
        assert config.is_production

    @pytest.mark.parametrize("raw", ["0", "false", "", "off"])
    def test_strict_flag_false_values(self, raw):
        assert not ServiceConfig.from_env({"RELAY_STRICT_SNAPSHOTS": raw}).strict_snapshots

    def test_bad_integers_fall_back(self):
        config = ServiceConfig.from_env({
            "WIZARDCHESS_PORT": "eighty",
            "RELAY_MAX_CLIENTS_PER_ROOM": "-4",
        })
        assert config.port == 3001
        assert config.max_clients_per_room == 0

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ServiceConfig().port = 1
