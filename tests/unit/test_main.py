"""
Unit tests for wizardchess.main (FastAPI application).

Tests cover:
- Root and health endpoints
- Metrics endpoint
- Stateless rules endpoints
- Request validation
"""

import pytest
from fastapi.testclient import TestClient

from wizardchess.config import ServiceConfig
from wizardchess.main import SERVICE_NAME, create_app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def client():
    """Create a test client around a fresh application."""
    return TestClient(create_app(ServiceConfig()))


@pytest.fixture
def new_game(client):
    """Initial snapshot from the service itself."""
    response = client.post("/rules/new-game")
    assert response.status_code == 200
    return response.json()


# =============================================================================
# Health Endpoint Tests
# =============================================================================


class TestHealthEndpoints:
    """Tests for service info and health endpoints."""

    def test_root_endpoint(self, client):
        """Root endpoint returns service info."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == SERVICE_NAME
        assert data["wsPath"] == "/ws"
        assert "version" in data

    def test_health_check(self, client):
        """Health check reports an idle relay."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data == {"status": "healthy", "rooms": 0, "clients": 0}

    def test_metrics_endpoint(self, client):
        """Metrics are exposed in Prometheus text format."""
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "wizardchess_relay_rooms" in response.text


# =============================================================================
# Rules Endpoint Tests
# =============================================================================


class TestRulesEndpoints:
    """Tests for /rules/*."""

    def test_new_game_snapshot(self, new_game):
        assert len(new_game["pieces"]) == 35
        assert new_game["currentSide"] == "white"
        assert new_game["turnNumber"] == 1
        assert new_game["turn"] == {"phase": "idle"}

    def test_candidates(self, client, new_game):
        response = client.post(
            "/rules/candidates",
            json={"state": new_game, "pieceId": "white-apprentice-1"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["pieceId"] == "white-apprentice-1"
        assert {"type": "move", "row": 9, "col": 0} in data["candidates"]
        assert {"type": "swap", "row": 16, "col": 0} in data["candidates"]

    def test_candidates_unknown_piece(self, client, new_game):
        response = client.post(
            "/rules/candidates",
            json={"state": new_game, "pieceId": "nobody"},
        )
        assert response.status_code == 404

    def test_beam_without_conductor(self, client, new_game):
        """The opening position has no apprentice next to the wizard."""
        response = client.post(
            "/rules/beam",
            json={"state": new_game, "wizardId": "white-wizard-1"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["failure"] == "no_conductor"
        assert data["target"] is None
        assert data["path"] == [[16, 0]]
        assert data["labels"] == ["I9"]

    def test_beam_unknown_wizard(self, client, new_game):
        response = client.post(
            "/rules/beam",
            json={"state": new_game, "wizardId": "white-ranger-1"},
        )
        assert response.status_code == 404


class TestRequestValidation:
    """Malformed requests are rejected before reaching the engine."""

    def test_malformed_snapshot(self, client):
        response = client.post(
            "/rules/candidates",
            json={"state": {"pieces": "nope"}, "pieceId": "x"},
        )
        assert response.status_code == 422
        assert "validation error" in response.json()["detail"]

    def test_production_hides_validation_detail(self):
        client = TestClient(create_app(ServiceConfig(environment="production")))
        response = client.post(
            "/rules/candidates",
            json={"state": {"pieces": "nope"}, "pieceId": "x"},
        )
        assert response.status_code == 422
        assert response.json()["detail"] == "Invalid game snapshot"

    def test_missing_piece_id(self, client, new_game):
        response = client.post("/rules/candidates", json={"state": new_game})
        assert response.status_code == 422
