"""
Wizard Chess Service - FastAPI Application
Hosts the room relay WebSocket and the stateless rules endpoints
"""

import argparse
import logging
from typing import Optional

from fastapi import FastAPI, Response, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .config import ServiceConfig
from .relay import RoomRegistry
from .routes.rules import router as rules_router

SERVICE_NAME = "Wizard Chess Service"
SERVICE_VERSION = "1.0.0"

settings = ServiceConfig.from_env()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """Build the service with its own relay registry."""
    config = config or settings
    registry = RoomRegistry(
        strict_snapshots=config.strict_snapshots,
        max_clients_per_room=config.max_clients_per_room,
    )

    app = FastAPI(
        title=SERVICE_NAME,
        description="Room relay and rules engine for Wizard Chess",
        version=SERVICE_VERSION
    )
    app.state.config = config
    app.state.registry = registry

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """Service info"""
        return {
            "service": SERVICE_NAME,
            "status": "running",
            "version": SERVICE_VERSION,
            "wsPath": config.ws_path,
        }

    @app.get("/health")
    async def health_check():
        """Health check for container orchestration"""
        return {
            "status": "healthy",
            "rooms": len(registry.rooms),
            "clients": registry.client_count,
        }

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics endpoint."""
        data = generate_latest()
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    async def relay_endpoint(websocket: WebSocket):
        await registry.serve(websocket)

    app.add_api_websocket_route(config.ws_path, relay_endpoint)
    app.include_router(rules_router)

    logger.info(
        f"Relay at {config.ws_path} (strict={config.strict_snapshots}, "
        f"max_clients_per_room={config.max_clients_per_room or 'unlimited'})"
    )
    return app


app = create_app()


def main(argv=None) -> None:
    """Console entry point: ``wizardchess-relay``."""
    import uvicorn

    parser = argparse.ArgumentParser(description=SERVICE_NAME)
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument(
        "--strict-snapshots",
        action="store_true",
        default=settings.strict_snapshots,
        help="Reject snapshots whose version does not advance",
    )
    parser.add_argument(
        "--max-clients-per-room",
        type=int,
        default=settings.max_clients_per_room,
        help="Room capacity (0 for unlimited)",
    )
    args = parser.parse_args(argv)

    config = ServiceConfig(
        host=args.host,
        port=args.port,
        ws_path=settings.ws_path,
        strict_snapshots=args.strict_snapshots,
        max_clients_per_room=args.max_clients_per_room,
        log_level=settings.log_level,
        environment=settings.environment,
    )
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
