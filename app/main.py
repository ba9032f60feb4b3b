import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.config import ConfigStore, settings
from app.manager import ConnectionManager
from app.routes import websockets
from app.static import PrecompressedStaticFiles

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(
    store: Optional[ConfigStore] = None,
    public_dir: Optional[str] = None,
) -> FastAPI:
    """
    Create the relay application.

    Args:
        store: Shared control config store (a fresh one if omitted).
        public_dir: Static asset directory; defaults to ``settings.public_dir``.

    Returns:
        Configured FastAPI application.
    """
    manager = ConnectionManager(store, telemetry_interval=settings.fake_data_interval)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle manager for the application"""
        logger.info(f"Solar Relay listening on port {settings.port}")
        yield
        logger.info("Shutting down Solar Relay...")
        manager.close_all()

    app = FastAPI(
        title="Solar Relay",
        description="Real-time relay for solar tracker control panels",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.connections = manager

    app.include_router(websockets.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "solar-relay",
            "version": VERSION,
            "websocket_connections": manager.connection_count(),
            "control_mode": manager.store.current().control_mode.value,
        }

    # Mounted last so it never shadows the routes above
    directory = public_dir or settings.public_dir
    if os.path.isdir(directory):
        app.mount("/", PrecompressedStaticFiles(directory=directory, html=True), name="static")
    else:
        logger.warning(f"Static directory {directory!r} not found, serving no assets")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
    )
