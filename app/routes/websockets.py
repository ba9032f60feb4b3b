"""WebSocket endpoint for the tracker control channel.

Every panel client connects here. Inbound frames are JSON envelopes
``{"event": ..., "payload": ...}``; see ``app.models.events`` for the
recognised events. The endpoint only hands the socket to the
application's ``ConnectionManager``, which owns the relay state.
"""

from fastapi import APIRouter, WebSocket

from app.config import settings
from app.manager import ConnectionManager


router = APIRouter(tags=["websockets"])


@router.websocket(settings.ws_path)
async def control_channel(websocket: WebSocket):
    """Relay config and telemetry between panel clients"""
    manager: ConnectionManager = websocket.app.state.connections
    await manager.serve(websocket)
