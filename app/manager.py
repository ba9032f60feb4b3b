"""Lifecycle of control-channel connections."""

import logging
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect, status

from app.config import ConfigStore
from app.connection import Connection, ConnectionRegistry
from app.exceptions import MalformedMessageError
from app.relay import BroadcastRelay
from app.router import EventRouter
from app.simulator import TICK_INTERVAL, TelemetrySimulator

logger = logging.getLogger(__name__)


def remote_address(websocket: WebSocket) -> str:
    client = websocket.client
    return client.host if client and client.host else "unknown address"


class ConnectionManager:
    """Accepts WebSocket clients and wires them into the relay.

    Owns the config store, the connection registry and everything that
    acts on them, so one instance is one independent relay.
    """

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        telemetry_interval: float = TICK_INTERVAL,
    ):
        self.store = store or ConfigStore()
        self.registry = ConnectionRegistry()
        self.relay = BroadcastRelay(self.registry, self.store)
        self.simulator = TelemetrySimulator(self.store, interval=telemetry_interval)
        self.router = EventRouter(self.relay, self.simulator)

    def connection_count(self) -> int:
        return len(self.registry)

    async def serve(self, websocket: WebSocket) -> None:
        """Run one client from handshake to teardown."""
        address = remote_address(websocket)
        await websocket.accept()

        connection = Connection(websocket, address)
        self.registry.register(connection)
        logger.info(f"A client from {address} connected.")

        code: int = status.WS_1000_NORMAL_CLOSURE
        reason = ""
        try:
            await connection.push_config(self.store.current())

            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    code = message.get("code", status.WS_1000_NORMAL_CLOSURE)
                    reason = message.get("reason") or ""
                    break

                data = message.get("text")
                if data is None:
                    data = message.get("bytes") or b""

                try:
                    await self.router.handle(connection, data)
                except MalformedMessageError as e:
                    logger.warning(f"Closing connection from {address}: {e}")
                    code = status.WS_1008_POLICY_VIOLATION
                    reason = "Malformed message"
                    connection.close()
                    await websocket.close(code=code, reason=reason)
                    break
        except WebSocketDisconnect as e:
            code = e.code
            reason = e.reason or ""
        except Exception as e:
            logger.warning(f"WebSocket error from {address}: {e}")
            code = status.WS_1011_INTERNAL_ERROR
            reason = str(e)
        finally:
            connection.close()
            self.registry.unregister(connection)
            logger.info(
                f"A client from {address} disconnected with code {code}, reason: {reason}."
            )

    def close_all(self) -> None:
        """Cancel every connection's telemetry, used on shutdown."""
        for connection in self.registry:
            connection.close()
