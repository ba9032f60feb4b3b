"""Client connections on the control channel and the registry tracking them."""

import asyncio
import logging
from typing import Any, Iterator, List, Optional, Set

from fastapi import WebSocket

from app.models import AppEvent, ControlConfig, SystemState, config_message, create_message

logger = logging.getLogger(__name__)


class Connection:
    """One open WebSocket client.

    Owns at most one telemetry task, which is cancelled by ``close()``.
    """

    def __init__(self, websocket: WebSocket, address: str):
        self.websocket = websocket
        self.address = address
        self.closed = False
        self._telemetry_task: Optional[asyncio.Task] = None

    def __repr__(self) -> str:
        return f"Connection({self.address})"

    async def send_text(self, message: str) -> None:
        await self.websocket.send_text(message)

    async def push_config(self, config: ControlConfig) -> None:
        """Send the given control config to this client."""
        await self.send_text(config_message(config))

    async def push_state(self, state: Any) -> None:
        """Send a telemetry snapshot to this client.

        ``SystemState`` models are serialised without their unset fields;
        anything else is sent exactly as given.
        """
        payload = state.to_wire() if isinstance(state, SystemState) else state
        await self.send_text(create_message(AppEvent.UPDATE_STATE, payload))

    @property
    def has_telemetry(self) -> bool:
        return self._telemetry_task is not None and not self._telemetry_task.done()

    def attach_telemetry(self, task: asyncio.Task) -> None:
        """Take ownership of a running telemetry task."""
        if self.closed:
            task.cancel()
            return
        if self._telemetry_task is not None:
            self._telemetry_task.cancel()
        self._telemetry_task = task

    def close(self) -> None:
        """Mark the connection closed and cancel its telemetry task."""
        self.closed = True
        if self._telemetry_task is not None:
            self._telemetry_task.cancel()
            self._telemetry_task = None


class ConnectionRegistry:
    """Tracks currently open connections."""

    def __init__(self):
        self._connections: Set[Connection] = set()

    def register(self, connection: Connection) -> None:
        self._connections.add(connection)
        logger.debug(f"Registered {connection}. Total: {len(self._connections)}")

    def unregister(self, connection: Connection) -> None:
        self._connections.discard(connection)
        logger.debug(f"Unregistered {connection}. Total: {len(self._connections)}")

    def others(self, origin: Connection) -> List[Connection]:
        """Snapshot of live connections other than ``origin``."""
        return [c for c in self._connections if c is not origin and not c.closed]

    def __contains__(self, connection: object) -> bool:
        return connection in self._connections

    def __iter__(self) -> Iterator[Connection]:
        return iter(list(self._connections))

    def __len__(self) -> int:
        return len(self._connections)
