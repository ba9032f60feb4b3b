"""Fan-out of client events to every other connection."""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from app.config import ConfigStore
from app.connection import Connection, ConnectionRegistry
from app.models import ControlConfig, ControlConfigUpdate

logger = logging.getLogger(__name__)


class BroadcastRelay:
    """Delivers events from one connection to all the others.

    The sender is always excluded. Delivery is fire-and-forget: a failed
    send is logged and the remaining targets are still served.
    """

    def __init__(self, registry: ConnectionRegistry, store: ConfigStore):
        self.registry = registry
        self.store = store

    async def relay_config(self, origin: Connection, update: ControlConfigUpdate) -> ControlConfig:
        """Merge ``update`` and push the merged config to the other clients.

        The raw update is never forwarded; every target gets the store's
        current value.
        """
        merged = self.store.merge(update)
        await self._fan_out(origin, lambda target: target.push_config(self.store.current()))
        return merged

    async def relay_state(self, origin: Connection, payload: Any) -> None:
        """Forward a state snapshot verbatim to the other clients."""
        await self._fan_out(origin, lambda target: target.push_state(payload))

    async def _fan_out(
        self, origin: Connection, send: Callable[[Connection], Awaitable[None]]
    ) -> None:
        targets = self.registry.others(origin)
        if not targets:
            return
        await asyncio.gather(*(self._deliver(target, send) for target in targets))

    async def _deliver(
        self, target: Connection, send: Callable[[Connection], Awaitable[None]]
    ) -> None:
        if target.closed:
            return
        try:
            await send(target)
        except Exception as e:
            logger.warning(f"Failed to relay to {target}: {e}")
