"""Decoding and dispatch of inbound control-channel frames."""

import logging
from typing import Union

from app.connection import Connection
from app.exceptions import InvalidPayloadError
from app.models import (
    FakeDataEvent,
    InboundEvent,
    UpdateConfigEvent,
    UpdateStateEvent,
    decode_message,
)
from app.relay import BroadcastRelay
from app.simulator import TelemetrySimulator

logger = logging.getLogger(__name__)


class EventRouter:
    """Routes each decoded event to the relay or the simulator."""

    def __init__(self, relay: BroadcastRelay, simulator: TelemetrySimulator):
        self.relay = relay
        self.simulator = simulator

    async def handle(self, connection: Connection, data: Union[str, bytes]) -> None:
        """Decode and dispatch one frame from ``connection``.

        Raises:
            MalformedMessageError: the frame is not a valid envelope. The
                caller is expected to close the connection.
        """
        try:
            event = decode_message(data)
        except InvalidPayloadError as e:
            logger.warning(f"Dropping message from {connection}: {e}")
            return
        await self.dispatch(connection, event)

    async def dispatch(self, connection: Connection, event: InboundEvent) -> None:
        if isinstance(event, UpdateConfigEvent):
            await self.relay.relay_config(connection, event.update)
        elif isinstance(event, UpdateStateEvent):
            await self.relay.relay_state(connection, event.payload)
        elif isinstance(event, FakeDataEvent):
            self.simulator.start(connection)
        else:
            logger.warning(f"Ignoring unrecognized event {event.event!r} from {connection}")
