"""Synthetic telemetry for clients without real tracker hardware."""

import asyncio
import logging
import math
import time
from typing import Callable, Optional

from app.config import ConfigStore
from app.connection import Connection
from app.models import ControlConfig, ControlMode, Orientation, SystemState

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.1  # seconds


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def simulate_state(timestamp: int, config: ControlConfig) -> SystemState:
    """Build the snapshot for ``timestamp`` (ms since epoch).

    The voltage follows a cosine over a 120 s period. In automatic mode the
    panel sweeps a full azimuth circle every 12 s while the inclination
    swings between 0 and 90 degrees; in manual mode the configured
    orientation is reported as is.
    """
    seconds = timestamp / 1000
    voltage = 5 * math.cos(2 * math.pi * ((3 * seconds) % 360) / 360) + 5

    if config.control_mode == ControlMode.MANUAL:
        orientation = config.manual_orientation
    else:
        azimuth = (30 * seconds) % 360
        inclination = 90 * (0.5 * math.sin(2 * math.pi * azimuth / 360) + 0.5)
        orientation = Orientation(azimuth=azimuth, inclination=inclination)

    return SystemState(
        timestamp=timestamp,
        solar_panel_voltage=voltage,
        solar_panel_orientation=orientation,
    )


class TelemetrySimulator:
    """Pushes a simulated snapshot to one connection on every tick."""

    def __init__(
        self,
        store: ConfigStore,
        interval: float = TICK_INTERVAL,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.store = store
        self.interval = interval
        self.clock = clock or now_ms

    def start(self, connection: Connection) -> bool:
        """Start simulating for ``connection``.

        A second request while a simulation is running is a no-op.
        Returns True when a new task was started.
        """
        if connection.closed:
            return False
        if connection.has_telemetry:
            logger.debug(f"Simulation already running for {connection}")
            return False

        task = asyncio.create_task(self._run(connection))
        connection.attach_telemetry(task)
        logger.info(f"Started simulated telemetry for {connection}")
        return True

    async def _run(self, connection: Connection) -> None:
        while not connection.closed:
            await asyncio.sleep(self.interval)
            if connection.closed:
                break
            state = simulate_state(self.clock(), self.store.current())
            try:
                await connection.push_state(state)
            except Exception as e:
                logger.warning(f"Stopping simulated telemetry for {connection}: {e}")
                break
