"""pytest configuration and shared fakes for relay tests."""

import json

import pytest

from app.config import ConfigStore
from app.connection import Connection, ConnectionRegistry


# Configure asyncio mode for pytest-asyncio
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


class FakeWebSocket:
    """Records outbound frames instead of sending them."""

    def __init__(self, fail: bool = False):
        self.sent: list[dict] = []
        self.fail = fail

    async def send_text(self, message: str) -> None:
        if self.fail:
            raise RuntimeError("socket is gone")
        self.sent.append(json.loads(message))


def make_connection(address: str = "127.0.0.1", fail: bool = False) -> Connection:
    return Connection(FakeWebSocket(fail=fail), address)


@pytest.fixture
def store():
    return ConfigStore()


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def connect(registry):
    """Create a fake connection and register it."""

    def _connect(address: str = "127.0.0.1", fail: bool = False) -> Connection:
        connection = make_connection(address, fail=fail)
        registry.register(connection)
        return connection

    return _connect
