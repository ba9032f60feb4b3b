"""Models package for the solar tracker relay."""

from app.models.base import (
    ControlMode,
    Orientation,
    ControlConfig,
    ControlConfigUpdate,
    SystemState,
)
from app.models.events import (
    AppEvent,
    Envelope,
    InboundEvent,
    UpdateConfigEvent,
    UpdateStateEvent,
    FakeDataEvent,
    UnrecognizedEvent,
    decode_message,
    create_message,
    config_message,
)

__all__ = [
    # Enums
    "ControlMode",
    "AppEvent",
    # Shared state
    "Orientation",
    "ControlConfig",
    "ControlConfigUpdate",
    "SystemState",
    # Wire
    "Envelope",
    "InboundEvent",
    "UpdateConfigEvent",
    "UpdateStateEvent",
    "FakeDataEvent",
    "UnrecognizedEvent",
    "decode_message",
    "create_message",
    "config_message",
]
