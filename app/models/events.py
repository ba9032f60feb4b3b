"""Wire envelope and the closed set of inbound events."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError

from app.exceptions import InvalidPayloadError, MalformedMessageError
from app.models.base import ControlConfig, ControlConfigUpdate


class AppEvent(str, Enum):
    """Event names understood on the control channel."""

    UPDATE_CONFIG = "UPDATE_CONFIG"
    UPDATE_STATE = "UPDATE_STATE"
    FAKE_DATA = "FAKE_DATA"


class Envelope(BaseModel):
    """``{event, payload?}``, the only shape accepted on the wire."""

    event: str
    payload: Optional[Any] = None


@dataclass(frozen=True)
class UpdateConfigEvent:
    update: ControlConfigUpdate


@dataclass(frozen=True)
class UpdateStateEvent:
    # Relayed verbatim, never interpreted
    payload: Any


@dataclass(frozen=True)
class FakeDataEvent:
    pass


@dataclass(frozen=True)
class UnrecognizedEvent:
    event: str


InboundEvent = Union[UpdateConfigEvent, UpdateStateEvent, FakeDataEvent, UnrecognizedEvent]


def decode_message(data: Union[str, bytes]) -> InboundEvent:
    """Decode one inbound frame into an event variant.

    Raises:
        MalformedMessageError: the frame is not a JSON envelope.
        InvalidPayloadError: a known event carries a payload of the wrong shape.
    """
    try:
        envelope = Envelope.model_validate_json(data, strict=True)
    except ValidationError as e:
        raise MalformedMessageError(f"Cannot decode message envelope: {e.error_count()} error(s)") from e

    if envelope.event == AppEvent.UPDATE_CONFIG.value:
        try:
            update = ControlConfigUpdate.model_validate(envelope.payload or {})
        except ValidationError as e:
            raise InvalidPayloadError(envelope.event, str(e)) from e
        return UpdateConfigEvent(update=update)

    if envelope.event == AppEvent.UPDATE_STATE.value:
        return UpdateStateEvent(payload=envelope.payload)

    if envelope.event == AppEvent.FAKE_DATA.value:
        return FakeDataEvent()

    return UnrecognizedEvent(event=envelope.event)


def create_message(event: AppEvent, payload: Any) -> str:
    """Serialise an outbound ``{event, payload}`` frame."""
    return json.dumps({"event": event.value, "payload": payload})


def config_message(config: ControlConfig) -> str:
    return create_message(
        AppEvent.UPDATE_CONFIG, config.model_dump(mode="json", by_alias=True)
    )
