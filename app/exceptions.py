"""Exception hierarchy for the relay."""


class RelayError(Exception):
    """Base exception for relay errors."""


class MalformedMessageError(RelayError):
    """Inbound frame is not a ``{event, payload?}`` JSON envelope."""


class InvalidPayloadError(RelayError):
    """A recognised event carried a payload of the wrong shape."""

    def __init__(self, event: str, detail: str):
        self.event = event
        self.detail = detail
        super().__init__(f"Invalid payload for {event}: {detail}")
