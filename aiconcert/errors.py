"""Exception hierarchy for the AI-Concert adapter."""

from __future__ import annotations


class AIConcertError(Exception):
    """Base class for all adapter errors."""


class InvalidArgumentError(AIConcertError, ValueError):
    """A required field is missing or has an invalid value."""


class ConnectionFailedError(AIConcertError, ConnectionError):
    """The websocket could not be opened or errored before it was usable."""


class RemoteCommandError(AIConcertError):
    """The server terminated a command with an error frame."""

    def __init__(self, message: str, invocation_id: str = "") -> None:
        super().__init__(message)
        self.invocation_id = invocation_id


class ProtocolError(AIConcertError, ValueError):
    """An inbound frame could not be parsed."""
