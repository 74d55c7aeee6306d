"""Command invocation result model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from aiconcert.errors import RemoteCommandError


class CommandStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    DISCONNECTED = "disconnected"

    @property
    def is_success(self) -> bool:
        return self == CommandStatus.COMPLETED


@dataclass(frozen=True)
class CommandResult:
    """Final, immutable outcome of one remote command.

    `text` is the agent-facing string. A failed command still carries text;
    callers that want an exception use `raise_for_status()`.
    """

    id: str
    status: CommandStatus
    text: str
    command: str = ""
    output: tuple[str, ...] = ()
    final_message: str = ""

    def __str__(self) -> str:
        return self.text

    def raise_for_status(self) -> CommandResult:
        """Raise RemoteCommandError if the server reported an error."""
        if self.status == CommandStatus.FAILED:
            raise RemoteCommandError(self.final_message or self.text, self.id)
        return self
