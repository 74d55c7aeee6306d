"""Table of in-flight command invocations keyed by invocation id.

Every mutating operation checks that the entry is still present and
removes it in the same synchronous step. Nothing here awaits, so on a
single event loop a terminal frame and a firing deadline can never both
resolve the same invocation: whichever runs first removes the entry and
the other finds nothing.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from aiconcert.models.command import CommandResult, CommandStatus

logger = logging.getLogger(__name__)


@dataclass
class Invocation:
    """Mutable state of one outstanding command."""

    id: str
    future: asyncio.Future
    command: str = ""
    output: list[str] = field(default_factory=list)
    complete: bool = False
    timer: asyncio.TimerHandle | None = None
    created_at: float = field(default_factory=time.monotonic)

    @property
    def joined_output(self) -> str:
        return "\n".join(self.output)


def _format_seconds(seconds: float) -> str:
    return f"{seconds:g}"


class PendingTable:
    """Maps invocation id -> Invocation and enforces resolve-once."""

    def __init__(self) -> None:
        self._entries: dict[str, Invocation] = {}

    def __contains__(self, invocation_id: object) -> bool:
        return invocation_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def ids(self) -> list[str]:
        return list(self._entries)

    def get(self, invocation_id: str) -> Invocation | None:
        return self._entries.get(invocation_id)

    def register(
        self,
        invocation_id: str,
        future: asyncio.Future,
        command: str = "",
    ) -> Invocation:
        """Create a pending entry. Raises ValueError if the id is in use."""
        if invocation_id in self._entries:
            raise ValueError(f"Invocation id already pending: {invocation_id}")
        invocation = Invocation(id=invocation_id, future=future, command=command)
        self._entries[invocation_id] = invocation
        return invocation

    def append(self, invocation_id: str, fragment: str) -> bool:
        """Append an output fragment. Returns False if the id is not pending."""
        invocation = self._entries.get(invocation_id)
        if invocation is None or invocation.complete:
            return False
        invocation.output.append(fragment)
        return True

    def complete_with(
        self,
        invocation_id: str,
        final_message: str,
        status: CommandStatus = CommandStatus.COMPLETED,
    ) -> bool:
        """Resolve with accumulated output followed by the terminal message."""
        invocation = self._pop(invocation_id)
        if invocation is None:
            return False
        text = f"{invocation.joined_output}\n{final_message}"
        self._resolve(invocation, status, text, final_message)
        return True

    def expire(self, invocation_id: str, timeout: float) -> bool:
        """Resolve a command whose deadline elapsed with its partial output."""
        invocation = self._pop(invocation_id)
        if invocation is None:
            return False
        text = (
            f"Command execution timed out after {_format_seconds(timeout)} seconds. "
            f"Partial output:\n{invocation.joined_output}"
        )
        logger.debug("Invocation %s timed out after %ss", invocation_id, timeout)
        self._resolve(invocation, CommandStatus.TIMED_OUT, text)
        return True

    def fail_if_pending(self, invocation_id: str, error: BaseException) -> bool:
        """Reject the invocation's future with `error`."""
        invocation = self._pop(invocation_id)
        if invocation is None:
            return False
        if not invocation.future.done():
            invocation.future.set_exception(error)
        return True

    def cancel(self, invocation_id: str) -> bool:
        """Drop a pending invocation and cancel its future."""
        invocation = self._pop(invocation_id)
        if invocation is None:
            return False
        invocation.future.cancel()
        logger.debug("Invocation %s cancelled", invocation_id)
        return True

    def drain(self, reason: str = "connection closed") -> int:
        """Resolve every pending invocation as disconnected. Returns the count."""
        count = 0
        for invocation_id in list(self._entries):
            invocation = self._pop(invocation_id)
            if invocation is None:
                continue
            text = (
                f"Command interrupted: {reason}. "
                f"Partial output:\n{invocation.joined_output}"
            )
            self._resolve(invocation, CommandStatus.DISCONNECTED, text)
            count += 1
        if count:
            logger.info("Drained %d pending invocation(s): %s", count, reason)
        return count

    def _pop(self, invocation_id: str) -> Invocation | None:
        invocation = self._entries.pop(invocation_id, None)
        if invocation is None or invocation.complete:
            return None
        invocation.complete = True
        if invocation.timer is not None:
            invocation.timer.cancel()
            invocation.timer = None
        return invocation

    @staticmethod
    def _resolve(
        invocation: Invocation,
        status: CommandStatus,
        text: str,
        final_message: str = "",
    ) -> None:
        if invocation.future.done():
            # Caller already went away (cancelled await); nothing to deliver.
            return
        invocation.future.set_result(
            CommandResult(
                id=invocation.id,
                status=status,
                text=text,
                command=invocation.command,
                output=tuple(invocation.output),
                final_message=final_message,
            )
        )
