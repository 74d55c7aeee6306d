"""Dispatch inbound websocket frames to pending invocations."""

from __future__ import annotations

import logging

from aiconcert.errors import ProtocolError
from aiconcert.infra.ws.pending import PendingTable
from aiconcert.infra.ws.protocol import InboundFrame, decode
from aiconcert.models.command import CommandStatus

logger = logging.getLogger(__name__)


class InboundRouter:
    """Routes each raw frame to the invocation it references.

    `dispatch` is called from the connection's reader task for every
    message. It never raises and never awaits: one bad frame must not
    stall or tear down the other invocations sharing the socket.
    """

    def __init__(self, table: PendingTable) -> None:
        self._table = table

    def dispatch(self, raw: str | bytes) -> None:
        try:
            frame = decode(raw)
        except ProtocolError as e:
            logger.error("Dropping inbound frame: %s", e)
            return

        logger.debug("Frame %s type=%s (%d chars)", frame.id, frame.type, len(frame.content))
        self.route(frame)

    def route(self, frame: InboundFrame) -> bool:
        """Apply a decoded frame. Returns True if it touched a pending invocation."""
        if frame.id not in self._table:
            logger.debug("Discarding frame for unknown invocation %s", frame.id)
            return False

        if frame.is_output:
            return self._table.append(frame.id, frame.content)

        if frame.is_terminal:
            status = CommandStatus.FAILED if frame.is_error else CommandStatus.COMPLETED
            if status == CommandStatus.FAILED:
                logger.warning("Invocation %s ended with error: %s", frame.id, frame.content[:200])
            return self._table.complete_with(frame.id, frame.content, status)

        logger.debug("Ignoring frame type %r for invocation %s", frame.type, frame.id)
        return False
