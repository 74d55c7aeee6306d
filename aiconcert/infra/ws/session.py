"""CommandSession: run remote commands over one shared websocket."""

from __future__ import annotations

import asyncio
import itertools
import logging
import uuid

from aiconcert.errors import ConnectionFailedError, InvalidArgumentError
from aiconcert.infra.ws.connection import ConnectionManager, ConnectionState, Connector
from aiconcert.infra.ws.pending import PendingTable
from aiconcert.infra.ws.protocol import CommandFrame, encode
from aiconcert.infra.ws.router import InboundRouter
from aiconcert.models.command import CommandResult

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_TIMEOUT = 30.0


class CommandSession:
    """Multiplexes command invocations over a single websocket.

    Each `run()` registers a pending invocation, sends a command frame and
    waits for exactly one of: a terminal frame from the server, its own
    deadline, or loss of the connection. The session owns its connection
    and pending table; create one per adapter and `close()` it when done.
    """

    def __init__(
        self,
        ws_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_COMMAND_TIMEOUT,
        connect: Connector | None = None,
        open_timeout: float = 10.0,
    ) -> None:
        self._timeout = timeout
        self._table = PendingTable()
        self._router = InboundRouter(self._table)
        self._connection = ConnectionManager(
            ws_url,
            token=token,
            on_message=self._router.dispatch,
            on_close=self._on_connection_closed,
            connect=connect,
            open_timeout=open_timeout,
        )
        self._prefix = uuid.uuid4().hex[:12]
        self._id_counter = itertools.count(1)

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def pending_count(self) -> int:
        return len(self._table)

    @property
    def connection_state(self) -> ConnectionState:
        return self._connection.state

    def pending_ids(self) -> list[str]:
        return self._table.ids()

    def _next_id(self) -> str:
        return f"{self._prefix}-{next(self._id_counter)}"

    async def run(self, command: str | None) -> CommandResult:
        """Run a command remotely and return its result.

        Raises InvalidArgumentError for an empty command and
        ConnectionFailedError when the socket cannot be opened or written.
        A timeout is not an error: the result carries the partial output.
        """
        if not command or not command.strip():
            raise InvalidArgumentError("Missing required field: command")

        await self._connection.ensure_connection()

        loop = asyncio.get_running_loop()
        invocation_id = self._next_id()
        future: asyncio.Future[CommandResult] = loop.create_future()
        invocation = self._table.register(invocation_id, future, command)
        invocation.timer = loop.call_later(
            self._timeout, self._table.expire, invocation_id, self._timeout
        )

        try:
            await self._connection.send(encode(CommandFrame(id=invocation_id, command=command)))
        except ConnectionFailedError as e:
            self._table.fail_if_pending(invocation_id, e)
        else:
            logger.debug("Sent command %s: %s", invocation_id, command[:200])

        try:
            return await future
        except asyncio.CancelledError:
            self._table.cancel(invocation_id)
            raise

    async def execute(self, command: str | None) -> str:
        """Run a command and return the agent-facing result text."""
        result = await self.run(command)
        return result.text

    def cancel(self, invocation_id: str) -> bool:
        """Abandon a pending invocation. Returns False if it already resolved."""
        return self._table.cancel(invocation_id)

    async def close(self) -> None:
        self._table.drain("session closed")
        await self._connection.close()

    async def __aenter__(self) -> CommandSession:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _on_connection_closed(self, reason: str) -> None:
        self._table.drain(reason)
