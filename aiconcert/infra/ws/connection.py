"""Owner of the single websocket to the AI-Concert server."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any
from urllib.parse import urlencode, urlsplit

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from aiconcert.errors import ConnectionFailedError

logger = logging.getLogger(__name__)

Connector = Callable[..., Awaitable[Any]]


class ConnectionState(str, Enum):
    ABSENT = "absent"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


def build_ws_url(base_url: str, token: str | None = None) -> str:
    """Append the auth token as a query parameter when one is configured."""
    if not token:
        return base_url
    sep = "&" if urlsplit(base_url).query else "?"
    return f"{base_url}{sep}{urlencode({'token': token})}"


class ConnectionManager:
    """Lazily opens, reuses, and replaces the command websocket.

    Concurrent `ensure_connection()` callers share one connection attempt.
    Once open, a reader task hands every inbound message to `on_message`;
    when the transport goes away the handle is dropped and `on_close` is
    called so the next caller reconnects instead of reusing a dead socket.
    """

    def __init__(
        self,
        url: str,
        token: str | None = None,
        on_message: Callable[[str | bytes], None] | None = None,
        on_close: Callable[[str], None] | None = None,
        connect: Connector | None = None,
        open_timeout: float = 10.0,
    ) -> None:
        self._base_url = url
        self._url = build_ws_url(url, token)
        self._on_message = on_message
        self._on_close = on_close
        self._connect = connect or websockets.connect
        self._open_timeout = open_timeout
        self._ws: Any = None
        self._state = ConnectionState.ABSENT
        self._connecting: asyncio.Future | None = None
        self._reader_task: asyncio.Task | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._ws is not None and self._state == ConnectionState.OPEN

    async def ensure_connection(self) -> Any:
        """Return an open websocket, connecting first if necessary."""
        if self.is_open:
            return self._ws
        if self._connecting is None or self._connecting.done():
            self._connecting = asyncio.ensure_future(self._open())
        # Shielded so one cancelled caller does not abort the attempt others wait on.
        return await asyncio.shield(self._connecting)

    async def send(self, text: str) -> None:
        ws = self._ws
        if ws is None or not self.is_open:
            raise ConnectionFailedError("WebSocket is not connected")
        try:
            await ws.send(text)
        except (ConnectionClosed, OSError) as e:
            raise ConnectionFailedError(f"WebSocket send failed: {e}") from e

    async def close(self) -> None:
        """Stop the reader and close the socket."""
        if self._connecting is not None and not self._connecting.done():
            self._connecting.cancel()
        self._connecting = None

        ws = self._ws
        reader = self._reader_task
        self._reader_task = None
        self._mark_closed(ws, "connection closed by client")
        if reader is not None and not reader.done():
            reader.cancel()
            try:
                await reader
            except asyncio.CancelledError:
                pass
        if ws is not None:
            try:
                await ws.close()
            except (ConnectionClosed, OSError) as e:
                logger.debug("Error closing websocket: %s", e)
        if self._state != ConnectionState.ABSENT:
            self._state = ConnectionState.CLOSED

    async def _open(self) -> Any:
        self._state = ConnectionState.CONNECTING
        logger.debug("Connecting to %s", self._base_url)
        try:
            ws = await self._connect(self._url, open_timeout=self._open_timeout)
        except (OSError, WebSocketException, asyncio.TimeoutError) as e:
            self._state = ConnectionState.CLOSED
            logger.error("WebSocket connection error: %s", e)
            raise ConnectionFailedError(f"WebSocket connection error: {e}") from e

        self._ws = ws
        self._state = ConnectionState.OPEN
        self._reader_task = asyncio.create_task(self._read_loop(ws))
        logger.debug("WebSocket connected to %s", self._base_url)
        return ws

    async def _read_loop(self, ws: Any) -> None:
        reason = "connection closed by server"
        try:
            async for message in ws:
                self._deliver(message)
        except ConnectionClosed as e:
            reason = f"connection lost ({e})"
            logger.debug("WebSocket closed: %s", e)
        except (OSError, WebSocketException) as e:
            reason = f"connection error ({e})"
            logger.error("WebSocket reader failed: %s", e)
        finally:
            self._mark_closed(ws, reason)

    def _deliver(self, message: str | bytes) -> None:
        if self._on_message is None:
            return
        try:
            self._on_message(message)
        except Exception:
            logger.exception("Inbound message handler failed")

    def _mark_closed(self, ws: Any, reason: str) -> None:
        # A replacement connection may already be installed; leave it alone.
        if ws is None or self._ws is not ws:
            return
        self._ws = None
        self._state = ConnectionState.CLOSED
        logger.debug("WebSocket connection closed: %s", reason)
        if self._on_close is not None:
            try:
                self._on_close(reason)
            except Exception:
                logger.exception("Connection close handler failed")
