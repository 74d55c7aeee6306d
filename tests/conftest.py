"""Shared fakes: an in-memory websocket and connector for the command session."""

from __future__ import annotations

import asyncio
import json

import pytest


class FakeWebSocket:
    """Queue-backed stand-in for a websockets client connection."""

    def __init__(self, send_error: Exception | None = None) -> None:
        self.sent: list[dict] = []
        self.closed = False
        self._send_error = send_error
        self._incoming: asyncio.Queue = asyncio.Queue()

    async def send(self, text: str) -> None:
        if self._send_error is not None:
            raise self._send_error
        self.sent.append(json.loads(text))

    def push(self, frame: dict | str | bytes) -> None:
        """Queue an inbound message as if the server had sent it."""
        if isinstance(frame, dict):
            frame = json.dumps(frame)
        self._incoming.put_nowait(frame)

    def drop(self) -> None:
        """Simulate the server closing the connection."""
        self._incoming.put_nowait(None)

    async def close(self) -> None:
        self.closed = True
        self._incoming.put_nowait(None)

    def __aiter__(self):
        return self

    async def __anext__(self):
        message = await self._incoming.get()
        if message is None:
            self.closed = True
            raise StopAsyncIteration
        return message


class FakeConnector:
    """Callable matching `websockets.connect(url, **kwargs)`."""

    def __init__(self) -> None:
        self.urls: list[str] = []
        self.sockets: list[FakeWebSocket] = []
        self.error: Exception | None = None
        self.send_error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def __call__(self, url: str, **kwargs) -> FakeWebSocket:
        self.urls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        ws = FakeWebSocket(send_error=self.send_error)
        self.sockets.append(ws)
        return ws

    @property
    def ws(self) -> FakeWebSocket:
        return self.sockets[-1]

    async def settle(self, rounds: int = 10) -> None:
        """Let the reader task and pending callbacks run."""
        for _ in range(rounds):
            await asyncio.sleep(0)

    async def wait_sent(self, count: int = 1) -> list[dict]:
        """Wait until `count` frames have been sent on the current socket."""
        for _ in range(200):
            if self.sockets and len(self.ws.sent) >= count:
                return self.ws.sent
            await asyncio.sleep(0)
        raise AssertionError(f"expected {count} sent frame(s)")


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()
