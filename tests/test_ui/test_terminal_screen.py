"""Pilot tests for the terminal screen."""

from __future__ import annotations

import pytest
from textual.widgets import Input

from aiconcert.config import AppConfig, ServerConfig
from aiconcert.context import AppContext
from aiconcert.infra.http.client import ApiClient
from aiconcert.infra.ws.session import CommandSession
from aiconcert.services.tool import AIConcertTool
from aiconcert.ui.app import AIConcertApp
from aiconcert.ui.screens.terminal import TerminalScreen
from aiconcert.ui.widgets.output_log import OutputLog

API_URL = "http://localhost:8080"
WS_URL = "ws://localhost:8080/ws"


def _log_lines(screen: TerminalScreen) -> list[str]:
    return [strip.text.rstrip() for strip in screen.query_one(OutputLog).lines]


async def _wait_sent(pilot, connector) -> dict:
    for _ in range(50):
        if connector.sockets and connector.ws.sent:
            return connector.ws.sent[0]
        await pilot.pause()
    raise AssertionError("command was never sent")


@pytest.fixture
def app(connector):
    config = AppConfig(server=ServerConfig(api_url=API_URL, ws_url=WS_URL))
    tool = AIConcertTool(
        config,
        commands=CommandSession(WS_URL, connect=connector),
        api=ApiClient(API_URL),
    )
    return AIConcertApp(AppContext(config, tool=tool))


class TestTerminalScreen:
    @pytest.mark.asyncio
    async def test_response_written_to_log(self, app, connector):
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("l", "s", "enter")
            frame = await _wait_sent(pilot, connector)
            assert frame["content"] == {"command": "ls"}
            connector.ws.push({"id": frame["id"], "type": "stdout", "content": "a.txt"})
            connector.ws.push({"id": frame["id"], "type": "system", "content": "done"})
            await app.workers.wait_for_complete()
            await pilot.pause()

            screen = app.screen
            assert isinstance(screen, TerminalScreen)
            assert _log_lines(screen) == ["$ ls", "a.txt", "done"]
            assert not screen.query_one("#command-input", Input).disabled

    @pytest.mark.asyncio
    async def test_failed_connect_keeps_app_running(self, app, connector):
        connector.error = OSError("connection refused")
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("l", "s", "enter")
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.is_running
            screen = app.screen
            assert isinstance(screen, TerminalScreen)
            assert _log_lines(screen) == [
                "$ ls",
                "Error: WebSocket connection error: connection refused",
            ]
            input_widget = screen.query_one("#command-input", Input)
            assert not input_widget.disabled
            assert input_widget.value == ""
