"""Textual TUI application for issuing terminal commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App

from aiconcert.ui.screens.terminal import TerminalScreen

if TYPE_CHECKING:
    from aiconcert.context import AppContext


class AIConcertApp(App):
    """aiconcert terminal application."""

    TITLE = "aiconcert"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, ctx: AppContext | None = None) -> None:
        super().__init__()
        self.ctx = ctx

    def on_mount(self) -> None:
        self.push_screen(TerminalScreen())

    async def on_unmount(self) -> None:
        if self.ctx:
            await self.ctx.close()

    def action_quit(self) -> None:
        self.exit()
