"""Terminal screen: type a command, see the server's response."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import Footer, Input, Static
from textual.worker import Worker, WorkerState

from aiconcert.ui.screens.base import BaseScreen
from aiconcert.ui.widgets.output_log import OutputLog


class TerminalScreen(BaseScreen):
    """Display-only terminal; commands run through the command session."""

    CSS = """
    #terminal-title {
        dock: top;
        height: 1;
        text-style: bold;
        background: $accent;
        padding: 0 1;
    }
    #output-log {
        height: 1fr;
    }
    #command-input {
        dock: bottom;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("ctrl+l", "clear_log", "Clear"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._executing = False

    def compose(self) -> ComposeResult:
        yield Static("AI-Concert Terminal", id="terminal-title")
        yield OutputLog()
        yield Input(placeholder="Enter command...", id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#command-input", Input).focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        command = event.value.strip()
        if not command or self._executing:
            return

        input_widget = self.query_one("#command-input", Input)
        log = self.query_one(OutputLog)
        log.write_command(command)

        if not self.has_context():
            log.write_error("Error: Application context not available")
            return

        self._executing = True
        input_widget.disabled = True
        self.run_worker(
            self._execute(command), name="command", exclusive=True, exit_on_error=False
        )

    async def _execute(self, command: str) -> str:
        return await self.ctx.commands.execute(command)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.worker.name != "command":
            return
        if event.state not in (WorkerState.SUCCESS, WorkerState.ERROR, WorkerState.CANCELLED):
            return

        log = self.query_one(OutputLog)
        if event.state == WorkerState.SUCCESS:
            log.write_response(event.worker.result)
        elif event.state == WorkerState.ERROR:
            log.write_error(f"Error: {event.worker.error}")

        self._executing = False
        input_widget = self.query_one("#command-input", Input)
        input_widget.value = ""
        input_widget.disabled = False
        input_widget.focus()

    def action_clear_log(self) -> None:
        self.query_one(OutputLog).clear()
