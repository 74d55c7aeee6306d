"""Scrolling output log for the terminal screen."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import RichLog


class OutputLog(RichLog):
    """Shows submitted commands and their responses."""

    def __init__(self) -> None:
        super().__init__(id="output-log", wrap=True, highlight=False, markup=False)

    def write_command(self, command: str) -> None:
        line = Text("$ ", style="bold blue")
        line.append(command)
        self.write(line)

    def write_response(self, text: str) -> None:
        if not text:
            self.write(Text("[No output]", style="dim"))
            return
        for line in text.splitlines():
            self.write(line)

    def write_error(self, message: str) -> None:
        self.write(Text(message, style="red"))
