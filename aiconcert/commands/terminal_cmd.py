"""CLI handler for the interactive terminal UI."""

from __future__ import annotations

import click

from aiconcert.commands._helpers import get_context


@click.command("terminal")
def terminal_command():
    """Open the AI-Concert terminal UI."""
    from aiconcert.ui.app import AIConcertApp

    ctx = get_context()
    AIConcertApp(ctx).run()
