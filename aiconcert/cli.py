"""Click CLI definitions - main entry point."""

from __future__ import annotations

import logging
import sys

import click

from aiconcert.commands.config_cmd import config_group
from aiconcert.commands.terminal_cmd import terminal_command
from aiconcert.commands.tool_cmd import call_command, exec_command, schema_command


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, debug: bool) -> None:
    """aiconcert - agent adapter for the AI-Concert development server."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


cli.add_command(config_group, "config")
cli.add_command(exec_command, "exec")
cli.add_command(call_command, "call")
cli.add_command(schema_command, "schema")
cli.add_command(terminal_command, "terminal")


if __name__ == "__main__":
    cli()
