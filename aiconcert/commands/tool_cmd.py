"""CLI handlers that drive the tool directly: exec, call, schema."""

from __future__ import annotations

import asyncio
import json

import click

from aiconcert.commands._helpers import get_context
from aiconcert.config import load_config
from aiconcert.services.tool import tool_definition


def _run(coro):
    return asyncio.run(coro)


@click.command("exec")
@click.argument("command", nargs=-1, required=True)
@click.option("--timeout", type=float, default=None, help="Override the command deadline (seconds)")
def exec_command(command: tuple[str, ...], timeout: float | None):
    """Run one terminal command on the AI-Concert server."""

    async def _exec():
        ctx = get_context(command_timeout=timeout)
        try:
            return await ctx.tool.call({"action": "terminal", "command": " ".join(command)})
        finally:
            await ctx.close()

    click.echo(_run(_exec()))


@click.command("call")
@click.argument("action")
@click.option("--command", "command_", default=None, help="Shell command (terminal)")
@click.option("--path", default=None, help="File or codebase path")
@click.option("--operation", default=None, help="Sub-operation, e.g. read, list, status")
@click.option("--content", default=None, help="File content for write")
@click.option("--params", default=None, help="Extra parameters as a JSON object")
def call_command(
    action: str,
    command_: str | None,
    path: str | None,
    operation: str | None,
    content: str | None,
    params: str | None,
):
    """Make a single structured tool call."""
    arguments: dict = {"action": action}
    for name, value in (
        ("command", command_),
        ("path", path),
        ("operation", operation),
        ("content", content),
    ):
        if value is not None:
            arguments[name] = value
    if params:
        try:
            arguments["params"] = json.loads(params)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--params") from e

    async def _call():
        ctx = get_context()
        try:
            return await ctx.tool.call(arguments)
        finally:
            await ctx.close()

    click.echo(_run(_call()))


@click.command("schema")
def schema_command():
    """Print the tool definition shown to the agent."""
    config = load_config()
    click.echo(json.dumps(tool_definition(config.tool.system_prompt), indent=2))
