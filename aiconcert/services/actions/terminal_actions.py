"""Terminal action: run a shell command on the remote server."""

from __future__ import annotations

from aiconcert.services.actions.context import ActionContext


async def handle_terminal(ctx: ActionContext, arguments: dict) -> str:
    return await ctx.commands.execute(arguments.get("command"))
