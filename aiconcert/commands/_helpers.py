"""CLI helpers for building the adapter context."""

from __future__ import annotations

from aiconcert.context import AppContext
from aiconcert.errors import InvalidArgumentError


def get_context(command_timeout: float | None = None) -> AppContext:
    """Create an AppContext with a ready tool. Exits if the server URLs are unset."""
    ctx = AppContext()
    if command_timeout is not None:
        ctx.config.commands.timeout = command_timeout
    try:
        ctx.tool
    except InvalidArgumentError as e:
        raise SystemExit(
            f"{e} Set it in the environment or run: aiconcert config init"
        ) from e
    return ctx
