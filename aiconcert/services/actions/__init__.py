"""Tool action handler registry.

Each action handler is an async function with signature:

    async def handle(ctx: ActionContext, arguments: dict) -> str

The registry maps the tool's `action` values to handler functions.
"""

from __future__ import annotations

from aiconcert.services.actions.registry import get_action_handlers

__all__ = ["get_action_handlers"]
