"""Action handler registry: maps action names to async handler functions."""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any

from aiconcert.services.actions.context import ActionContext

ActionHandler = Callable[[ActionContext, dict], Coroutine[Any, Any, str]]

# Lazy-populated on first access
_HANDLERS: dict[str, ActionHandler] | None = None


def _build_registry() -> dict[str, ActionHandler]:
    from aiconcert.services.actions import (
        file_actions,
        job_actions,
        project_actions,
        terminal_actions,
    )

    return {
        "terminal": terminal_actions.handle_terminal,
        "file": file_actions.handle_file,
        "analyze": job_actions.handle_analyze,
        "test": job_actions.handle_test,
        "project": project_actions.handle_project,
    }


def get_action_handlers() -> dict[str, ActionHandler]:
    """Get the action handler registry (lazily initialized)."""
    global _HANDLERS
    if _HANDLERS is None:
        _HANDLERS = _build_registry()
    return _HANDLERS
