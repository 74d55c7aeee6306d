"""Action execution context: shared dependencies for all action handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aiconcert.config import AppConfig
    from aiconcert.infra.http.client import ApiClient
    from aiconcert.infra.ws.session import CommandSession


@dataclass
class ActionContext:
    """Dependency bundle passed to every action handler."""

    commands: CommandSession
    api: ApiClient
    config: AppConfig | None = None
