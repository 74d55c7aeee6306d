"""AIConcertTool: the single structured tool exposed to the calling agent."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from aiconcert.infra.http.client import ApiClient
from aiconcert.infra.ws.session import CommandSession
from aiconcert.services.actions import get_action_handlers
from aiconcert.services.actions.context import ActionContext

if TYPE_CHECKING:
    from aiconcert.config import AppConfig

logger = logging.getLogger(__name__)

ACTIONS = ("terminal", "file", "analyze", "test", "project")

DESCRIPTION = (
    "Connect to AI-Concert Server for terminal commands, file operations, "
    "code analysis, and project management."
)

DEFAULT_MODEL_PROMPT = """\
// AIConcert Tool: Access advanced development features
// - Execute terminal commands with `action: "terminal", command: "ls -la"`
// - Manage files with `action: "file", operation: "read", path: "/path/to/file"`
// - Analyze codebases with `action: "analyze", path: "/path/to/codebase"`
// - Run tests with `action: "test", params: { repo_url: "https://github.com/repo" }`
// - Manage projects with `action: "project", operation: "list"`
// Always specify the action and any required parameters for the specific operation."""

TOOL_PARAMETERS = {
    "type": "object",
    "properties": {
        "action": {
            "type": "string",
            "enum": list(ACTIONS),
            "description": "Which AI-Concert feature to use",
        },
        "command": {"type": "string", "description": "Shell command (terminal)"},
        "path": {"type": "string", "description": "File or codebase path (file, analyze)"},
        "operation": {
            "type": "string",
            "description": "Sub-operation, e.g. read/write/list/delete (file), "
            "list/get/create/update/delete (project)",
        },
        "content": {"type": "string", "description": "File content (file write)"},
        "params": {
            "type": "object",
            "description": "Extra parameters, e.g. repo_url, code_path, id",
        },
    },
    "required": ["action"],
}


def tool_definition(system_prompt: str = "") -> dict:
    """Tool definition in the provider-neutral {name, description, parameters} form."""
    return {
        "name": AIConcertTool.name,
        "description": f"{DESCRIPTION}\n{system_prompt or DEFAULT_MODEL_PROMPT}",
        "parameters": TOOL_PARAMETERS,
    }


class AIConcertTool:
    """Dispatches structured tool calls to terminal and HTTP actions.

    `call()` always returns text the agent can read: validation failures,
    transport errors and HTTP errors are all rendered as messages.
    """

    name = "aiconcert"
    description = DESCRIPTION

    def __init__(
        self,
        config: AppConfig,
        commands: CommandSession | None = None,
        api: ApiClient | None = None,
    ) -> None:
        config.require_urls()
        self._config = config
        token = config.server.auth_token or None
        self._commands = commands or CommandSession(
            config.server.ws_url,
            token=token,
            timeout=config.commands.timeout,
            open_timeout=config.commands.open_timeout,
        )
        self._api = api or ApiClient(
            config.server.api_url,
            token=token,
            timeout=config.http.timeout,
        )
        self._ctx = ActionContext(commands=self._commands, api=self._api, config=config)

    @property
    def description_for_model(self) -> str:
        return self._config.tool.system_prompt or DEFAULT_MODEL_PROMPT

    @property
    def commands(self) -> CommandSession:
        return self._commands

    @property
    def api(self) -> ApiClient:
        return self._api

    def definition(self) -> dict:
        return tool_definition(self._config.tool.system_prompt)

    async def call(self, arguments: dict[str, Any]) -> str:
        logger.debug("Tool call: %s", arguments)
        action = arguments.get("action")
        handler = get_action_handlers().get(action) if isinstance(action, str) else None
        if handler is None:
            return f"Unknown action: {action}. Available actions are: {', '.join(ACTIONS)}."
        try:
            return await handler(self._ctx, arguments)
        except Exception as e:
            logger.error("Error during %s action: %s", action, e)
            return f"Error executing AIConcert action: {e}"

    async def close(self) -> None:
        await self._commands.close()
        await self._api.close()
