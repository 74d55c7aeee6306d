"""AppContext: wires config, command session, HTTP client and tool together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aiconcert.config import AppConfig, load_config

if TYPE_CHECKING:
    from pathlib import Path

    from aiconcert.infra.ws.session import CommandSession
    from aiconcert.services.tool import AIConcertTool

logger = logging.getLogger(__name__)


class AppContext:
    """Central wiring for all adapter dependencies.

    Lazily builds the tool (and with it the command session and HTTP
    client) on first access. Call `close()` to tear everything down.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        config_path: Path | None = None,
        tool: AIConcertTool | None = None,
    ) -> None:
        self.config = config or load_config(config_path)
        self._tool = tool

    @property
    def tool(self) -> AIConcertTool:
        if self._tool is None:
            from aiconcert.services.tool import AIConcertTool

            self._tool = AIConcertTool(self.config)
        return self._tool

    @property
    def commands(self) -> CommandSession:
        return self.tool.commands

    async def close(self) -> None:
        if self._tool is not None:
            await self._tool.close()
            self._tool = None
        logger.debug("AppContext closed")

    async def __aenter__(self) -> AppContext:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
