"""Base screen with common utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.screen import Screen

if TYPE_CHECKING:
    from aiconcert.context import AppContext
    from aiconcert.ui.app import AIConcertApp


class BaseScreen(Screen):
    """Base screen with common utilities for context management."""

    @property
    def ctx(self) -> AppContext | None:
        """Get the application context safely.

        Returns:
            AppContext if available, None otherwise.
        """
        if hasattr(self.app, "ctx"):
            app: AIConcertApp = self.app  # type: ignore
            return app.ctx
        return None

    def has_context(self) -> bool:
        return self.ctx is not None
