"""Application context for explicit state passing.

Command handlers receive an AppContext and return an updated one instead of
reaching for module-level globals.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from rich.console import Console

from music_mate.core.config import Config
from music_mate.domain.conversation import ChatSession, ConversationStore


@dataclass
class AppContext:
    """Application context passed to all command handlers.

    Attributes:
        config: Application configuration
        store: Conversation and playlist store
        session: Send-cycle driver bound to the store
        console: Rich Console for formatted output
        ui_action: Optional UI action signal for command handlers to request UI operations
    """

    config: Config
    store: ConversationStore
    session: ChatSession
    console: Console = field(default_factory=lambda: Console(highlight=False))
    ui_action: Optional[dict[str, Any]] = field(default=None)

    @classmethod
    def create(
        cls, config: Config, session: ChatSession, console: Optional[Console] = None
    ) -> "AppContext":
        """Create initial application context.

        Args:
            config: Application configuration
            session: Chat session (its store becomes the context store)
            console: Optional Rich Console instance

        Returns:
            New AppContext with no pending UI action
        """
        return cls(
            config=config,
            store=session.store,
            session=session,
            console=console or Console(highlight=False),
            ui_action=None,
        )

    def with_ui_action(self, action: Optional[dict[str, Any]]) -> "AppContext":
        """Return new context with a UI action signal set (or cleared with None)."""
        return replace(self, ui_action=action)

    def clear_ui_action(self) -> "AppContext":
        return replace(self, ui_action=None)
