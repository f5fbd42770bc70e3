"""
One send cycle of the chat: user turn, agent call, interpretation,
reconciliation, assistant turn.

At most one request is in flight per session, and sending is refused while
sample mode is active. Agent failures become assistant turns with a generic
retry message; they never propagate out of send().
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

from music_mate.domain.agent import AgentError, AgentResponse, PlaylistAction, interpret
from music_mate.domain.playlists import ChatTurn, Playlist, find_playlist_index

from .store import ConversationStore

PROCESSING_ERROR_MESSAGE = "I had trouble processing that request. Please try again."
NETWORK_ERROR_MESSAGE = "A network error occurred. Please check your connection and try again."


@dataclass
class SendOutcome:
    """What one send() produced, for the surface to render."""

    sent: bool = True
    turns: list[ChatTurn] = field(default_factory=list)
    notifications: list[str] = field(default_factory=list)
    error: Optional[str] = None
    ui_action: Optional[dict[str, Any]] = None

    @property
    def reply(self) -> Optional[ChatTurn]:
        """The assistant turn, if one was appended."""
        for turn in reversed(self.turns):
            if turn.role == "assistant":
                return turn
        return None


def notification_for_action(
    action: Optional[PlaylistAction], playlists: list[Playlist]
) -> Optional[str]:
    """
    Toast text for an applied agent command.

    Args:
        action: Command carried by the reply
        playlists: Collection after the command was applied

    Returns:
        Notification text, or None when nothing visible happened
    """
    if action is None or not action.playlist_name:
        return None

    name = action.playlist_name
    if action.kind == "create":
        return f'Playlist "{name}" created'

    if find_playlist_index(playlists, name) is None:
        return None

    if action.kind == "add":
        return f'Tracks added to "{name}"'
    if action.kind == "remove":
        return f'Tracks removed from "{name}"'
    return None


class ChatSession:
    """Drives send cycles against a store and an agent client."""

    def __init__(self, store: ConversationStore, client: Any, agent_id: Optional[str] = None):
        self.store = store
        self.client = client
        self.agent_id = agent_id
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    @property
    def can_send(self) -> bool:
        return not self._in_flight and not self.store.sample_mode

    def send(self, utterance: str) -> SendOutcome:
        """
        Send one user utterance and record the reply.

        Blank input, a request already in flight and sample mode all make
        this a no-op (outcome.sent is False).
        """
        text = utterance.strip()
        if not text or not self.can_send:
            return SendOutcome(sent=False)

        self._in_flight = True
        try:
            return self._send(text)
        finally:
            self._in_flight = False

    def _send(self, text: str) -> SendOutcome:
        outcome = SendOutcome()
        outcome.turns.append(self.store.append_turn(ChatTurn.user(text)))

        try:
            envelope = self.client.call(text, self.agent_id, {"session_id": self.store.session_id})
        except AgentError as e:
            logger.warning(f"Agent call failed: {e}")
            outcome.error = str(e)
            outcome.turns.append(self.store.append_turn(ChatTurn.assistant(NETWORK_ERROR_MESSAGE)))
            return outcome

        response = AgentResponse.from_envelope(envelope)
        if not response.success:
            outcome.error = response.failure_text()
            logger.warning(f"Agent reported failure: {outcome.error}")
            outcome.turns.append(self.store.append_turn(ChatTurn.assistant(PROCESSING_ERROR_MESSAGE)))
            return outcome

        reply = interpret(response.result, response.message or "")
        outcome.turns.append(self.store.apply_reply(reply))

        notification = notification_for_action(reply.action, list(self.store.playlists))
        if notification:
            outcome.notifications.append(notification)
        if reply.action is not None and reply.action.kind == "list":
            outcome.ui_action = {"type": "show_playlists"}

        return outcome

    def clear(self) -> bool:
        """Clear the conversation and forget the agent-side chain for it."""
        if not self.store.clear_conversation():
            return False
        reset = getattr(self.client, "reset_session", None)
        if callable(reset):
            reset(self.store.session_id)
        return True
