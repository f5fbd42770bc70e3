"""Agent domain - talking to the remote discovery agent and reading its output.

This domain handles:
- The OpenAI-backed agent call and its error taxonomy
- Tolerant extraction of message/tracks/playlist action from raw output
- The PlaylistAction command vocabulary
"""

from .client import AgentClient, AgentConfigError, AgentError, AgentTransportError

from .interpreter import extract_payload, find_balanced_object, interpret, strip_code_fences

from .models import (
    ACTION_KINDS,
    DEFAULT_REPLY_MESSAGE,
    AgentReply,
    AgentResponse,
    PlaylistAction,
    coerce_indices,
    make_envelope,
    make_failure,
)

from .prompts import STARTER_SUGGESTIONS, SYSTEM_INSTRUCTIONS

__all__ = [
    # Client
    "AgentClient",
    "AgentConfigError",
    "AgentError",
    "AgentTransportError",
    # Interpreter
    "extract_payload",
    "find_balanced_object",
    "interpret",
    "strip_code_fences",
    # Models
    "ACTION_KINDS",
    "DEFAULT_REPLY_MESSAGE",
    "AgentReply",
    "AgentResponse",
    "PlaylistAction",
    "coerce_indices",
    "make_envelope",
    "make_failure",
    # Prompts
    "STARTER_SUGGESTIONS",
    "SYSTEM_INSTRUCTIONS",
]
