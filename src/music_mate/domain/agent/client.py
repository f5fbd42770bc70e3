"""
Discovery agent calls using the OpenAI Responses API.

call() returns the envelope the rest of the app understands:
    {"success": True, "response": {"result": <raw text>}}
    {"success": False, "error": "..."}
Transport failures (connection refused, timeouts) are raised as
AgentTransportError so the caller can report them separately.
"""

import time
from typing import Any, Optional

import openai
from loguru import logger

from music_mate.core.config import AgentConfig, Config, get_api_key

from .models import make_envelope, make_failure
from .prompts import SYSTEM_INSTRUCTIONS


class AgentError(Exception):
    """Custom exception for agent-related errors."""

    pass


class AgentTransportError(AgentError):
    """The request never produced an HTTP response (network, timeout)."""

    pass


class AgentConfigError(AgentError):
    """The agent cannot be called with the current configuration."""

    pass


class AgentClient:
    """Sends user utterances to the discovery agent.

    Conversation continuity is kept per session id by chaining each request
    to the previous response id of that session.
    """

    def __init__(self, config: Optional[Config] = None, openai_client: Any = None):
        self.config = config or Config()
        self._client = openai_client
        self._previous_response_ids: dict[str, str] = {}

    @property
    def agent_config(self) -> AgentConfig:
        return self.config.agent

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client

        if not self.agent_config.enabled:
            raise AgentConfigError("The discovery agent is disabled in config.toml ([agent] enabled = false)")

        api_key = get_api_key(self.config)
        if not api_key:
            raise AgentConfigError(
                "No API key found. Set MUSIC_MATE_API_KEY or OPENAI_API_KEY, "
                "or add api_key to the [agent] section of config.toml."
            )

        self._client = openai.OpenAI(
            api_key=api_key,
            base_url=self.agent_config.base_url or None,
            timeout=self.agent_config.timeout_seconds,
        )
        return self._client

    def reset_session(self, session_id: str) -> None:
        """Forget the conversation chain for a session."""
        self._previous_response_ids.pop(session_id, None)

    def call(
        self, utterance: str, agent_id: Optional[str] = None, context: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Send one utterance to the agent.

        Args:
            utterance: What the user typed
            agent_id: Agent identifier (defaults to the configured one)
            context: {"session_id": ...}

        Returns:
            Success or failure envelope

        Raises:
            AgentTransportError: Network failure or timeout
            AgentConfigError: Missing API key or disabled agent
        """
        client = self._get_client()
        agent_id = agent_id or self.agent_config.agent_id
        session_id = str((context or {}).get("session_id") or "")
        model_name = self.agent_config.model

        request: dict[str, Any] = {
            "model": model_name,
            "instructions": SYSTEM_INSTRUCTIONS,
            "input": utterance,
            "metadata": {"agent_id": agent_id, "session_id": session_id},
        }
        previous_id = self._previous_response_ids.get(session_id)
        if previous_id:
            request["previous_response_id"] = previous_id

        start_time = time.time()

        try:
            response = client.responses.create(**request)
        except openai.APIConnectionError as e:
            # Includes APITimeoutError
            logger.warning(f"Agent transport failure after {_elapsed_ms(start_time)}ms: {e}")
            raise AgentTransportError(f"Could not reach the agent: {e}") from e
        except openai.APIError as e:
            logger.warning(f"Agent request failed for model {model_name}: {e}")
            return make_failure(f"Agent API error: {e}")

        response_time_ms = _elapsed_ms(start_time)
        output_text = (getattr(response, "output_text", "") or "").strip()

        usage = getattr(response, "usage", None)
        logger.info(
            f"Agent {agent_id} replied in {response_time_ms}ms "
            f"(input_tokens={getattr(usage, 'input_tokens', 0)}, "
            f"output_tokens={getattr(usage, 'output_tokens', 0)})"
        )

        if not output_text:
            return make_failure("Agent returned an empty response")

        response_id = getattr(response, "id", None)
        if session_id and isinstance(response_id, str):
            self._previous_response_ids[session_id] = response_id

        return make_envelope(output_text)


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)
