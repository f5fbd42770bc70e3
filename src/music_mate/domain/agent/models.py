"""
Agent domain models.

PlaylistAction is the small command vocabulary the discovery agent may
attach to a reply. AgentReply is what the interpreter extracts from one
raw result, and AgentResponse wraps the success/failure envelope returned
by the agent call.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Optional, get_args

from music_mate.domain.tracks import Track

ActionKind = Literal["create", "add", "remove", "rename", "list"]
ACTION_KINDS: tuple[str, ...] = get_args(ActionKind)

DEFAULT_REPLY_MESSAGE = "Here are my recommendations."


def _coerce_index(value: Any) -> Optional[int]:
    """Best-effort conversion of one model-supplied index to int."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def coerce_indices(raw: Any) -> tuple[int, ...]:
    """Coerce a model-supplied index list to a tuple of ints.

    A lone number is treated as a one-element list; entries that are not
    integral are dropped.
    """
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raw = [raw]
    indices = []
    for item in raw:
        index = _coerce_index(item)
        if index is not None:
            indices.append(index)
    return tuple(indices)


def _coerce_name(raw: Any) -> str:
    if raw is None or isinstance(raw, bool):
        return ""
    if isinstance(raw, str):
        return raw.strip()
    if isinstance(raw, (int, float)):
        return str(raw)
    return ""


@dataclass(frozen=True)
class PlaylistAction:
    """A single playlist command parsed from agent output.

    track_indices are 1-based positions into the turn's source list
    (or, for remove, into the matched playlist's own contents).
    """

    kind: ActionKind
    playlist_name: str = ""
    track_indices: tuple[int, ...] = ()

    @classmethod
    def from_payload(cls, raw: Any) -> Optional["PlaylistAction"]:
        """Validating constructor for untrusted payloads.

        Returns None unless raw is a mapping whose "action" is one of the
        recognized kinds (matched exactly).
        """
        if isinstance(raw, PlaylistAction):
            return raw
        if not isinstance(raw, dict):
            return None

        kind = raw.get("action")
        if not isinstance(kind, str) or kind not in ACTION_KINDS:
            return None

        return cls(
            kind=kind,
            playlist_name=_coerce_name(raw.get("playlist_name")),
            track_indices=coerce_indices(raw.get("track_indices")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire representation (same shape the agent emits)."""
        return {
            "action": self.kind,
            "playlist_name": self.playlist_name,
            "track_indices": list(self.track_indices),
        }


@dataclass(frozen=True)
class AgentReply:
    """Structured result of interpreting one raw agent result."""

    message: str
    tracks: tuple[Track, ...] = ()
    action: Optional[PlaylistAction] = None


@dataclass
class AgentResponse:
    """Envelope returned by the agent call.

    success=True carries the raw result (and optionally a message);
    success=False carries an error string and/or a response message.
    """

    success: bool
    result: Any = None
    message: Optional[str] = None
    error: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_envelope(cls, envelope: Any) -> "AgentResponse":
        """Read a {success, response: {result, message}, error} envelope."""
        if not isinstance(envelope, dict):
            return cls(success=False, error="Malformed agent response")

        response = envelope.get("response")
        if not isinstance(response, dict):
            response = {}

        message = response.get("message")
        error = envelope.get("error")
        return cls(
            success=envelope.get("success") is True,
            result=response.get("result"),
            message=message if isinstance(message, str) else None,
            error=error if isinstance(error, str) else None,
            raw=envelope,
        )

    def failure_text(self) -> str:
        """Error text to surface for a failed call."""
        return self.error or self.message or "Something went wrong. Please try again."


def make_envelope(result: Any, message: Optional[str] = None) -> dict[str, Any]:
    """Build a success envelope."""
    response: dict[str, Any] = {"result": result}
    if message is not None:
        response["message"] = message
    return {"success": True, "response": response}


def make_failure(error: str, message: Optional[str] = None) -> dict[str, Any]:
    """Build a failure envelope."""
    envelope: dict[str, Any] = {"success": False, "error": error}
    if message is not None:
        envelope["response"] = {"message": message}
    return envelope


def indices_summary(indices: Iterable[int]) -> str:
    """Compact "1, 2, 5" rendering for logs."""
    return ", ".join(str(i) for i in indices) or "-"
