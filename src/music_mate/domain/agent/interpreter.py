"""Tolerant interpretation of raw discovery-agent output.

The agent is asked for a JSON object ({"message", "tracks",
"playlist_action"}) but what comes back drifts: bare prose, JSON inside
```json fences, JSON followed by commentary, Python-style single quotes,
trailing commas, or a JSON document encoded as a string. interpret()
walks a list of extraction attempts from strict to permissive and always
ends in a plain-text reply, so it never raises.
"""

import ast
import json
import re
from typing import Any, Callable, Iterator, Optional

from loguru import logger

from music_mate.domain.tracks import normalize_tracks

from .models import DEFAULT_REPLY_MESSAGE, AgentReply, PlaylistAction

PAYLOAD_KEYS = ("message", "tracks", "playlist_action")

# Wrapper keys some agent platforms nest the real payload under
WRAPPER_KEYS = ("result", "response", "data")

MAX_UNWRAP_DEPTH = 3

# Brace positions iter_balanced_objects scans from; each scan may run to
# the end of the text
MAX_OBJECT_STARTS = 64

_FENCE_BLOCK = re.compile(r"```[ \t]*(?:json|JSON|javascript|js)?[ \t]*\n?(.*?)```", re.DOTALL)
_FENCE_MARKER = re.compile(r"```[ \t]*[A-Za-z]*")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_SMART_QUOTES = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'"})


def _has_payload_keys(obj: Any) -> bool:
    return isinstance(obj, dict) and any(key in obj for key in PAYLOAD_KEYS)


def strip_code_fences(text: str) -> str:
    """Remove markdown fence markers (```json ... ```), keeping their content."""
    return _FENCE_MARKER.sub("", text).strip()


def iter_balanced_objects(text: str) -> Iterator[str]:
    """Yield each balanced {...} span in text, left to right.

    Braces inside single- or double-quoted strings are ignored so that a
    "}" in a track description does not end the span early. Only the first
    MAX_OBJECT_STARTS opening braces are tried.
    """
    start = text.find("{")
    starts = 0
    while start != -1 and starts < MAX_OBJECT_STARTS:
        starts += 1
        depth = 0
        quote: Optional[str] = None
        escaped = False
        for position in range(start, len(text)):
            char = text[position]
            if quote:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == quote:
                    quote = None
                continue
            if char in ('"', "'"):
                quote = char
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    yield text[start:position + 1]
                    break
        # Continue after this brace whether or not it balanced
        start = text.find("{", start + 1)


def find_balanced_object(text: str) -> Optional[str]:
    """Return the first balanced {...} span in text, or None."""
    return next(iter_balanced_objects(text), None)


def _iter_candidates(text: str) -> Iterator[str]:
    """Yield JSON-looking substrings, most specific first."""
    stripped = text.strip()
    yield stripped

    for block in _FENCE_BLOCK.findall(stripped):
        yield block.strip()

    unfenced = strip_code_fences(stripped)
    yield unfenced

    yield from iter_balanced_objects(unfenced)

    first, last = unfenced.find("{"), unfenced.rfind("}")
    if first != -1 and last > first:
        yield unfenced[first:last + 1]


def _convert_single_quotes(text: str) -> str:
    """Rewrite single-quoted string literals as JSON double-quoted ones."""
    out: list[str] = []
    quote: Optional[str] = None
    escaped = False
    for char in text:
        if quote is None:
            if char == "'":
                quote = "'"
                out.append('"')
            else:
                if char == '"':
                    quote = '"'
                out.append(char)
            continue

        if escaped:
            escaped = False
            # \' is not a valid JSON escape
            out.append("'" if char == "'" and quote == "'" else "\\" + char)
            continue
        if char == "\\":
            escaped = True
            continue
        if char == quote:
            out.append('"')
            quote = None
        elif char == '"' and quote == "'":
            out.append('\\"')
        else:
            out.append(char)
    return "".join(out)


def _loads_strict(candidate: str) -> Any:
    return json.loads(candidate)


def _loads_relaxed(candidate: str) -> Any:
    repaired = candidate.translate(_SMART_QUOTES)
    repaired = _TRAILING_COMMA.sub(r"\1", repaired)
    try:
        return json.loads(repaired)
    except json.JSONDecodeError:
        return json.loads(_convert_single_quotes(repaired))


def _loads_python_literal(candidate: str) -> Any:
    # Models sometimes answer with a Python dict repr (True/None, single quotes)
    return ast.literal_eval(candidate)


PARSERS: list[Callable[[str], Any]] = [_loads_strict, _loads_relaxed, _loads_python_literal]


def _parse_candidate(candidate: str) -> Any:
    for parser in PARSERS:
        try:
            return parser(candidate)
        except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError):
            continue
    return None


def extract_payload(raw_result: Any, _depth: int = 0) -> Optional[dict]:
    """Recover the structured payload from a raw agent result.

    Args:
        raw_result: Whatever the agent call returned as its result

    Returns:
        Dict carrying at least one of message/tracks/playlist_action, or
        None when nothing structured can be recovered
    """
    if _depth > MAX_UNWRAP_DEPTH:
        return None

    if isinstance(raw_result, dict):
        if _has_payload_keys(raw_result):
            return raw_result
        for key in WRAPPER_KEYS:
            if key in raw_result:
                nested = extract_payload(raw_result[key], _depth + 1)
                if nested is not None:
                    return nested
        return None

    if not isinstance(raw_result, str) or "{" not in raw_result:
        return None

    seen = set()
    for candidate in _iter_candidates(raw_result):
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)

        parsed = _parse_candidate(candidate)
        if isinstance(parsed, str):
            # JSON document delivered as a JSON string
            parsed = extract_payload(parsed, _depth + 1)
        elif isinstance(parsed, dict) and not _has_payload_keys(parsed):
            parsed = extract_payload(parsed, _depth + 1)

        if _has_payload_keys(parsed):
            return parsed

    logger.debug(f"No structured payload in agent output ({len(raw_result)} chars)")
    return None


def _non_blank(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _plain_reply(raw_result: Any, fallback_message: str) -> AgentReply:
    message = (
        _non_blank(raw_result)
        or _non_blank(fallback_message)
        or DEFAULT_REPLY_MESSAGE
    )
    return AgentReply(message=message)


def interpret(raw_result: Any, fallback_message: str = "") -> AgentReply:
    """Extract message, tracks and playlist action from a raw agent result.

    Never raises. Malformed input degrades to the most conservative reading:
    the raw text as the message, no tracks, no action.

    Args:
        raw_result: response.result from a successful agent call
        fallback_message: response.message from the same envelope, if any

    Returns:
        AgentReply with a non-empty message
    """
    try:
        payload = extract_payload(raw_result)
        if payload is None:
            return _plain_reply(raw_result, fallback_message)

        message = (
            _non_blank(payload.get("message"))
            or _non_blank(fallback_message)
            or _non_blank(raw_result)
            or DEFAULT_REPLY_MESSAGE
        )
        tracks = tuple(normalize_tracks(payload.get("tracks")))
        action = PlaylistAction.from_payload(payload.get("playlist_action"))

        if payload.get("playlist_action") is not None and action is None:
            logger.debug(
                f"Ignoring unrecognized playlist_action: {payload.get('playlist_action')!r:.200}"
            )

        return AgentReply(message=message, tracks=tracks, action=action)

    except Exception:
        logger.exception("Agent output interpretation failed; using plain text reply")
        return _plain_reply(raw_result, fallback_message)
