"""Classify tool-call responses as success, server error or malformed."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Success:
    text: str
    payload: Any = None


@dataclass(frozen=True)
class ServerError:
    error: Any
    payload: Any = None


@dataclass(frozen=True)
class Malformed:
    reason: str
    payload: Any = None
    # False when the body was not a JSON object at all
    decoded: bool = True


Outcome = Union[Success, ServerError, Malformed]


def _decode(raw: Any) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        return json.loads(raw)
    return raw


def _result_text(body: dict) -> Optional[str]:
    result = body.get("result")
    if not isinstance(result, dict):
        return None
    content = result.get("content")
    if not isinstance(content, list) or not content:
        return None
    first = content[0]
    if not isinstance(first, dict):
        return None
    text = first.get("text")
    return text if isinstance(text, str) else None


def interpret(raw: Any) -> Outcome:
    """Classify a response body.

    ``raw`` is either an already decoded mapping or the undecoded body text.
    An ``error`` member always wins, whatever the HTTP status was. Anything
    without ``result.content[0].text`` is a contract violation and comes back
    as :class:`Malformed` rather than :class:`ServerError`.
    """
    try:
        body = _decode(raw)
    except ValueError:
        return Malformed(reason="response body is not valid JSON", payload=raw, decoded=False)

    if not isinstance(body, dict):
        return Malformed(reason="response body is not a JSON object", payload=body, decoded=False)
    if "error" in body:
        return ServerError(error=body["error"], payload=body)

    text = _result_text(body)
    if text is None:
        return Malformed(reason="missing result.content[0].text", payload=body)
    return Success(text=text, payload=body)
