"""Response text extraction -- maps a generation API body to plain text.

Generation servers disagree on where the text lives, so
:func:`extract_text` accepts the common shapes, tried in order:

1. a bare JSON string;
2. a top-level string field (``text``, ``response``, ``content``,
   ``generated_text``, ``output_text``, ``completion``, ``output``);
3. OpenAI-style ``choices[0]`` with ``text``, ``message.content`` or
   ``delta.content``;
4. any of the above wrapped under ``data``, ``result`` or ``output``;
5. a list whose first element is any of the above (Hugging Face style).

:func:`serialize_output` produces the ``{"text": ...}`` record printed on
stdout, which is itself shape 2, so extraction round-trips it.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from aiagent.models import TextOutput

TEXT_FIELDS = (
    "text",
    "response",
    "content",
    "generated_text",
    "output_text",
    "completion",
    "output",
)
WRAPPER_FIELDS = ("data", "result", "output")

_MAX_DEPTH = 4


def extract_text(payload: Any) -> Optional[str]:
    """Find the generated text in a decoded JSON response body.

    Args:
        payload: The decoded JSON (dict, list, or str).

    Returns:
        The generated text, or ``None`` if no known field holds a string.
    """
    return _extract(payload, 0)


def _extract(payload: Any, depth: int) -> Optional[str]:
    if depth > _MAX_DEPTH:
        return None

    if isinstance(payload, str):
        return payload

    if isinstance(payload, list):
        return _extract(payload[0], depth + 1) if payload else None

    if not isinstance(payload, dict):
        return None

    for field in TEXT_FIELDS:
        value = payload.get(field)
        if isinstance(value, str):
            return value

    choices = payload.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        text = _from_choice(choices[0])
        if text is not None:
            return text

    for field in WRAPPER_FIELDS:
        value = payload.get(field)
        if isinstance(value, (dict, list)):
            text = _extract(value, depth + 1)
            if text is not None:
                return text

    return None


def _from_choice(choice: dict[str, Any]) -> Optional[str]:
    """Pull text out of one OpenAI-style choice entry."""
    if isinstance(choice.get("text"), str):
        return choice["text"]
    for key in ("message", "delta"):
        inner = choice.get(key)
        if isinstance(inner, dict) and isinstance(inner.get("content"), str):
            return inner["content"]
    return None


def extract_response_data(response: httpx.Response) -> Any:
    """Decode the JSON body of *response*.

    Returns:
        The decoded JSON value, or ``None`` if the body is empty.

    Raises:
        ValueError: If the body is not valid JSON or is nested too deeply.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except RecursionError as exc:
        raise ValueError("JSON nested too deeply") from exc


def serialize_output(text: str) -> str:
    """Render the ``{"text": ...}`` output record as compact JSON."""
    return json.dumps(TextOutput(text=text).model_dump(), ensure_ascii=False)
