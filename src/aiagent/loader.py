"""Load the agent config and prompt from JSON text, JSON files, or CLI values.

File and string loading share a single entry point, :func:`load_json`,
parameterised by :class:`JsonOrigin`. The record builders on top of it
translate failures into the aiagent error kinds:

* unreadable file -> :class:`~aiagent.exceptions.IoError`
* invalid JSON, or JSON that is not an object -> :class:`~aiagent.exceptions.ParseError`
* missing/empty required field, bad value -> :class:`~aiagent.exceptions.ValidationError`

Nothing here touches the network or mutates process state.
"""

from __future__ import annotations

import enum
import json
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from aiagent.exceptions import IoError, ParseError, ValidationError
from aiagent.models import AgentConfig, Prompt

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class JsonOrigin(str, enum.Enum):
    """Where :func:`load_json` reads its text from."""

    LITERAL = "literal"
    FILE = "file"


def load_json(source: str | Path, origin: JsonOrigin = JsonOrigin.LITERAL) -> dict[str, Any]:
    """Parse a JSON object from a literal string or a file.

    Args:
        source: The JSON text itself (``LITERAL``) or a path to it (``FILE``).
        origin: How to interpret *source*.

    Returns:
        The decoded JSON object.

    Raises:
        IoError: If *origin* is ``FILE`` and the file cannot be read.
        ParseError: If the text is not valid JSON or not a JSON object.
    """
    if origin == JsonOrigin.FILE:
        label = str(source)
        text = _read_file(Path(source))
    else:
        label = "JSON input"
        text = str(source)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON in {label}: {exc}") from exc
    except RecursionError as exc:
        raise ParseError(f"Invalid JSON in {label}: nested too deeply") from exc

    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object in {label} (got {type(data).__name__})"
        )
    return data


def _read_file(path: Path) -> str:
    """Return the full text of *path*."""
    if not path.is_file():
        raise IoError(f"File not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IoError(f"Cannot read file {path}: {exc}") from exc


def _build(model: type[_ModelT], data: dict[str, Any], what: str) -> _ModelT:
    """Validate *data* into *model*, mapping pydantic errors to ValidationError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid {what}: {_describe(exc)}") from exc


def _describe(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into ``field: message; ...``."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "value"
        msg = err.get("msg", "invalid value")
        # Drop pydantic's "Value error, " prefix for our own validators.
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{field}: {msg}")
    return "; ".join(parts)


# --- Config ---


def load_config_from_json(text: str) -> AgentConfig:
    """Parse an :class:`AgentConfig` from a JSON string."""
    return _build(AgentConfig, load_json(text, JsonOrigin.LITERAL), "config")


def load_config(path: str | Path) -> AgentConfig:
    """Parse an :class:`AgentConfig` from a JSON file."""
    return _build(AgentConfig, load_json(path, JsonOrigin.FILE), "config")


def config_from_args(
    host: Optional[str],
    api_key: Optional[str] = None,
    base: Optional[dict[str, Any]] = None,
    **overrides: Any,
) -> AgentConfig:
    """Build an :class:`AgentConfig` from CLI values.

    Precedence is *host*/*api_key* > *overrides* > *base* (typically a
    config file) > model defaults. ``None`` values never override.

    Args:
        host: Host from the command line, or ``None`` to keep *base*'s.
        api_key: API key from the command line; ``None`` means not given.
        base: Already-loaded config JSON to start from.
        **overrides: Extra fields (``port``, ``endpoint``, ``timeout``,
            ``verify_ssl``).

    Raises:
        ValidationError: If the merged values do not form a valid config.
    """
    data: dict[str, Any] = dict(base or {})
    data.update({k: v for k, v in overrides.items() if v is not None})
    if host is not None:
        data["host"] = host
    if api_key is not None:
        data["api_key"] = api_key
    return _build(AgentConfig, data, "config")


# --- Prompt ---


def load_prompt_from_json(text: str) -> Prompt:
    """Parse a :class:`Prompt` from a JSON string."""
    return _build(Prompt, load_json(text, JsonOrigin.LITERAL), "prompt")


def load_prompt(path: str | Path) -> Prompt:
    """Parse a :class:`Prompt` from a JSON file."""
    return _build(Prompt, load_json(path, JsonOrigin.FILE), "prompt")


def prompt_from_args(prompt: str) -> Prompt:
    """Build a :class:`Prompt` from the command-line prompt string."""
    return _build(Prompt, {"prompt": prompt}, "prompt")
