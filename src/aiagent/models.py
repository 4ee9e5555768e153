"""Pydantic models shared across aiagent.

These are the only data shapes in the project:

* :class:`AgentConfig` -- connection parameters for the generation service.
* :class:`Prompt` -- the text sent to the service.
* :class:`TextOutput` -- the ``{"text": ...}`` record printed on success.

Config and prompt are frozen: they are built once per invocation by
:mod:`aiagent.loader`, consumed once by :class:`~aiagent.client.SyncClient`,
and discarded at exit. Unknown keys are rejected so that a typo in a config
file surfaces as an error instead of being silently ignored.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PORT = "443"
DEFAULT_ENDPOINT = "/generate"
DEFAULT_TIMEOUT = 30.0

_HOST_FORBIDDEN = frozenset("/:?#@")


class AgentConfig(BaseModel):
    """Connection parameters for one invocation.

    ``api_key`` distinguishes "not provided" (``None``) from "provided
    empty" (``""``). Neither sends an ``Authorization`` header.

    Example::

        AgentConfig(host="api.example.com", api_key="sk-123")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str = Field(description="Remote host name, without scheme or path")
    port: str = Field(default=DEFAULT_PORT, description="TCP port, as a string")
    api_key: Optional[str] = Field(
        default=None, description="Bearer key sent in the Authorization header"
    )
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT, description="Request path of the generation endpoint"
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds"
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("host", mode="before")
    @classmethod
    def _normalise_host(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        host = value.strip()
        if host.lower().startswith("https://"):
            host = host[len("https://"):]
        host = host.rstrip("/")
        if not host:
            raise ValueError("host must not be empty")
        if ":" in host and "://" not in host:
            raise ValueError(f"host must not contain a port, use --port instead, got {value!r}")
        if any(ch in _HOST_FORBIDDEN for ch in host) or any(ch.isspace() for ch in host):
            raise ValueError(f"host must be a bare host name, got {value!r}")
        return host

    @field_validator("port", mode="before")
    @classmethod
    def _normalise_port(cls, value: Any) -> Any:
        # JSON configs often carry the port as a number.
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            return value
        port = value.strip()
        if not (port.isascii() and port.isdigit()) or not 0 < int(port) < 65536:
            raise ValueError(f"port must be a number between 1 and 65535, got {value!r}")
        return port

    @field_validator("api_key")
    @classmethod
    def _header_safe_key(cls, value: Optional[str]) -> Optional[str]:
        # Sent verbatim in an HTTP header.
        if value is not None and not (value.isascii() and value.isprintable()):
            raise ValueError("api_key must contain only printable ASCII characters")
        return value

    @field_validator("endpoint")
    @classmethod
    def _normalise_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("/"):
            value = "/" + value
        return value

    @property
    def base_url(self) -> str:
        """``https://host:port`` for the configured service."""
        return f"https://{self.host}:{self.port}"

    @property
    def has_api_key(self) -> bool:
        """True when a non-empty API key should be sent."""
        return bool(self.api_key)


class Prompt(BaseModel):
    """A single non-empty prompt. No history, no multi-turn state."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    prompt: str

    @field_validator("prompt")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


class TextOutput(BaseModel):
    """The record printed to stdout on success."""

    text: str
