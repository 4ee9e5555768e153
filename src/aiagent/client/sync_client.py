"""Synchronous HTTPS executor for the generation endpoint.

This module provides :class:`SyncClient`, the single network-facing piece
of aiagent. It wraps :class:`httpx.Client` and layers on:

- **Bearer auth** -- ``Authorization: Bearer <api_key>`` when a non-empty
  key is configured.
- **Dry-run mode** -- prints the request to stderr and sends nothing.
- **Error mapping** -- transport failures become
  :class:`~aiagent.exceptions.NetworkError`; bad statuses and unusable
  bodies become :class:`~aiagent.exceptions.RequestError`.

Exactly one request is made per :meth:`SyncClient.generate` call. There is
no retry: the caller sees the first failure.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from aiagent.client.response import extract_response_data, extract_text
from aiagent.exceptions import NetworkError, RequestError
from aiagent.models import AgentConfig, Prompt
from aiagent.output import get_output

_BODY_PREVIEW = 200


class SyncClient:
    """Synchronous client for the generation API.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        config: Connection parameters (host, port, key, timeout, TLS verify).
        dry_run: When ``True``, the request is printed to stderr and
            :meth:`generate` returns ``None`` without network I/O.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`.

    Example::

        with SyncClient(config) as client:
            text = client.generate(prompt)
    """

    def __init__(
        self,
        config: AgentConfig,
        dry_run: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._dry_run = dry_run
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        self._client = httpx.Client(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def generate(self, prompt: Prompt) -> Optional[str]:
        """Send *prompt* to the generation endpoint and return the text.

        Args:
            prompt: The validated prompt.

        Returns:
            The generated text, or ``None`` in dry-run mode.

        Raises:
            NetworkError: On connection, TLS, protocol, or timeout failure.
            RequestError: On a non-2xx status, a body that is not JSON, or
                JSON with no recognisable text field.
        """
        body = {"prompt": prompt.prompt}
        headers = self._build_headers()
        url = f"{self._config.base_url}{self._config.endpoint}"

        if self._dry_run:
            self._print_dry_run(url, headers, body)
            return None

        response = self._send(headers, body)
        self._map_response_error(response)

        try:
            payload = extract_response_data(response)
        except ValueError as exc:
            raise RequestError(
                f"HTTP {response.status_code}: response is not valid JSON: "
                f"{_preview(response.text)}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        text = extract_text(payload)
        if text is None:
            raise RequestError(
                f"HTTP {response.status_code}: no text field in response: "
                f"{_preview(response.text)}",
                status_code=response.status_code,
                body=response.text,
            )
        get_output().debug(f"Extracted {len(text)} characters of text")
        return text

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.has_api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        elif self._config.api_key == "":
            get_output().warning("API key is empty; sending request without Authorization")
        return headers

    def _send(self, headers: dict[str, str], body: dict[str, Any]) -> httpx.Response:
        """POST *body* once, translating transport failures to NetworkError."""
        assert self._client is not None, "Client not initialised -- use as context manager"

        output = get_output()
        output.debug(f"POST {self._config.base_url}{self._config.endpoint}")
        try:
            response = self._client.post(self._config.endpoint, headers=headers, json=body)
        except httpx.TimeoutException as exc:
            raise NetworkError(
                f"Request to {self._config.host} timed out after {self._config.timeout:g}s"
            ) from exc
        except httpx.TransportError as exc:
            raise NetworkError(
                f"Connection to {self._config.host}:{self._config.port} failed: {exc}"
            ) from exc
        output.debug(f"HTTP {response.status_code} {response.reason_phrase or ''}")
        return response

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise :class:`RequestError` for any non-2xx status."""
        status = response.status_code
        if 200 <= status < 300:
            return

        # Try to extract an error message from the response body.
        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
                if not isinstance(msg, str):
                    msg = json.dumps(msg, ensure_ascii=False)
            else:
                msg = str(detail)
        except (ValueError, RecursionError):
            msg = _preview(response.text)

        prefix = f"HTTP {status}"
        full_msg = f"{prefix}: {msg}" if msg else prefix
        raise RequestError(full_msg, status_code=status, body=response.text)

    def _print_dry_run(self, url: str, headers: dict[str, str], body: dict[str, Any]) -> None:
        """Print request details to stderr instead of sending them."""
        output = get_output()
        output.info(f"[dry-run] POST {url}")
        for key, value in headers.items():
            if key == "Authorization":
                value = "Bearer ****"
            output.info(f"  Header: {key}: {value}")
        output.info(f"  Body (JSON): {json.dumps(body, indent=2, ensure_ascii=False)}")


def _preview(text: str) -> str:
    return text[:_BODY_PREVIEW] if text else ""


def ask(config: AgentConfig, prompt: Prompt, **kwargs: Any) -> Optional[str]:
    """Run one request/response cycle and return the generated text.

    Args:
        config: Connection parameters.
        prompt: The prompt to send.
        **kwargs: Forwarded to :class:`SyncClient` (``dry_run``, ``transport``).

    Returns:
        The generated text, or ``None`` in dry-run mode.
    """
    with SyncClient(config, **kwargs) as client:
        return client.generate(prompt)
