"""Shared test fixtures for aiagent.

Provides reusable fixtures for isolating the data directory, managing
output state, mocking the generation endpoint, and running the CLI.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from aiagent.client import SyncClient
from aiagent.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager's Rich console caches sys.stderr at creation time.
    When CliRunner or capsys swap the streams and the test finishes, the
    cached reference becomes stale. Resetting forces a fresh manager to be
    created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_DATA_HOME at tmp_path so crash logs never touch real user dirs."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr("aiagent.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_DATA_HOME", str(data_dir))
    return data_dir


# ---------------------------------------------------------------------------
# Mock generation endpoint
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_endpoint(monkeypatch: pytest.MonkeyPatch):
    """Route the CLI's SyncClient through an httpx.MockTransport.

    Call the returned function with a handler; it returns the list that
    captures every request the CLI sends.
    """

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording)
        monkeypatch.setattr(
            "aiagent.app.SyncClient", functools.partial(SyncClient, transport=transport)
        )
        return seen

    return install


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a JSON document under tmp_path and return its path."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def no_signal_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep main() from replacing pytest's SIGINT handler."""
    monkeypatch.setattr("aiagent.app._setup_signal_handlers", lambda: None)
