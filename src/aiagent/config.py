"""Process-level configuration helpers: XDG paths and API-key sources.

aiagent keeps no persistent settings -- every invocation is driven by its
CLI arguments and optional config JSON (see :mod:`aiagent.loader`). This
module covers the two things that still reach outside the invocation:

* **Data directory** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.aiagent/`` on macOS and Windows. Only crash logs are written there.
  See :func:`get_data_dir`.
* **Credential resolution** -- :func:`resolve_credential` reads an API key
  from an environment variable or a file when the user passes
  ``--api-key-source`` instead of putting the key on the command line.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

from aiagent.exceptions import ConfigError

_APP_NAME = "aiagent"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/aiagent/`` (default ``~/.local/share/aiagent/``).
    On macOS/Windows: ``~/.aiagent/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve an API key from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    raise ConfigError(f"Unknown credential source format: {source}")
