"""Typer application and CLI entry point for aiagent.

The CLI contract is ``aiagent <host> <prompt> [api_key]``: load a config
and a prompt, perform one HTTPS request, print ``{"text": ...}``. Options
let the config and prompt come from JSON files instead, and override
single connection fields for one run.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers, invokes the Typer app in
non-standalone mode so that every failure goes through one error handler,
and maps errors to exit codes (see :mod:`aiagent.exit_codes`). Unhandled
exceptions are written to a crash log under the data directory.

See Also:
    :mod:`aiagent.loader`: Config and prompt loading.
    :mod:`aiagent.client`: The HTTPS executor.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from aiagent import __version__
from aiagent.client import SyncClient, serialize_output
from aiagent.config import get_data_dir, resolve_credential
from aiagent.exceptions import AiAgentError, UsageError
from aiagent.exit_codes import EXIT_INTERRUPTED, EXIT_LOAD_FAILURE, EXIT_SUCCESS
from aiagent.loader import (
    JsonOrigin,
    config_from_args,
    load_json,
    load_prompt,
    prompt_from_args,
)
from aiagent.models import AgentConfig, Prompt
from aiagent.output import OutputManager, debug, error, set_output

USAGE = "aiagent <host> <prompt> [api_key]"

app = typer.Typer(
    name="aiagent",
    help="Send a prompt to a remote generation API and print the text as JSON.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"aiagent {__version__}")
        raise typer.Exit()


@app.command()
def run(
    host: Optional[str] = typer.Argument(
        None, help="Host of the generation API, e.g. api.example.com.", show_default=False
    ),
    prompt: Optional[str] = typer.Argument(
        None, help="Prompt text to send.", show_default=False
    ),
    api_key: Optional[str] = typer.Argument(
        None, help="Bearer API key (optional).", show_default=False
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Read the config JSON from this file."
    ),
    prompt_file: Optional[str] = typer.Option(
        None, "--prompt-file", help="Read the prompt JSON from this file."
    ),
    port: Optional[str] = typer.Option(
        None, "--port", help="Override the port (default 443)."
    ),
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", help="Override the request path (default /generate)."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds (default 30)."
    ),
    insecure: bool = typer.Option(
        False, "--insecure", help="Do not verify TLS certificates."
    ),
    api_key_source: Optional[str] = typer.Option(
        None, "--api-key-source", help="Read the key from env:VAR or file:PATH."
    ),
    plain: bool = typer.Option(
        False, "--plain", help="Print only the text instead of JSON."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Show the request without sending it."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Send PROMPT to HOST and print the generated text.

    Errors are raised as :class:`~aiagent.exceptions.AiAgentError` and
    turned into exit codes by :func:`main`.
    """
    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)

    agent_config = _resolve_config(
        host,
        api_key,
        config_file=config_file,
        api_key_source=api_key_source,
        port=port,
        endpoint=endpoint,
        timeout=timeout,
        verify_ssl=False if insecure else None,
    )
    agent_prompt = _resolve_prompt(prompt, prompt_file)
    debug(f"Target: {agent_config.base_url}{agent_config.endpoint}")

    with SyncClient(agent_config, dry_run=dry_run) as client:
        text = client.generate(agent_prompt)

    if text is None:
        return
    output.print_data(text if plain else serialize_output(text))


def _resolve_config(
    host: Optional[str],
    api_key: Optional[str],
    config_file: Optional[str] = None,
    api_key_source: Optional[str] = None,
    **overrides: Any,
) -> AgentConfig:
    """Merge the positional arguments, options and config file into one config."""
    if host is None and config_file is None:
        raise UsageError(f"Missing host. Usage: {USAGE}")

    base = load_json(config_file, JsonOrigin.FILE) if config_file else None
    if api_key is None and api_key_source:
        api_key = resolve_credential(api_key_source)
    return config_from_args(host, api_key, base=base, **overrides)


def _resolve_prompt(prompt: Optional[str], prompt_file: Optional[str]) -> Prompt:
    """Take the prompt from the command line, falling back to ``--prompt-file``."""
    if prompt is not None:
        return prompt_from_args(prompt)
    if prompt_file is not None:
        return load_prompt(prompt_file)
    raise UsageError(f"Missing prompt. Usage: {USAGE}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point invoked by the ``aiagent`` console script.

    Exit codes: ``0`` success, ``1`` usage or load error, ``2`` request
    failure, ``130`` interrupted.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.

    Raises:
        SystemExit: Always raised.
    """
    _setup_signal_handlers()
    try:
        rv = app(args=argv, prog_name="aiagent", standalone_mode=False)
    except SystemExit:
        raise
    except (KeyboardInterrupt, typer.Abort):
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except typer.TyperException as exc:
        error(exc.format_message())
        sys.exit(EXIT_LOAD_FAILURE)
    except AiAgentError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_LOAD_FAILURE)
    sys.exit(rv if isinstance(rv, int) else EXIT_SUCCESS)


if __name__ == "__main__":
    main()
