"""aiagent -- Send a prompt to a remote HTTPS generation API and print the text.

This package is a thin command-line client: it loads a connection config and
a prompt (from CLI arguments, JSON strings, or JSON files), performs a single
HTTPS POST against the configured host, and prints the generated text as
``{"text": ...}`` on stdout.

Typical usage::

    aiagent api.example.com "Hello world"            # no API key
    aiagent api.example.com "Hello world" sk-123     # bearer key
    aiagent --config cfg.json --prompt-file p.json   # JSON inputs

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic records for config, prompt and output.
    loader: JSON loading for config and prompt records.
    client: The HTTPS executor and response text extraction.
    config: XDG data directory and API-key source resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
