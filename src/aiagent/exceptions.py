"""Exception hierarchy for aiagent.

All exceptions inherit from :class:`AiAgentError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`aiagent.exit_codes`.
The top-level error handler in :func:`aiagent.app.main` catches
``AiAgentError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_LOAD_FAILURE`.

Subclass hierarchy::

    AiAgentError (exit 1)
    +-- UsageError       (exit 1)
    +-- ParseError       (exit 1)
    +-- ValidationError  (exit 1)
    +-- IoError          (exit 1)
    +-- ConfigError      (exit 1)
    +-- NetworkError     (exit 2)
    +-- RequestError     (exit 2)
"""

from __future__ import annotations

from typing import Optional

from aiagent.exit_codes import EXIT_LOAD_FAILURE, EXIT_REQUEST_FAILURE


class AiAgentError(Exception):
    """Base exception for all aiagent errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`aiagent.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_LOAD_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(AiAgentError):
    """Raised for invalid CLI arguments (e.g. neither a host nor ``--config``)."""

    exit_code = EXIT_LOAD_FAILURE


class ParseError(AiAgentError):
    """Raised when config or prompt text is not a valid JSON object."""

    exit_code = EXIT_LOAD_FAILURE


class ValidationError(AiAgentError):
    """Raised when a required field is missing or empty, or a field has a bad value.

    Not to be confused with :class:`pydantic.ValidationError`, which the
    loader translates into this type.
    """

    exit_code = EXIT_LOAD_FAILURE


class IoError(AiAgentError):
    """Raised when a config or prompt file cannot be opened or read."""

    exit_code = EXIT_LOAD_FAILURE


class ConfigError(AiAgentError):
    """Raised when an API-key source descriptor cannot be resolved."""

    exit_code = EXIT_LOAD_FAILURE


class NetworkError(AiAgentError):
    """Raised on transport failures: DNS, connection refused, TLS, or timeout."""

    exit_code = EXIT_REQUEST_FAILURE


class RequestError(AiAgentError):
    """Raised on a non-success HTTP status or a response with no usable text.

    Args:
        message: Human-readable error description.
        status_code: HTTP status of the response, when one was received.
        body: Raw response body text, kept for diagnostics.
    """

    exit_code = EXIT_REQUEST_FAILURE

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
