"""Numeric process exit codes.

Each constant maps to an error category and is referenced by the
corresponding :class:`~aiagent.exceptions.AiAgentError` subclass.
Shell wrappers can inspect the exit code to tell a bad invocation apart
from a failed request without parsing stderr.

Example::

    $ aiagent api.example.com "Hello"
    $ echo $?
    2   # EXIT_REQUEST_FAILURE -- the server answered HTTP 500
"""

EXIT_SUCCESS = 0
"""The prompt was answered and the text printed."""

EXIT_LOAD_FAILURE = 1
"""Invalid arguments, or the config/prompt could not be loaded or validated."""

EXIT_REQUEST_FAILURE = 2
"""The request failed: network error, timeout, non-2xx status, or unusable body."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
