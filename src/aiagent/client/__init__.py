"""HTTP client module for aiagent.

Provides the synchronous executor that wraps :mod:`httpx` with bearer auth,
dry-run mode, and error mapping, plus the tolerant response-text extraction.

Classes and functions:
    :class:`SyncClient` -- blocking client backed by :class:`httpx.Client`.
    :func:`ask` -- one-shot helper around :class:`SyncClient`.
    :func:`extract_text` -- find the generated text in a response body.
    :func:`serialize_output` -- render the ``{"text": ...}`` output record.

Example::

    from aiagent.client import SyncClient

    with SyncClient(config) as client:
        text = client.generate(prompt)
"""

from aiagent.client.response import extract_text, serialize_output
from aiagent.client.sync_client import SyncClient, ask

__all__ = ["SyncClient", "ask", "extract_text", "serialize_output"]
