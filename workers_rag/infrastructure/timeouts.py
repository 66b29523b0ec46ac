from __future__ import annotations

from .config import env_float

_DEFAULT_TIMEOUT = 15.0


def http_timeout_seconds() -> float:
    """Per-request timeout handed to ``requests`` for provider calls."""
    value = env_float("RAG_HTTP_TIMEOUT", _DEFAULT_TIMEOUT)
    return value if value > 0 else _DEFAULT_TIMEOUT
