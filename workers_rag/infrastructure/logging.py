from __future__ import annotations

import logging
import os

_ROOT = "workers_rag"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``workers_rag`` namespace, configuring the namespace once."""
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        level = os.getenv("RAG_LOG_LEVEL", "INFO").upper()
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(message)s"))
        root.addHandler(handler)
        root.setLevel(getattr(logging, level, logging.INFO))
        root.propagate = False
    if name != _ROOT and not name.startswith(f"{_ROOT}."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
