from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Dict, Optional


def _parse_dotenv(dotenv_path: Path) -> Dict[str, str]:
    """Parse a simple .env file (KEY=VALUE per line, '#' comments, quotes stripped)."""
    env: Dict[str, str] = {}
    if dotenv_path.exists():
        with contextlib.suppress(OSError):
            for raw in dotenv_path.read_text(encoding="utf-8", errors="ignore").splitlines():
                s = raw.strip()
                if not s or s.startswith("#") or "=" not in s:
                    continue
                k, v = s.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k:
                    env[k] = v
    return env


def env_get(name: str) -> Optional[str]:
    """Get environment value from process env, falling back to .env in CWD."""
    v = os.getenv(name)
    if v is not None and v.strip():
        return v.strip()
    v2 = _parse_dotenv(Path(".env")).get(name)
    return v2.strip() if v2 is not None and v2.strip() else None


def env_str(name: str, default: str) -> str:
    return env_get(name) or default


def env_int(name: str, default: int) -> int:
    try:
        return int(env_str(name, str(default)))
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    try:
        return float(env_str(name, str(default)))
    except ValueError:
        return default


def ollama_url() -> str:
    return env_str("OLLAMA_URL", "http://localhost:11434").rstrip("/")


def embed_model() -> str:
    return env_str("EMBED_MODEL", "nomic-embed-text")


def chat_model() -> str:
    return env_str("CHAT_MODEL", "llama3.1:8b")


def top_k() -> int:
    """Number of fragments the chat boundary retrieves per question."""
    return env_int("RAG_TOP_K", 3)


def score_threshold() -> float:
    """Minimum cosine similarity the chat boundary accepts."""
    return env_float("RAG_SCORE_THRESHOLD", 0.5)


def history_max() -> int:
    """
    Number of prior chat messages forwarded to the completion service.
    Defaults to 10 when RAG_HISTORY_MAX is not set or invalid.
    """
    return max(0, env_int("RAG_HISTORY_MAX", 10))


def seed_corpus_path() -> Optional[Path]:
    raw = env_get("RAG_SEED_CORPUS")
    return Path(raw).expanduser() if raw else None
