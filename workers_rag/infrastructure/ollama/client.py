from __future__ import annotations

import asyncio
import json
from typing import AsyncIterator, List, Sequence

import requests

from ...domain.errors import CompletionUnavailable, EmbeddingUnavailable
from ...domain.interfaces import CompletionService, EmbeddingService
from ...domain.models import ChatMessage
from ..config import chat_model, embed_model, ollama_url
from ..logging import get_logger
from ..timeouts import http_timeout_seconds

logger = get_logger("workers_rag.ollama")


class OllamaEmbeddingService(EmbeddingService):
    """Embedding adapter for Ollama /api/embeddings."""

    async def embed(self, text: str) -> List[float]:
        return await asyncio.to_thread(self._embed_blocking, text)

    def _embed_blocking(self, text: str) -> List[float]:
        url = f"{ollama_url()}/api/embeddings"
        timeout = http_timeout_seconds()
        try:
            r = requests.post(url, json={"model": embed_model(), "prompt": text}, timeout=timeout)
            r.raise_for_status()
            data = r.json()
            values = [float(x) for x in data["embedding"]]
        except (requests.RequestException, ValueError, KeyError, TypeError) as ex:
            logger.warning("Embedding request failed | url=%s | %s: %s", url, type(ex).__name__, ex)
            raise EmbeddingUnavailable(f"Embedding provider failed: {type(ex).__name__}: {ex}") from ex
        if not values:
            raise EmbeddingUnavailable("Embedding provider returned an empty vector")
        return values


class OllamaCompletionService(CompletionService):
    """Streaming chat adapter for Ollama /api/chat (NDJSON response)."""

    async def complete(self, messages: Sequence[ChatMessage]) -> AsyncIterator[str]:
        response = await asyncio.to_thread(self._open_stream, messages)
        try:
            lines = response.iter_lines()
            while True:
                try:
                    line = await asyncio.to_thread(next, lines, None)
                except requests.RequestException as ex:
                    raise CompletionUnavailable(f"Completion stream interrupted: {type(ex).__name__}: {ex}") from ex
                if line is None:
                    break
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except ValueError as ex:
                    raise CompletionUnavailable(f"Malformed completion stream line: {ex}") from ex
                if not isinstance(data, dict):
                    raise CompletionUnavailable(f"Unexpected completion stream line: {line[:80]!r}")
                if "error" in data:
                    raise CompletionUnavailable(f"Completion provider error: {data['error']}")
                piece = (data.get("message") or {}).get("content") or ""
                if piece:
                    yield piece
                if data.get("done"):
                    break
        finally:
            response.close()

    def _open_stream(self, messages: Sequence[ChatMessage]) -> requests.Response:
        url = f"{ollama_url()}/api/chat"
        body = {
            "model": chat_model(),
            "messages": [m.to_dict() for m in messages],
            "stream": True,
        }
        r = None
        try:
            r = requests.post(url, json=body, stream=True, timeout=http_timeout_seconds())
            r.raise_for_status()
        except requests.RequestException as ex:
            if r is not None:
                r.close()
            logger.warning("Completion request failed | url=%s | %s: %s", url, type(ex).__name__, ex)
            raise CompletionUnavailable(f"Completion provider failed: {type(ex).__name__}: {ex}") from ex
        return r
