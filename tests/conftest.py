"""
Pytest configuration and fixtures for workers_rag tests.

Provides in-process fakes for the embedding and completion ports.
"""

import asyncio
import os
from typing import Dict, List, Optional, Sequence

import pytest

from workers_rag.application.services.corpus_initializer import CorpusInitializer
from workers_rag.domain.errors import CompletionUnavailable, EmbeddingUnavailable
from workers_rag.domain.interfaces import CompletionService, EmbeddingService
from workers_rag.domain.models import ChatMessage, Fragment, SeedDocument
from workers_rag.service.api import RagServices


class FakeEmbeddingService(EmbeddingService):
    """Returns canned vectors per text and records every call.

    Each call yields to the event loop once so concurrent callers interleave.
    """

    def __init__(self, vectors: Optional[Dict[str, List[float]]] = None, default: Optional[List[float]] = None,
                 fail: bool = False):
        self.vectors = vectors or {}
        self.default = default if default is not None else [1.0, 0.0]
        self.fail = fail
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        await asyncio.sleep(0)
        if self.fail:
            raise EmbeddingUnavailable("embedding service down")
        return list(self.vectors.get(text, self.default))


class FakeCompletionService(CompletionService):
    """Streams a fixed list of pieces and records the messages it was given."""

    def __init__(self, pieces: Sequence[str] = ("Hello", ", ", "world"), fail: bool = False):
        self.pieces = list(pieces)
        self.fail = fail
        self.received: List[List[ChatMessage]] = []

    async def complete(self, messages):
        self.received.append(list(messages))
        if self.fail:
            raise CompletionUnavailable("completion service down")
        for piece in self.pieces:
            await asyncio.sleep(0)
            yield piece


def make_fragment(fid: str, embedding, content: Optional[str] = None, **meta) -> Fragment:
    return Fragment(id=fid, content=content or f"content of {fid}", embedding=tuple(embedding), metadata=meta)


@pytest.fixture
def seed_documents():
    """Three seed documents whose embeddings the fake provider knows."""
    return [
        SeedDocument(id="doc-0", content="alpha text", metadata={"title": "Alpha"}),
        SeedDocument(id="doc-1", content="beta text", metadata={"title": "Beta"}),
        SeedDocument(id="doc-2", content="gamma text", metadata={"title": "Gamma"}),
    ]


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddingService(
        vectors={
            "alpha text": [1.0, 0.0],
            "beta text": [0.0, 1.0],
            "gamma text": [0.8, 0.6],
            "about alpha": [1.0, 0.0],
            "about beta": [0.0, 1.0],
        }
    )


@pytest.fixture
def fake_completions():
    return FakeCompletionService()


@pytest.fixture
def services(fake_embeddings, fake_completions, seed_documents):
    return RagServices(
        embeddings=fake_embeddings,
        completions=fake_completions,
        corpus=CorpusInitializer(fake_embeddings, seed_documents),
    )


@pytest.fixture
def clean_environment(monkeypatch, tmp_path):
    """Clear RAG-related environment variables and run from an empty directory (no .env)."""
    for var in [
        "OLLAMA_URL",
        "EMBED_MODEL",
        "CHAT_MODEL",
        "RAG_TOP_K",
        "RAG_SCORE_THRESHOLD",
        "RAG_HISTORY_MAX",
        "RAG_SEED_CORPUS",
        "RAG_HTTP_TIMEOUT",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "cli: mark test as CLI command test")


@pytest.fixture(autouse=True)
def reset_process_services():
    """Drop process-wide services after each test."""
    yield
    from workers_rag.service.api import reset_default_services
    reset_default_services()
