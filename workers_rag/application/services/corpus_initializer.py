from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

from ...domain.errors import EmbeddingUnavailable
from ...domain.interfaces import EmbeddingService
from ...domain.models import Fragment, SeedDocument
from ...infrastructure.logging import get_logger
from ...infrastructure.memory.vector_store import InMemoryVectorStore

logger = get_logger("workers_rag.corpus")


class CorpusInitializer:
    """Builds the process-wide vector store from a seed corpus exactly once.

    The first caller of :meth:`get_store` starts the build as a task and
    records it; callers arriving while it runs await that same task, so each
    seed document is embedded once no matter how many requests race on first
    use. A failed build is forgotten so the next caller starts over.
    """

    def __init__(self, embeddings: EmbeddingService, seed_documents: Sequence[SeedDocument]) -> None:
        self._emb = embeddings
        self._seed: List[SeedDocument] = list(seed_documents)
        self._store: Optional[InMemoryVectorStore] = None
        self._inflight: Optional["asyncio.Task[InMemoryVectorStore]"] = None

    @property
    def is_ready(self) -> bool:
        return self._store is not None

    @property
    def document_count(self) -> int:
        """Fragments loaded so far; 0 until the build has completed."""
        return self._store.get_document_count() if self._store is not None else 0

    async def get_store(self) -> InMemoryVectorStore:
        if self._store is not None:
            return self._store
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._build())
        # shield: a cancelled waiter must not cancel the build others share
        return await asyncio.shield(self._inflight)

    async def _build(self) -> InMemoryVectorStore:
        try:
            logger.info("Initializing vector store | documents=%d", len(self._seed))
            fragments: List[Fragment] = []
            for doc in self._seed:
                logger.info("Generating embedding | id=%s | title=%s", doc.id, doc.metadata.get("title", ""))
                try:
                    vector = await self._emb.embed(doc.content)
                except EmbeddingUnavailable:
                    raise
                except Exception as ex:
                    raise EmbeddingUnavailable(
                        f"Embedding provider failed for fragment '{doc.id}': {type(ex).__name__}: {ex}"
                    ) from ex
                fragments.append(
                    Fragment(id=doc.id, content=doc.content, embedding=tuple(vector), metadata=dict(doc.metadata))
                )
            store = InMemoryVectorStore()
            store.add_documents(fragments)
            self._store = store
            logger.info("Vector store initialized | documents=%d", store.get_document_count())
            return store
        except Exception as ex:
            logger.error("Vector store initialization failed | %s: %s", type(ex).__name__, ex)
            raise
        finally:
            if self._inflight is asyncio.current_task():
                self._inflight = None

    def reset(self) -> None:
        """Forget the built store (and any pending build) so the next call rebuilds."""
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None
        self._store = None
