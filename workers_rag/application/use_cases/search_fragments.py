from __future__ import annotations

from typing import List

from ..dto import SearchRequest
from ..services.corpus_initializer import CorpusInitializer
from ...domain.errors import InvalidInput
from ...domain.interfaces import EmbeddingService
from ...domain.models import RankedFragment


def validate_query(query: object) -> str:
    """Reject anything but a non-blank string before it reaches the store."""
    if not isinstance(query, str):
        raise InvalidInput(f"Query must be a string, got {type(query).__name__}")
    if not query.strip():
        raise InvalidInput("Query must not be empty")
    return query


class SearchFragmentsUseCase:
    """Use-case: validate the query, wait for the corpus, rank fragments."""

    def __init__(self, embeddings: EmbeddingService, corpus: CorpusInitializer) -> None:
        self._emb = embeddings
        self._corpus = corpus

    async def execute(self, req: SearchRequest) -> List[RankedFragment]:
        query = validate_query(req.query)
        store = await self._corpus.get_store()
        return await store.similarity_search_with_scores(query, self._emb, k=req.k, threshold=req.threshold)
