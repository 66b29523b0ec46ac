"""In-process vector store with exhaustive cosine ranking.

Fragments are kept in insertion order. Every query scores the whole
collection, filters by a minimum score and returns the best ``k`` using a
stable sort, so equal scores keep their insertion order.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from ...domain.errors import DimensionMismatch, EmbeddingUnavailable, InvalidInput
from ...domain.interfaces import EmbeddingService
from ...domain.models import Fragment, RankedFragment
from ..logging import get_logger

logger = get_logger("workers_rag.store")

DEFAULT_K = 5
DEFAULT_THRESHOLD = 0.7


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Compute cosine similarity between two equal-length vectors.

    A zero-magnitude vector has no direction; it scores 0.0 against anything
    so that ranking never sees NaN.

    Returns:
        Cosine similarity clamped to [-1, 1].
    """
    if len(vec_a) != len(vec_b):
        raise DimensionMismatch(expected=len(vec_a), actual=len(vec_b))

    dot = math.fsum(a * b for a, b in zip(vec_a, vec_b))
    norm_a = math.sqrt(math.fsum(a * a for a in vec_a))
    norm_b = math.sqrt(math.fsum(b * b for b in vec_b))
    if norm_a == 0 or norm_b == 0:
        return 0.0

    # rounding can push |cos| a hair past 1
    return max(-1.0, min(1.0, dot / (norm_a * norm_b)))


class InMemoryVectorStore:
    """Append-only fragment collection answering top-k similarity queries."""

    def __init__(self, fragments: Optional[Iterable[Fragment]] = None) -> None:
        self._fragments: List[Fragment] = []
        self._dim: Optional[int] = None
        if fragments is not None:
            self.add_documents(fragments)

    @property
    def dimension(self) -> Optional[int]:
        """Embedding dimension fixed by the first insert; ``None`` while empty."""
        return self._dim

    def add_document(self, fragment: Fragment) -> None:
        self.add_documents([fragment])

    def add_documents(self, fragments: Iterable[Fragment]) -> None:
        """Append fragments after validating the whole batch.

        No deduplication by id is performed.

        Raises:
            InvalidInput: A fragment has empty content.
            DimensionMismatch: A fragment's embedding is empty or its length
                disagrees with the store dimension. Nothing from the batch is
                appended in that case.
        """
        batch = list(fragments)
        dim = self._dim
        for frag in batch:
            if not frag.content:
                raise InvalidInput(f"Fragment '{frag.id}' has empty content")
            if dim is None:
                if frag.dim == 0:
                    raise DimensionMismatch(expected=1, actual=0, fragment_id=frag.id)
                dim = frag.dim
            elif frag.dim != dim:
                raise DimensionMismatch(expected=dim, actual=frag.dim, fragment_id=frag.id)
        self._dim = dim
        self._fragments.extend(batch)

    def rank(
        self,
        query_vector: Sequence[float],
        k: int = DEFAULT_K,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> List[RankedFragment]:
        """Score a query vector against every stored fragment.

        Returns:
            At most ``k`` matches scoring at least ``threshold``, best first.
        """
        snapshot: Tuple[Fragment, ...] = tuple(self._fragments)
        if not snapshot or k <= 0:
            return []
        if len(query_vector) != self._dim:
            raise DimensionMismatch(expected=self._dim or 0, actual=len(query_vector))

        scored = [RankedFragment(fragment=f, score=cosine_similarity(query_vector, f.embedding)) for f in snapshot]
        kept = [r for r in scored if r.score >= threshold]
        # sorted() is stable: ties stay in insertion order
        kept = sorted(kept, key=lambda r: r.score, reverse=True)
        return kept[:k]

    async def similarity_search_with_scores(
        self,
        query: str,
        embeddings: EmbeddingService,
        k: int = DEFAULT_K,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> List[RankedFragment]:
        if not self._fragments:
            return []
        try:
            query_vector = await embeddings.embed(query)
        except EmbeddingUnavailable:
            raise
        except Exception as ex:
            raise EmbeddingUnavailable(
                f"Embedding provider failed for query {query[:80]!r}: {type(ex).__name__}: {ex}"
            ) from ex
        results = self.rank(query_vector, k=k, threshold=threshold)
        logger.debug("Search | k=%d | threshold=%.3f | hits=%d", k, threshold, len(results))
        return results

    async def similarity_search(
        self,
        query: str,
        embeddings: EmbeddingService,
        k: int = DEFAULT_K,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> List[Fragment]:
        """Embed ``query`` and return the closest fragments, best first.

        An empty store returns ``[]`` without calling the embedding provider.

        Raises:
            EmbeddingUnavailable: The provider failed or timed out.
            DimensionMismatch: The query vector length differs from the store's.
        """
        ranked = await self.similarity_search_with_scores(query, embeddings, k=k, threshold=threshold)
        return [r.fragment for r in ranked]

    def get_document_count(self) -> int:
        return len(self._fragments)

    def clear(self) -> None:
        self._fragments = []
        self._dim = None
