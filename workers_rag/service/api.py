"""Request-handling boundary over the retrieval core.

Every function returns JSON-ready data. Contract violations (a blank or
non-string query, malformed history) come back as ``{"status": "error"}``
payloads, except for :func:`rag_chat`, which raises ``InvalidInput`` before
any text is streamed. Provider failures always propagate.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Sequence

from ..application.dto import ChatRequest, SearchHit, SearchRequest
from ..application.services.corpus_initializer import CorpusInitializer
from ..application.services.prompt_builder import build_prompt
from ..application.use_cases.answer_query import AnswerQueryUseCase
from ..application.use_cases.search_fragments import SearchFragmentsUseCase
from ..domain.errors import ContractError, InvalidInput
from ..domain.interfaces import CompletionService, EmbeddingService
from ..domain.models import ChatMessage
from ..infrastructure.config import history_max, score_threshold, top_k
from ..infrastructure.logging import get_logger
from ..infrastructure.ollama.client import OllamaCompletionService, OllamaEmbeddingService
from ..ingestion.corpus_loader import load_seed_corpus

logger = get_logger("workers_rag.service.api")

_ROLES = {"system", "user", "assistant"}


@dataclass
class RagServices:
    embeddings: EmbeddingService
    completions: CompletionService
    corpus: CorpusInitializer


_default: Optional[RagServices] = None


def default_services() -> RagServices:
    """Process-wide services, created on first use from env configuration."""
    global _default
    if _default is None:
        embeddings = OllamaEmbeddingService()
        _default = RagServices(
            embeddings=embeddings,
            completions=OllamaCompletionService(),
            corpus=CorpusInitializer(embeddings, load_seed_corpus()),
        )
    return _default


def reset_default_services() -> None:
    """Drop the process-wide services and their built store."""
    global _default
    if _default is not None:
        _default.corpus.reset()
    _default = None


def parse_history(history: Optional[Sequence[Mapping[str, Any]]]) -> List[ChatMessage]:
    out: List[ChatMessage] = []
    for i, item in enumerate(history or []):
        role = item.get("role") if isinstance(item, Mapping) else None
        content = item.get("content") if isinstance(item, Mapping) else None
        if role not in _ROLES or not isinstance(content, str):
            raise InvalidInput(f"History entry #{i} must have a role in {sorted(_ROLES)} and string content")
        out.append(ChatMessage(role=role, content=content))
    return out


def _error(ex: ContractError) -> Dict[str, Any]:
    return {"status": "error", "error": str(ex)}


async def rag_search(
    q: Any,
    k: Optional[int] = None,
    threshold: Optional[float] = None,
    services: Optional[RagServices] = None,
) -> Dict[str, Any]:
    svc = services or default_services()
    req = SearchRequest(
        query=q,
        k=top_k() if k is None else k,
        threshold=score_threshold() if threshold is None else threshold,
    )
    try:
        ranked = await SearchFragmentsUseCase(svc.embeddings, svc.corpus).execute(req)
    except ContractError as ex:
        return _error(ex)
    hits = [asdict(SearchHit.from_ranked(r)) for r in ranked]
    return {"status": "ok", "query": q, "count": len(hits), "result": hits}


async def rag_prompt(
    q: Any,
    k: Optional[int] = None,
    threshold: Optional[float] = None,
    services: Optional[RagServices] = None,
) -> Dict[str, Any]:
    svc = services or default_services()
    req = SearchRequest(
        query=q,
        k=top_k() if k is None else k,
        threshold=score_threshold() if threshold is None else threshold,
    )
    try:
        ranked = await SearchFragmentsUseCase(svc.embeddings, svc.corpus).execute(req)
    except ContractError as ex:
        return _error(ex)
    return {"status": "ok", "query": q, "prompt": build_prompt(q, ranked)}


async def rag_chat(
    message: Any,
    history: Optional[Sequence[Mapping[str, Any]]] = None,
    services: Optional[RagServices] = None,
) -> AsyncIterator[str]:
    """Retrieve context for ``message`` and return the completion stream.

    Retrieval and validation finish before this coroutine returns, so a bad
    request fails here rather than part-way through the stream.

    Raises:
        InvalidInput: Blank/non-string message or malformed history.
        EmbeddingUnavailable: The embedding provider failed.
    """
    svc = services or default_services()
    use_case = AnswerQueryUseCase(
        SearchFragmentsUseCase(svc.embeddings, svc.corpus),
        svc.completions,
        k=top_k(),
        threshold=score_threshold(),
        history_max=history_max(),
    )
    messages = await use_case.prepare(ChatRequest(message=message, history=parse_history(history)))
    return svc.completions.complete(messages)


def rag_health(services: Optional[RagServices] = None) -> Dict[str, Any]:
    """Report loaded document count without triggering corpus initialization."""
    svc = services or _default
    return {"status": "healthy", "documentsLoaded": svc.corpus.document_count if svc is not None else 0}
