from __future__ import annotations

from typing import AsyncIterator, List

from ..dto import ChatRequest, SearchRequest
from ..services.prompt_builder import build_chat_messages, build_prompt
from .search_fragments import SearchFragmentsUseCase
from ...domain.interfaces import CompletionService
from ...domain.models import ChatMessage
from ...infrastructure.logging import get_logger

logger = get_logger("workers_rag.answer")


class AnswerQueryUseCase:
    """Use-case: retrieve context for a chat message and stream the model's reply."""

    def __init__(
        self,
        search: SearchFragmentsUseCase,
        completions: CompletionService,
        k: int = 3,
        threshold: float = 0.5,
        history_max: int = 10,
    ) -> None:
        self._search = search
        self._completions = completions
        self._k = k
        self._threshold = threshold
        self._history_max = history_max

    async def prepare(self, req: ChatRequest) -> List[ChatMessage]:
        """Run retrieval and return the message list that would be sent to the model."""
        k = self._k if req.k is None else req.k
        threshold = self._threshold if req.threshold is None else req.threshold
        ranked = await self._search.execute(SearchRequest(query=req.message, k=k, threshold=threshold))
        logger.info("Found %d relevant chunks for query: %r", len(ranked), req.message)
        prompt = build_prompt(req.message, ranked)
        return build_chat_messages(prompt, req.message, req.history, self._history_max)

    async def execute(self, req: ChatRequest) -> AsyncIterator[str]:
        messages = await self.prepare(req)
        async for piece in self._completions.complete(messages):
            yield piece


async def collect(stream: AsyncIterator[str]) -> str:
    """Concatenate a reply stream into the full answer text."""
    parts: List[str] = []
    async for piece in stream:
        parts.append(piece)
    return "".join(parts)
