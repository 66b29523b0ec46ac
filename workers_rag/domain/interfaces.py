from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Sequence

from .models import ChatMessage


class EmbeddingService(ABC):
    """Port for the embedding provider (e.g., Ollama)."""

    @abstractmethod
    async def embed(self, text: str) -> List[float]:
        """Embed a single text into a vector.

        Raises:
            EmbeddingUnavailable: Provider/network failures and timeouts.
        """
        raise NotImplementedError


class CompletionService(ABC):
    """Port for the text-completion provider (e.g., Ollama chat)."""

    @abstractmethod
    def complete(self, messages: Sequence[ChatMessage]) -> AsyncIterator[str]:
        """Stream the assistant reply as a finite, non-restartable sequence of text pieces.

        Raises:
            CompletionUnavailable: Provider/network failures and timeouts.
        """
        raise NotImplementedError
