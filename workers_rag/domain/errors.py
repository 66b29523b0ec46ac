from __future__ import annotations

from typing import Optional


class ContractError(ValueError):
    """Raised when a caller violates a documented contract."""


class InvalidInput(ContractError):
    """Raised when a query is not a non-empty string."""


class DimensionMismatch(ContractError):
    """Raised when an embedding length disagrees with the store dimension."""

    def __init__(self, expected: int, actual: int, fragment_id: Optional[str] = None) -> None:
        self.expected = expected
        self.actual = actual
        self.fragment_id = fragment_id
        where = f"fragment '{fragment_id}'" if fragment_id is not None else "query embedding"
        super().__init__(f"Embedding dimension mismatch for {where}: got {actual}, expected {expected}")


class EmbeddingUnavailable(RuntimeError):
    """Raised when the embedding provider fails or times out."""


class CompletionUnavailable(RuntimeError):
    """Raised when the completion provider fails or times out."""
