from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..domain.models import ChatMessage, RankedFragment


@dataclass(frozen=True)
class SearchRequest:
    query: str
    k: int = 5
    threshold: float = 0.7


@dataclass(frozen=True)
class ChatRequest:
    message: str
    history: List[ChatMessage] = field(default_factory=list)
    k: Optional[int] = None
    threshold: Optional[float] = None


@dataclass(frozen=True)
class SearchHit:
    """JSON-ready view of a ranked fragment."""
    id: str
    content: str
    metadata: Dict[str, object]
    score: float

    @classmethod
    def from_ranked(cls, ranked: RankedFragment) -> "SearchHit":
        frag = ranked.fragment
        return cls(id=frag.id, content=frag.content, metadata=dict(frag.metadata), score=ranked.score)
