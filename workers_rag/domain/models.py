from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class SeedDocument:
    """A corpus entry awaiting its embedding.

    Fields:
        id: Opaque identifier assigned by the corpus loader (e.g. ``cf-doc-0``).
        content: Plain text to embed.
        metadata: Descriptive fields (title, url, section); never ranked on.
    """
    id: str
    content: str
    metadata: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Fragment:
    """An embedded document chunk held by the vector store.

    Fields:
        id: Opaque identifier, unique by convention only.
        content: Plain text, non-empty.
        embedding: Fixed-length vector; length equals the store dimension.
        metadata: Passive descriptive fields carried through to callers.
    """
    id: str
    content: str
    embedding: Tuple[float, ...]
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def dim(self) -> int:
        return len(self.embedding)


@dataclass(frozen=True)
class RankedFragment:
    """Search match produced fresh per query.

    Fields:
        fragment: The matched fragment.
        score: Cosine similarity in [-1, 1]; higher is closer.
    """
    fragment: Fragment
    score: float

    @property
    def content(self) -> str:
        return self.fragment.content


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}
