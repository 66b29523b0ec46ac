from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from ..domain.errors import ContractError
from ..domain.models import SeedDocument
from ..infrastructure.config import seed_corpus_path
from .sample_docs import RAW_DOCS


def documents_from_raw(raw_docs: Sequence[Mapping[str, object]], id_prefix: str = "cf-doc") -> List[SeedDocument]:
    """Turn ``{title, url, type, content}`` records into seed documents with positional ids."""
    items: List[SeedDocument] = []
    for index, doc in enumerate(raw_docs):
        content = doc.get("content")
        if not isinstance(content, str) or not content.strip():
            raise ContractError(f"Seed document #{index} has no content")
        meta: Dict[str, object] = {"title": str(doc.get("title") or "")}
        if doc.get("url"):
            meta["url"] = str(doc["url"])
        if doc.get("type"):
            meta["section"] = str(doc["type"])
        items.append(SeedDocument(id=f"{id_prefix}-{index}", content=content, metadata=meta))
    return items


def load_seed_corpus(path: Optional[Path] = None) -> List[SeedDocument]:
    """Load the seed corpus from a JSON array file, else from RAG_SEED_CORPUS, else the built-in docs."""
    source = path or seed_corpus_path()
    if source is None:
        return documents_from_raw(RAW_DOCS)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, ValueError) as ex:
        raise ContractError(f"Cannot read seed corpus {source}: {ex}") from ex
    if not isinstance(data, list):
        raise ContractError(f"Seed corpus {source} must contain a JSON array of documents")
    return documents_from_raw(data)
