"""Prompt assembly for the completion service.

Purpose:
    Render a query and its ranked context fragments into the single
    instruction string sent as the system message, and wrap it together
    with the conversation history into the chat message list.

External Dependencies:
    None. Both functions are pure, in-memory transformations.

Fallback Semantics:
    None. An empty fragment list renders an empty context block; the
    surrounding instructions are always present.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from ...domain.models import ChatMessage, Fragment, RankedFragment

PREAMBLE = (
    "You are a helpful assistant for Cloudflare Workers documentation. "
    "Use the following context to answer the user's question. "
    "If the context doesn't contain relevant information, say so politely and provide general guidance."
)

CLOSING = (
    "Please provide a helpful and accurate response based on the context above. "
    "Include references to specific sections when relevant."
)


def build_prompt(query: str, fragments: Sequence[Union[Fragment, RankedFragment]]) -> str:
    """Render ``query`` and ``fragments`` into one instruction string.

    Args:
        query: The user's question, inserted verbatim.
        fragments: Context in similarity order; fragment *i* is rendered as
            ``[i] <content>`` (1-based), separated by a blank line.

    Returns:
        str: Preamble, context block, question and closing instruction.
    """
    context = "\n\n".join(f"[{i}] {frag.content}" for i, frag in enumerate(fragments, start=1))
    return f"{PREAMBLE}\n\nContext:\n{context}\n\nQuestion: {query}\n\n{CLOSING}"


def build_chat_messages(
    prompt: str,
    query: str,
    history: Optional[Sequence[ChatMessage]] = None,
    history_max: int = 10,
) -> List[ChatMessage]:
    """System prompt, then the most recent ``history_max`` history messages, then the user turn."""
    recent = list(history or [])
    recent = recent[-history_max:] if history_max > 0 else []
    return [ChatMessage(role="system", content=prompt), *recent, ChatMessage(role="user", content=query)]
