from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..domain.errors import ContractError, InvalidInput
from ..infrastructure.logging import get_logger
from ..service.api import RagServices, default_services, rag_chat, rag_health, rag_prompt, rag_search
from .parsers import build_parser

logger = get_logger("workers_rag.cli")


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _load_history(path: Optional[str]) -> List[Any]:
    """Read a JSON array of chat messages; a missing path means no history."""
    if not path:
        return []
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as ex:
        raise InvalidInput(f"Cannot read history file {path}: {ex}") from ex
    if not isinstance(data, list):
        raise InvalidInput(f"History file {path} must contain a JSON array")
    return data


async def ask(ns, services: RagServices) -> int:
    stream = await rag_chat(ns.q, _load_history(ns.history_file), services=services)
    async for piece in stream:
        sys.stdout.write(piece)
        sys.stdout.flush()
    sys.stdout.write("\n")
    return 0


async def dispatch_commands(ns, services: RagServices) -> int:
    """
    Dispatches CLI commands to the service API.

    Commands:
    - search: ranked fragments with scores as JSON
    - prompt: the instruction string that would be sent to the model
    - ask: stream the model's answer to stdout
    - health: loaded document count (optionally building the corpus first)
    """
    if ns.cmd in ("search", "prompt"):
        handler = rag_search if ns.cmd == "search" else rag_prompt
        payload = await handler(ns.q, ns.k, ns.threshold, services=services)
        _print_json(payload)
        return 0 if payload.get("status") == "ok" else 2

    if ns.cmd == "ask":
        return await ask(ns, services)

    if ns.cmd == "health":
        if ns.load:
            await services.corpus.get_store()
        _print_json(rag_health(services))
        return 0

    _print_json({"status": "error", "error": f"Unknown cmd: {ns.cmd}"})
    return 2


def run(argv: Optional[Sequence[str]] = None, services: Optional[RagServices] = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))
    try:
        svc = services or default_services()
        return asyncio.run(dispatch_commands(ns, svc))
    except ContractError as ex:
        _print_json({"status": "error", "error": str(ex)})
        return 2
    except Exception as ex:  # keep CLI concise and user-friendly
        logger.debug("Command failed", exc_info=True)
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 3


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
