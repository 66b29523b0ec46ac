from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Workers docs RAG assistant (Ollama embeddings + in-memory store)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    add_subparser(sub, "search")
    add_subparser(sub, "prompt")

    # Retrieve context and stream the model's answer
    ask = sub.add_parser("ask")
    ask.add_argument("--q", required=True)
    ask.add_argument("--history-file", default=None, help="JSON file with prior [{role, content}] messages")

    hc = sub.add_parser("health")
    hc.add_argument("--load", action="store_true", help="Build the corpus before reporting the document count")

    return ap


def add_subparser(sub, name):
    """
    Adds a search or prompt subparser to the CLI argument parser.

    Args:
        sub: The subparsers object from argparse.
        name: The name of the subcommand to add.

    Returns:
        argparse.ArgumentParser: The configured subparser.
    """
    result = sub.add_parser(name)
    result.add_argument("--q", required=True)
    result.add_argument("--k", type=int, default=None, help="Max fragments; defaults to $RAG_TOP_K")
    result.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Minimum cosine similarity; defaults to $RAG_SCORE_THRESHOLD",
    )
    return result
