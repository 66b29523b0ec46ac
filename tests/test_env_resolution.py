"""
Unit tests for environment configuration resolution.
"""

from pathlib import Path

import pytest

from workers_rag.infrastructure import config
from workers_rag.infrastructure.timeouts import http_timeout_seconds


@pytest.fixture(autouse=True)
def env(clean_environment):
    yield clean_environment


class TestDefaults:
    def test_defaults(self):
        assert config.ollama_url() == "http://localhost:11434"
        assert config.embed_model() == "nomic-embed-text"
        assert config.chat_model() == "llama3.1:8b"
        assert config.top_k() == 3
        assert config.score_threshold() == 0.5
        assert config.history_max() == 10
        assert config.seed_corpus_path() is None
        assert http_timeout_seconds() == 15.0


class TestProcessEnvironment:
    def test_process_env_values(self, monkeypatch):
        monkeypatch.setenv("OLLAMA_URL", "http://gpu-box:11434/")
        monkeypatch.setenv("RAG_TOP_K", "7")
        monkeypatch.setenv("RAG_SCORE_THRESHOLD", "0.25")
        monkeypatch.setenv("RAG_HTTP_TIMEOUT", "2.5")

        assert config.ollama_url() == "http://gpu-box:11434"
        assert config.top_k() == 7
        assert config.score_threshold() == 0.25
        assert http_timeout_seconds() == 2.5

    @pytest.mark.parametrize("var,getter,default", [
        ("RAG_TOP_K", config.top_k, 3),
        ("RAG_SCORE_THRESHOLD", config.score_threshold, 0.5),
        ("RAG_HISTORY_MAX", config.history_max, 10),
    ])
    def test_invalid_numbers_fall_back(self, monkeypatch, var, getter, default):
        monkeypatch.setenv(var, "not-a-number")
        assert getter() == default

    def test_non_positive_timeout_falls_back(self, monkeypatch):
        monkeypatch.setenv("RAG_HTTP_TIMEOUT", "0")
        assert http_timeout_seconds() == 15.0

    def test_blank_value_uses_default(self, monkeypatch):
        monkeypatch.setenv("EMBED_MODEL", "   ")
        assert config.embed_model() == "nomic-embed-text"

    def test_seed_corpus_path_expands_user(self, monkeypatch):
        monkeypatch.setenv("RAG_SEED_CORPUS", "~/corpus.json")
        assert config.seed_corpus_path() == Path("~/corpus.json").expanduser()


class TestDotenvFallback:
    def test_dotenv_used_when_process_env_missing(self, clean_environment):
        (clean_environment / ".env").write_text(
            "# comment\nCHAT_MODEL='mistral:7b'\nRAG_TOP_K=4\nmalformed line\n",
            encoding="utf-8",
        )

        assert config.chat_model() == "mistral:7b"
        assert config.top_k() == 4

    def test_process_env_wins_over_dotenv(self, clean_environment, monkeypatch):
        (clean_environment / ".env").write_text('CHAT_MODEL="from-file"\n', encoding="utf-8")
        monkeypatch.setenv("CHAT_MODEL", "from-env")

        assert config.chat_model() == "from-env"
