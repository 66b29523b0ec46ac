"""
Unit tests for the Ollama embedding and completion adapters.
"""

import asyncio
from unittest.mock import Mock, patch

import pytest
import requests

from workers_rag.application.use_cases.answer_query import collect
from workers_rag.domain.errors import CompletionUnavailable, EmbeddingUnavailable
from workers_rag.domain.models import ChatMessage
from workers_rag.infrastructure.ollama.client import OllamaCompletionService, OllamaEmbeddingService

POST = "workers_rag.infrastructure.ollama.client.requests.post"


@pytest.fixture(autouse=True)
def env(clean_environment, monkeypatch):
    monkeypatch.setenv("OLLAMA_URL", "http://ollama.test:11434")
    monkeypatch.setenv("RAG_HTTP_TIMEOUT", "3")
    yield clean_environment


def _json_response(payload):
    resp = Mock()
    resp.json.return_value = payload
    return resp


def _stream_response(lines):
    resp = Mock()
    resp.iter_lines.return_value = iter(lines)
    return resp


class TestOllamaEmbeddingService:
    def test_posts_model_and_prompt(self):
        with patch(POST, return_value=_json_response({"embedding": [1, "2.5", 0]})) as mock_post:
            vec = asyncio.run(OllamaEmbeddingService().embed("hello"))

        assert vec == [1.0, 2.5, 0.0]
        mock_post.assert_called_once_with(
            "http://ollama.test:11434/api/embeddings",
            json={"model": "nomic-embed-text", "prompt": "hello"},
            timeout=3.0,
        )

    @pytest.mark.parametrize("error", [requests.ConnectionError("refused"), requests.Timeout("slow")])
    def test_transport_errors_become_embedding_unavailable(self, error):
        with patch(POST, side_effect=error):
            with pytest.raises(EmbeddingUnavailable) as exc:
                asyncio.run(OllamaEmbeddingService().embed("hello"))
        assert exc.value.__cause__ is error

    def test_http_error_status(self):
        resp = _json_response({})
        resp.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        with patch(POST, return_value=resp):
            with pytest.raises(EmbeddingUnavailable):
                asyncio.run(OllamaEmbeddingService().embed("hello"))

    @pytest.mark.parametrize("payload", [{}, {"embedding": []}, {"embedding": None}])
    def test_malformed_payload(self, payload):
        with patch(POST, return_value=_json_response(payload)):
            with pytest.raises(EmbeddingUnavailable):
                asyncio.run(OllamaEmbeddingService().embed("hello"))


class TestOllamaCompletionService:
    def test_streams_message_pieces(self):
        resp = _stream_response([
            b'{"message":{"role":"assistant","content":"Hel"},"done":false}',
            b"",
            b'{"message":{"role":"assistant","content":"lo"},"done":false}',
            b'{"message":{"role":"assistant","content":""},"done":true}',
            b'{"message":{"role":"assistant","content":"ignored"},"done":false}',
        ])
        messages = [ChatMessage("system", "PROMPT"), ChatMessage("user", "hi")]

        with patch(POST, return_value=resp) as mock_post:
            text = asyncio.run(collect(OllamaCompletionService().complete(messages)))

        assert text == "Hello"
        resp.close.assert_called_once_with()
        _, kwargs = mock_post.call_args
        assert mock_post.call_args[0][0] == "http://ollama.test:11434/api/chat"
        assert kwargs["json"] == {
            "model": "llama3.1:8b",
            "messages": [{"role": "system", "content": "PROMPT"}, {"role": "user", "content": "hi"}],
            "stream": True,
        }
        assert kwargs["stream"] is True
        assert kwargs["timeout"] == 3.0

    def test_connection_failure(self):
        with patch(POST, side_effect=requests.ConnectionError("refused")):
            with pytest.raises(CompletionUnavailable):
                asyncio.run(collect(OllamaCompletionService().complete([ChatMessage("user", "hi")])))

    def test_error_line_in_stream(self):
        resp = _stream_response([b'{"error":"model not found"}'])
        with patch(POST, return_value=resp):
            with pytest.raises(CompletionUnavailable) as exc:
                asyncio.run(collect(OllamaCompletionService().complete([ChatMessage("user", "hi")])))

        assert "model not found" in str(exc.value)
        resp.close.assert_called_once_with()

    def test_interrupted_stream(self):
        def broken():
            yield b'{"message":{"content":"part"},"done":false}'
            raise requests.ConnectionError("reset by peer")

        resp = Mock()
        resp.iter_lines.return_value = broken()
        with patch(POST, return_value=resp):
            with pytest.raises(CompletionUnavailable):
                asyncio.run(collect(OllamaCompletionService().complete([ChatMessage("user", "hi")])))

    @pytest.mark.parametrize("line", [b'{"message":{"content":"a"}', b'["not", "an", "object"]', b"42"])
    def test_malformed_stream_line(self, line):
        resp = _stream_response([line])
        with patch(POST, return_value=resp):
            with pytest.raises(CompletionUnavailable):
                asyncio.run(collect(OllamaCompletionService().complete([ChatMessage("user", "hi")])))

        resp.close.assert_called_once_with()

    def test_http_error_status_closes_response(self):
        resp = _stream_response([])
        resp.raise_for_status.side_effect = requests.HTTPError("503 Service Unavailable")
        with patch(POST, return_value=resp):
            with pytest.raises(CompletionUnavailable):
                asyncio.run(collect(OllamaCompletionService().complete([ChatMessage("user", "hi")])))

        resp.close.assert_called_once_with()
