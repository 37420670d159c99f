"""
Test suite for the Ollama generative client.
"""

from unittest.mock import MagicMock

import pytest
import requests

from poliseek.exceptions import LLMTimeout, LLMUnavailable
from poliseek.llm import OllamaClient


def fake_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def post(monkeypatch):
    mock_post = MagicMock()
    monkeypatch.setattr("poliseek.llm.client.requests.post", mock_post)
    return mock_post


class TestOllamaClient:
    """Test suite for OllamaClient.generate."""

    def test_should_post_chat_request(self, post) -> None:
        # Arrange
        post.return_value = fake_response({"message": {"content": "  Wear uniforms.  "}})
        client = OllamaClient(model_name="mistral", ollama_url="http://ollama:11434/", timeout=12)

        # Act
        answer = client.generate("system text", "What should I wear?")

        # Assert
        assert answer == "Wear uniforms."
        url = post.call_args.args[0]
        payload = post.call_args.kwargs["json"]
        assert url == "http://ollama:11434/api/chat"
        assert payload["model"] == "mistral"
        assert payload["stream"] is False
        assert payload["messages"] == [
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "What should I wear?"},
        ]
        assert post.call_args.kwargs["timeout"] == 12

    def test_timeout_should_raise_llm_timeout(self, post) -> None:
        post.side_effect = requests.Timeout("read timed out")

        with pytest.raises(LLMTimeout):
            OllamaClient().generate("system", "query")

    def test_connection_error_should_raise_unavailable(self, post) -> None:
        post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(LLMUnavailable):
            OllamaClient().generate("system", "query")

    def test_http_error_should_raise_unavailable(self, post) -> None:
        response = fake_response({})
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        post.return_value = response

        with pytest.raises(LLMUnavailable):
            OllamaClient().generate("system", "query")

    @pytest.mark.parametrize("payload", [{}, {"message": {"content": ""}}, {"message": {"content": "   "}}])
    def test_missing_or_empty_content_should_raise_unavailable(self, post, payload) -> None:
        post.return_value = fake_response(payload)

        with pytest.raises(LLMUnavailable):
            OllamaClient().generate("system", "query")
