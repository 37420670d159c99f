"""Generative model clients."""

import logging
from typing import Protocol

import requests

from ..config import (
    DEFAULT_LLM_TIMEOUT,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL_NAME,
    DEFAULT_OLLAMA_URL,
    DEFAULT_TEMPERATURE
)
from ..exceptions import LLMTimeout, LLMUnavailable

logger = logging.getLogger(__name__)


class GenerativeClient(Protocol):
    """Capability for turning a system prompt and a query into prose."""

    def generate(self, system_prompt: str, user_query: str) -> str:
        """Return the generated answer or raise LLMUnavailable / LLMTimeout."""
        ...


class OllamaClient:
    """Calls the Ollama chat API."""

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL_NAME,
        ollama_url: str = DEFAULT_OLLAMA_URL,
        timeout: float = DEFAULT_LLM_TIMEOUT,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS
    ):
        """
        Initialize the client.

        Args:
            model_name: Name of the Ollama model to use
            ollama_url: URL of the Ollama API
            timeout: Request timeout in seconds
            temperature: Sampling temperature
            max_tokens: Maximum number of tokens to generate
        """
        self.model_name = model_name
        self.ollama_url = ollama_url.rstrip('/')
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens

    def generate(self, system_prompt: str, user_query: str) -> str:
        """
        Call the Ollama API to generate an answer.

        Args:
            system_prompt: Instructions and context for the model
            user_query: The user's question

        Returns:
            Generated answer text

        Raises:
            LLMTimeout: If the request timed out
            LLMUnavailable: If the API failed or returned no content
        """
        logger.info(f"Calling {self.model_name} (system prompt length: {len(system_prompt)})")
        try:
            response = requests.post(
                f"{self.ollama_url}/api/chat",
                json={
                    "model": self.model_name,
                    "messages": [
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_query}
                    ],
                    "stream": False,
                    "options": {
                        "temperature": self.temperature,
                        "num_predict": self.max_tokens
                    }
                },
                timeout=self.timeout
            )
            response.raise_for_status()
            content = response.json()["message"]["content"]
        except requests.Timeout as e:
            raise LLMTimeout(f"Ollama did not answer within {self.timeout}s") from e
        except requests.RequestException as e:
            raise LLMUnavailable(f"Error calling Ollama API: {str(e)}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise LLMUnavailable(f"Invalid response from Ollama API: {str(e)}") from e

        if not content or not content.strip():
            raise LLMUnavailable("Ollama returned an empty answer")

        logger.info(f"Generated answer successfully, length: {len(content)}")
        return content.strip()
