"""LLM package for generative model clients."""

from .client import GenerativeClient, OllamaClient

__all__ = ['GenerativeClient', 'OllamaClient']
