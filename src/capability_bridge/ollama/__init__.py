"""Ollama client wrapper used as the completion backend."""

from capability_bridge.ollama.client import OllamaClient

__all__ = ["OllamaClient"]
