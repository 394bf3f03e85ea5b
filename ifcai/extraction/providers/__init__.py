"""Text-model providers — abstract base + concrete providers."""

from ifcai.extraction.providers.base import AnswerProvider
from ifcai.extraction.providers.fallback import FallbackProvider
from ifcai.extraction.providers.ollama import OllamaProvider

__all__ = ["AnswerProvider", "FallbackProvider", "OllamaProvider"]
