"""Ollama/local LLM provider — optional, graceful fallback."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request

from ifcai import config
from ifcai.extraction.providers.base import AnswerProvider
from ifcai.extraction.questions import build_prompt

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "http://localhost:11434"
_DEFAULT_MODEL = "mistral"


class OllamaProvider(AnswerProvider):
    """Provider that asks a local Ollama instance one question at a time.

    Gracefully returns *None* if Ollama is not running, so the extractor
    keeps that field's default.
    """

    name = "ollama"

    def __init__(
        self,
        *,
        base_url: str = _DEFAULT_BASE_URL,
        model: str = _DEFAULT_MODEL,
        timeout: float = config.DEFAULT_QUERY_TIMEOUT,
        max_tokens: int = config.MAX_ANSWER_TOKENS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens

    def is_available(self) -> bool:
        """Return True if the server answers its ``/api/tags`` model listing.

        Any HTTP 200 counts; the configured model is not checked.
        """
        try:
            req = urllib.request.Request(f"{self.base_url}/api/tags")
            with urllib.request.urlopen(req, timeout=2) as resp:
                return resp.status == 200
        except (urllib.error.URLError, OSError, TimeoutError):
            return False

    def answer(self, question: str, context: str) -> str | None:
        """Send the question and context to Ollama and return the answer text.

        Returns *None* if Ollama is unreachable or the call fails.
        """
        payload = json.dumps({
            "model": self.model,
            "prompt": build_prompt(question, context),
            "stream": False,
            "options": {
                "temperature": 0.0,
                "num_predict": self.max_tokens,
            },
        }).encode("utf-8")

        req = urllib.request.Request(
            f"{self.base_url}/api/generate",
            data=payload,
            headers={"Content-Type": "application/json"},
            method="POST",
        )

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                body = json.loads(resp.read().decode("utf-8"))
                text = body.get("response")
                return text.strip() if isinstance(text, str) else None
        except (urllib.error.URLError, OSError, TimeoutError, json.JSONDecodeError) as exc:
            logger.debug("Ollama call failed for %r: %s", question, exc)
            return None
