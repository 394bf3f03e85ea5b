"""Abstract text-model provider interface."""

from __future__ import annotations

import abc


class AnswerProvider(abc.ABC):
    """Base class for question-answering text models.

    The model is an opaque ``(question, context) -> text`` collaborator;
    implementations return the raw answer text, or *None* on failure.
    Implementations may also raise; the extractor treats an exception
    like a missing answer for that one question.
    """

    name: str = "provider"

    @abc.abstractmethod
    def answer(self, question: str, context: str) -> str | None:
        """Ask *question* about *context* and return the raw answer text."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Return *True* if the provider is ready to serve requests."""
