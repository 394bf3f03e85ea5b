"""Shared test helpers: frozen clock, document inspection, scripted provider."""

from __future__ import annotations

import re
import threading
from datetime import datetime, timezone

from ifcai.extraction.providers.base import AnswerProvider
from ifcai.extraction.questions import QUESTIONS

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

ENTITY_DEF_RE = re.compile(r"^#(\d+)=", re.M)
ENTITY_REF_RE = re.compile(r"#(\d+)")


def fixed_clock() -> datetime:
    return FIXED_NOW


def entity_ids(document: str) -> list[int]:
    """Ids of every entity instance defined in *document*, in order."""
    return [int(i) for i in ENTITY_DEF_RE.findall(document)]


def referenced_ids(document: str) -> set[int]:
    """Every id mentioned in *document*, defined or referenced."""
    return {int(i) for i in ENTITY_REF_RE.findall(document)}


# ---------------------------------------------------------------------------
# Scripted text model
# ---------------------------------------------------------------------------

DESCRIPTION = "A two-storey house of 150 m² with 3 bedrooms, 2 bathrooms and a garage."


class ScriptedProvider(AnswerProvider):
    """Answers from a ``question text -> answer`` table.

    A value that is an exception instance is raised instead of returned.
    """

    name = "scripted"

    def __init__(self, script: dict[str, object], available: bool = True) -> None:
        self.script = script
        self.available = available
        self.prompts: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def is_available(self) -> bool:
        return self.available

    def answer(self, question: str, context: str) -> str | None:
        with self._lock:
            self.prompts.append((question, context))
        value = self.script.get(question)
        if isinstance(value, BaseException):
            raise value
        return value  # type: ignore[return-value]


def script(**answers: object) -> dict[str, object]:
    """Build a provider script keyed by question text from field names."""
    by_field = {q.field: q.text for q in QUESTIONS}
    return {by_field[name]: value for name, value in answers.items()}


FULL_ANSWERS = script(
    surface_area_sqm="150 m²",
    floor_count="2",
    bedroom_count="3",
    bathroom_count="2",
    has_garage="Yes",
)
