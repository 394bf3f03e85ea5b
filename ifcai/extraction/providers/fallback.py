"""Rule-based regex fallback — always available, no external deps.

Answers each extraction question by scanning the description itself,
producing short answers in the same shape a text model would return
("150 m²", "2", "yes").
"""

from __future__ import annotations

import re

from ifcai.extraction.providers.base import AnswerProvider
from ifcai.extraction.questions import (
    BATHROOM_NOUNS,
    BEDROOM_NOUNS,
    COUNT_TOKEN,
    FLOOR_NOUNS,
)

# "no bedrooms" answers "no", which the count parsers read as zero
_COUNT = r"\b(no|aucune?|" + COUNT_TOKEN + r")"

_SURFACE_RE = re.compile(
    r"\d+(?:[.,]\d+)?\s*"
    r"(?:m²|m2|sq\.?\s*m|sqm|square\s+met(?:er|re)s?|m[eè]tres?\s+carr[ée]s?)",
    re.I,
)

_FLOOR_RE = re.compile(_COUNT + r"[\s-]*" + FLOOR_NOUNS + r"\b", re.I)
_BEDROOM_RE = re.compile(_COUNT + r"[\s-]*" + BEDROOM_NOUNS + r"\b", re.I)
_BATHROOM_RE = re.compile(_COUNT + r"[\s-]*" + BATHROOM_NOUNS + r"\b", re.I)

_GARAGE_NEG_RE = re.compile(
    r"\b(?:no|without|sans|pas\s+de)\s+(?:\w+\s+)?garage\b", re.I,
)
_GARAGE_RE = re.compile(r"\bgarage\b", re.I)

# question keyword -> pattern over the description
_KEYWORDS: tuple[tuple[tuple[str, ...], re.Pattern[str]], ...] = (
    (("surface", "area"), _SURFACE_RE),
    (("floor", "storey", "level"), _FLOOR_RE),
    (("bedroom",), _BEDROOM_RE),
    (("bathroom",), _BATHROOM_RE),
)


class FallbackProvider(AnswerProvider):
    """Pure rule-based provider using regex and keyword matching."""

    name = "fallback"

    def is_available(self) -> bool:
        """Always available."""
        return True

    def answer(self, question: str, context: str) -> str | None:
        """Answer *question* from *context* with regex rules.

        Returns *None* when the description does not mention the value.
        """
        q = question.lower()

        if "garage" in q:
            if _GARAGE_NEG_RE.search(context):
                return "no"
            return "yes" if _GARAGE_RE.search(context) else "no"

        for keywords, pattern in _KEYWORDS:
            if not any(k in q for k in keywords):
                continue
            match = pattern.search(context)
            if match is None:
                return None
            return match.group(1) if match.groups() else match.group(0)

        return None
