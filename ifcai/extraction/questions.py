"""Extraction questions and the regex parsers that normalise model answers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable

from ifcai import config

# ---------------------------------------------------------------------------
# Number words and nouns
# ---------------------------------------------------------------------------

_NUMBER_WORDS: dict[str, int] = {
    "zero": 0,
    "one": 1, "single": 1, "un": 1, "une": 1,
    "two": 2, "deux": 2,
    "three": 3, "trois": 3,
    "four": 4, "quatre": 4,
    "five": 5, "cinq": 5,
    "six": 6,
    "seven": 7, "sept": 7,
    "eight": 8, "huit": 8,
    "nine": 9, "neuf": 9,
    "ten": 10, "dix": 10,
}

# "no" only means zero as the whole answer or right before the noun.
_ZERO_WORDS = r"(?:zero|no|none|aucune?)"

COUNT_TOKEN = r"(\d+|" + "|".join(_NUMBER_WORDS) + r")"

FLOOR_NOUNS = r"(?:floors?|stor(?:e?y|eys|ies|eyed)|levels?|niveaux?|[ée]tages?)"
BEDROOM_NOUNS = r"(?:bedrooms?|chambres?)"
BATHROOM_NOUNS = r"(?:bathrooms?|baths?|salles?\s+de\s+bains?)"

_COUNT_RE = re.compile(r"\b" + COUNT_TOKEN + r"\b", re.I)
_ONLY_ZERO_RE = re.compile(r"^\s*" + _ZERO_WORDS + r"\s*[.!]?\s*$", re.I)

# "150 m²", "150m2", "150 sqm", "150 square metres", "150 mètres carrés"
_SURFACE_RE = re.compile(
    r"(\d+(?:[.,]\d+)?)\s*"
    r"(?:m²|m2|sq\.?\s*m|sqm|square\s+met(?:er|re)s?|m[eè]tres?\s+carr[ée]s?)",
    re.I,
)
_BARE_NUMBER_RE = re.compile(r"^\s*(\d+(?:[.,]\d+)?)\s*\.?\s*$")

_NEGATIVE_RE = re.compile(
    r"\b(no|not|non|none|false|faux|without|sans|pas)\b", re.I,
)
_POSITIVE_RE = re.compile(r"\b(yes|oui|true|vrai|y|1|garage)\b", re.I)


def _to_int(token: str) -> int:
    return int(token) if token.isdigit() else _NUMBER_WORDS[token.lower()]


def parse_count(answer: str, nouns: str | None = None) -> int | None:
    """Return the count stated in *answer*.

    Parameters
    ----------
    answer:
        Raw model answer.
    nouns:
        Regex alternation for the counted thing.  A number right before
        one of these nouns ("two floors", "no bedrooms") wins over any
        other number in the answer.
    """
    if _ONLY_ZERO_RE.match(answer):
        return 0
    if nouns is not None:
        match = re.search(r"\b" + COUNT_TOKEN + r"[\s-]*" + nouns + r"\b", answer, re.I)
        if match:
            return _to_int(match.group(1))
        if re.search(r"\b" + _ZERO_WORDS + r"\s+" + nouns + r"\b", answer, re.I):
            return 0
    match = _COUNT_RE.search(answer)
    return _to_int(match.group(1)) if match else None


def parse_surface(answer: str) -> float | None:
    """Return a surface area in m² from *answer*.

    A value needs an area unit unless the number is the whole answer.
    """
    match = _SURFACE_RE.search(answer) or _BARE_NUMBER_RE.match(answer)
    if match is None:
        return None
    value = float(match.group(1).replace(",", "."))
    return value if value > 0 else None


def parse_floor_count(answer: str) -> int | None:
    count = parse_count(answer, FLOOR_NOUNS)
    if count is None or count < 1:
        return None
    return count


def parse_room_count(answer: str, nouns: str | None = None) -> int | None:
    count = parse_count(answer, nouns)
    if count is None or count < 0:
        return None
    return count


def parse_bedroom_count(answer: str) -> int | None:
    return parse_room_count(answer, BEDROOM_NOUNS)


def parse_bathroom_count(answer: str) -> int | None:
    return parse_room_count(answer, BATHROOM_NOUNS)


def parse_garage(answer: str) -> bool | None:
    """Return *True*/*False* for a yes/no answer, *None* if undecidable."""
    if _NEGATIVE_RE.search(answer):
        return False
    if _POSITIVE_RE.search(answer):
        return True
    return None


# ---------------------------------------------------------------------------
# Question table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Question:
    """One question put to the text model, and how to read its answer."""

    field: str
    text: str
    parse: Callable[[str], Any]
    default: Any


QUESTIONS: tuple[Question, ...] = (
    Question(
        "surface_area_sqm",
        "What is the total surface area of the building?",
        parse_surface,
        config.DEFAULT_SURFACE_AREA,
    ),
    Question(
        "floor_count",
        "How many floors does the building have?",
        parse_floor_count,
        config.DEFAULT_FLOOR_COUNT,
    ),
    Question(
        "bedroom_count",
        "How many bedrooms are there?",
        parse_bedroom_count,
        config.DEFAULT_BEDROOM_COUNT,
    ),
    Question(
        "bathroom_count",
        "How many bathrooms are there?",
        parse_bathroom_count,
        config.DEFAULT_BATHROOM_COUNT,
    ),
    Question(
        "has_garage",
        "Is there a garage?",
        parse_garage,
        config.DEFAULT_HAS_GARAGE,
    ),
)


def limit_context(text: str, limit: int = config.CONTEXT_LIMIT) -> str:
    """Truncate *text* to *limit* characters, marking the cut with ``...``."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def build_prompt(question: str, context: str) -> str:
    return f"{question}\nContext: {context}"
