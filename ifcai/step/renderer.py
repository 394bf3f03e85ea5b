"""Placeholder substitution over ``{{NAME}}`` templates."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z0-9_]+)\}\}")


def apply_template(template: str, values: Mapping[str, Any]) -> str:
    """Replace every ``{{key}}`` in *template* with ``str(values[key])``.

    Placeholders without a value are left verbatim.
    """
    result = template
    for key, value in values.items():
        result = result.replace("{{" + key + "}}", str(value))
    return result


def find_placeholders(text: str) -> list[str]:
    """Return the distinct placeholder names still present in *text*, in order."""
    seen: dict[str, None] = {}
    for match in _PLACEHOLDER_RE.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def step_real(value: float) -> str:
    """Format *value* as a STEP real (always with a decimal point)."""
    text = f"{float(value):.6f}".rstrip("0")
    return text + "0" if text.endswith(".") else text


def step_refs(ids: list[int]) -> str:
    """Format a STEP aggregate of entity references: ``(#1,#2)``."""
    return "(" + ",".join(f"#{i}" for i in ids) + ")"
