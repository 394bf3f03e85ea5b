"""ParameterRecord — the structured output of parameter extraction.

Every field always carries a value: extraction failures fall back to the
documented defaults instead of leaving a field missing.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from ifcai import config
from ifcai.errors import ExtractionPartialFailure

# Canonical field order for cache keys; independent of construction order.
_KEY_FIELDS = (
    "surface_area_sqm",
    "floor_count",
    "bedroom_count",
    "bathroom_count",
    "has_garage",
)


class ParameterRecord(BaseModel):
    """Typed building parameters consumed by the generators."""

    model_config = ConfigDict(frozen=True)

    surface_area_sqm: float = Field(default=config.DEFAULT_SURFACE_AREA, gt=0)
    """Total floor area in square metres."""

    floor_count: int = Field(default=config.DEFAULT_FLOOR_COUNT, ge=1)
    """Number of storeys above ground."""

    bedroom_count: int = Field(default=config.DEFAULT_BEDROOM_COUNT, ge=0)

    bathroom_count: int = Field(default=config.DEFAULT_BATHROOM_COUNT, ge=0)

    has_garage: bool = config.DEFAULT_HAS_GARAGE

    def cache_key(self) -> str:
        """Return the canonical serialisation used as a cache key."""
        return json.dumps(
            [[name, getattr(self, name)] for name in _KEY_FIELDS],
            separators=(",", ":"),
        )


@dataclass
class ExtractionReport:
    """Outcome of one extraction run."""

    record: ParameterRecord
    answers: dict[str, str | None] = field(default_factory=dict)
    failures: list[ExtractionPartialFailure] = field(default_factory=list)
    provider: str = ""
    from_cache: bool = False

    @property
    def warnings(self) -> list[str]:
        return [str(f) for f in self.failures]
