"""Global configuration: constants, id layout, and runtime settings."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Entity id layout
# ---------------------------------------------------------------------------

# Ids 1-199 are reserved for the fixed project / building entities.
FIXED_ID_LIMIT = 199

STOREY_BASE = 200
STOREY_STRIDE = 10

WALL_BASE = 300
WALL_STRIDE = 20

# Spatial relationships that reference every storey / wall.
RELATIONSHIP_BASE = 400

# Storey blocks must stay below the wall region; walls below the relationships.
MAX_STOREYS = (WALL_BASE - STOREY_BASE) // STOREY_STRIDE
MAX_WALLS = (RELATIONSHIP_BASE - WALL_BASE) // WALL_STRIDE

# ---------------------------------------------------------------------------
# Building geometry (metres)
# ---------------------------------------------------------------------------

STOREY_HEIGHT = 3.0
WALL_LENGTH = 10.0
WALL_THICKNESS = 0.2

# (name, x, y, ref-direction); East/West walls run along the Y axis.
WALL_LAYOUT: tuple[tuple[str, float, float, tuple[float, float]], ...] = (
    ("North", 0.0, 5.0, (1.0, 0.0)),
    ("South", 0.0, -5.0, (1.0, 0.0)),
    ("East", 5.0, 0.0, (0.0, 1.0)),
    ("West", -5.0, 0.0, (0.0, 1.0)),
)

# ---------------------------------------------------------------------------
# Document header
# ---------------------------------------------------------------------------

PROJECT_NAME = "Generated Project"
BUILDING_NAME = "Building"
AUTHOR = "IFC Generator"
APPLICATION_ID = "IFCAI3"
APPLICATION_VERSION = "1.0"
ORGANIZATION = "IFCAI3"

MEDIA_TYPE = "application/octet-stream"
DEFAULT_BASENAME = "building"
FILE_EXTENSION = ".ifc"

# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

MIN_TEXT_LENGTH = 20
CONTEXT_LIMIT = 500
MAX_ANSWER_TOKENS = 50

DEFAULT_SURFACE_AREA = 100.0
DEFAULT_FLOOR_COUNT = 1
DEFAULT_BEDROOM_COUNT = 2
DEFAULT_BATHROOM_COUNT = 1
DEFAULT_HAS_GARAGE = False

DEFAULT_CACHE_SIZE = 10
DEFAULT_QUERY_TIMEOUT = 10.0


# ---------------------------------------------------------------------------
# Runtime settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Runtime settings resolved from defaults, profile and environment."""

    env: str = "development"
    ollama_host: str = "http://localhost:11434"
    model: str = "mistral"
    query_timeout: float = Field(default=DEFAULT_QUERY_TIMEOUT, gt=0)
    cache_size: int = Field(default=DEFAULT_CACHE_SIZE, ge=1)
    prefer_native: bool = False
    log_level: str = "INFO"
    output_dir: Path = Path("output")


# Environment variable -> Settings field
_ENV_KEYS: dict[str, str] = {
    "IFCAI_ENV": "env",
    "IFCAI_OLLAMA_HOST": "ollama_host",
    "IFCAI_MODEL": "model",
    "IFCAI_QUERY_TIMEOUT": "query_timeout",
    "IFCAI_CACHE_SIZE": "cache_size",
    "IFCAI_PREFER_NATIVE": "prefer_native",
    "IFCAI_LOG_LEVEL": "log_level",
    "IFCAI_OUTPUT_DIR": "output_dir",
}

_PROFILES: dict[str, dict[str, Any]] = {
    "development": {"log_level": "DEBUG"},
    "production": {"log_level": "WARNING"},
    "testing": {"log_level": "DEBUG", "query_timeout": 1.0},
}


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Load merged settings: defaults -> profile -> environment variables.

    *environ* defaults to :data:`os.environ`; tests pass a plain dict.
    """
    environ = os.environ if environ is None else environ

    values: dict[str, Any] = {}
    env_name = environ.get("IFCAI_ENV", "development")
    profile = _PROFILES.get(env_name)
    if profile is None:
        logger.warning("Unknown IFCAI_ENV profile %r, using defaults", env_name)
    else:
        values.update(profile)
    values["env"] = env_name

    for key, field in _ENV_KEYS.items():
        raw = environ.get(key)
        if raw is not None and raw != "":
            values[field] = raw

    # pydantic coerces "true"/"1"/"10.5" into the declared field types
    return Settings.model_validate(values)
