"""GeneratedDocument — the downloadable IFC payload handed to the caller."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from ifcai import config
from ifcai.extraction.schema import ParameterRecord


class GeneratedDocument(BaseModel):
    """Encoded STEP text plus the metadata needed to offer it for download.

    Once returned the caller owns it; the result cache keeps a shared,
    read-only reference.
    """

    model_config = ConfigDict(frozen=True)

    content: bytes
    filename: str = config.DEFAULT_BASENAME + config.FILE_EXTENSION
    media_type: str = config.MEDIA_TYPE
    status: Literal["ok", "fallback"] = "ok"
    """``fallback`` when only the minimal fixed-structure document could be produced."""

    generator: str = "template"
    params: ParameterRecord = ParameterRecord()

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    @property
    def size(self) -> int:
        return len(self.content)
