"""BuildingService — the single entry point from description text to IFC file.

Usage::

    from ifcai import BuildingService

    service = BuildingService()
    result = service.generate_from_text(
        "A two-storey family house of 150 m² with 3 bedrooms, 2 bathrooms and a garage"
    )
    Path(result.document.filename).write_bytes(result.document.content)

Only :class:`~ifcai.errors.InputValidationError` escapes; every other
failure degrades to defaults (extraction) or to the minimal fixed-structure
document (generation).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ifcai import config
from ifcai.cache import ExtractionCache, ResultCache
from ifcai.config import Settings, load_settings
from ifcai.extraction.extractor import ParameterExtractor
from ifcai.extraction.providers.base import AnswerProvider
from ifcai.extraction.providers.ollama import OllamaProvider
from ifcai.extraction.schema import ExtractionReport, ParameterRecord
from ifcai.models import GeneratedDocument
from ifcai.step.assembler import Clock, StepAssembler, utc_now
from ifcai.step.generators import BuildingGenerator, TemplateGenerator, select_generator
from ifcai.step.ids import GuidFactory
from ifcai.step.templates import TemplateRegistry

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """What the trigger action hands back to the UI."""

    document: GeneratedDocument
    status: str
    extraction: ExtractionReport | None = None
    from_cache: bool = False
    warnings: list[str] = field(default_factory=list)


def timestamped_filename(basename: str, when: datetime) -> str:
    """``<basename>_<YYYYmmdd_HHMMSS>.ifc``"""
    return f"{basename}_{when.strftime('%Y%m%d_%H%M%S')}{config.FILE_EXTENSION}"


class BuildingService:
    """Wire extraction, caching and generation together.

    Parameters
    ----------
    settings:
        Runtime settings; loaded from the environment if omitted.
    provider:
        Text-model provider for extraction; defaults to an
        :class:`OllamaProvider` built from *settings*.
    generator:
        Explicit generator; otherwise chosen by ``settings.prefer_native``.
    result_cache, extraction_cache, registry:
        Shared state objects; fresh instances are created if omitted.
    guids, clock:
        Injectable randomness and time for reproducible tests.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        provider: AnswerProvider | None = None,
        generator: BuildingGenerator | None = None,
        result_cache: ResultCache | None = None,
        extraction_cache: ExtractionCache | None = None,
        registry: TemplateRegistry | None = None,
        guids: GuidFactory | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.clock = clock
        self.registry = registry if registry is not None else TemplateRegistry()
        self.result_cache = (
            result_cache if result_cache is not None
            else ResultCache(self.settings.cache_size)
        )
        self.extraction_cache = (
            extraction_cache if extraction_cache is not None
            else ExtractionCache(self.settings.cache_size)
        )

        self.assembler = StepAssembler(self.registry, guids, clock)
        self._template = TemplateGenerator(self.assembler)
        self.generator = (
            generator if generator is not None
            else select_generator(self.settings.prefer_native, self.assembler)
        )

        if provider is None:
            provider = OllamaProvider(
                base_url=self.settings.ollama_host,
                model=self.settings.model,
                timeout=self.settings.query_timeout,
            )
        self.extractor = ParameterExtractor(
            provider,
            timeout=self.settings.query_timeout,
            cache=self.extraction_cache,
        )

    # -- public API -----------------------------------------------------------

    def generate_from_text(
        self, text: str, basename: str = config.DEFAULT_BASENAME,
    ) -> GenerationResult:
        """Validate, extract, and generate a downloadable IFC document.

        Raises
        ------
        InputValidationError
            If *text* is too short; nothing is extracted or cached.
        """
        report = self.extractor.extract(text)
        result = self.generate(report.record, basename)
        result.extraction = report
        result.warnings = report.warnings + result.warnings
        return result

    def generate(
        self, params: ParameterRecord, basename: str = config.DEFAULT_BASENAME,
    ) -> GenerationResult:
        """Return the document for *params*, from cache when possible."""
        filename = timestamped_filename(basename, self.clock())

        cached = self.result_cache.get(params)
        if cached is not None:
            logger.info("IFC model served from cache")
            return GenerationResult(
                document=cached.model_copy(update={"filename": filename}),
                status="IFC file generated (from cache).",
                from_cache=True,
            )

        document = self.render(params, filename)
        # Fallback documents are never cached.
        if document.status == "ok":
            self.result_cache.put(params, document)
            self.result_cache.evict_if_over()

        if document.status == "fallback":
            status = "IFC file generated with minimal content (generation failed)."
            warnings = ["Generation failed; produced a minimal IFC document."]
        else:
            status = "IFC file generated."
            warnings = []
        return GenerationResult(document=document, status=status, warnings=warnings)

    def render(self, params: ParameterRecord, filename: str) -> GeneratedDocument:
        """Run the generator chain: selected → template → minimal document."""
        chain: list[BuildingGenerator] = [self.generator]
        if not isinstance(self.generator, TemplateGenerator):
            chain.append(self._template)

        for generator in chain:
            try:
                text = generator.generate(params)
            except Exception:
                logger.warning("Generator %s failed", generator.name, exc_info=True)
                continue
            return GeneratedDocument(
                content=text.encode("utf-8"),
                filename=filename,
                generator=generator.name,
                params=params,
            )

        logger.warning("All generators failed, emitting minimal document")
        return GeneratedDocument(
            content=self.assembler.minimal_document().encode("utf-8"),
            filename=filename,
            status="fallback",
            generator="minimal",
            params=params,
        )

    def write(self, result: GenerationResult, output_dir: str | Path | None = None) -> Path:
        """Write the document under *output_dir* and return its path."""
        out = Path(output_dir) if output_dir is not None else self.settings.output_dir
        out.mkdir(parents=True, exist_ok=True)
        path = out / result.document.filename
        path.write_bytes(result.document.content)
        logger.info("Wrote %s (%d bytes)", path, result.document.size)
        return path
