"""ifcai — generate IFC building files from free-text descriptions."""

__version__ = "1.0.0"

from ifcai.cache import ExtractionCache, ResultCache
from ifcai.config import Settings, load_settings
from ifcai.errors import (
    AssemblyFailure,
    ExtractionPartialFailure,
    IfcaiError,
    InputValidationError,
)
from ifcai.extraction import ExtractionReport, ParameterExtractor, ParameterRecord
from ifcai.models import GeneratedDocument
from ifcai.service import BuildingService, GenerationResult
from ifcai.step import GuidFactory, StepAssembler, TemplateRegistry, apply_template

__all__ = [
    "__version__",
    # Service
    "BuildingService",
    "GenerationResult",
    "GeneratedDocument",
    # Extraction
    "ExtractionReport",
    "ParameterExtractor",
    "ParameterRecord",
    # STEP generation
    "GuidFactory",
    "StepAssembler",
    "TemplateRegistry",
    "apply_template",
    # Caches
    "ExtractionCache",
    "ResultCache",
    # Configuration
    "Settings",
    "load_settings",
    # Errors
    "AssemblyFailure",
    "ExtractionPartialFailure",
    "IfcaiError",
    "InputValidationError",
]
