"""Parameter extraction — building descriptions to structured parameters."""

from ifcai.extraction.extractor import ParameterExtractor, validate_text
from ifcai.extraction.schema import ExtractionReport, ParameterRecord

__all__ = ["ExtractionReport", "ParameterExtractor", "ParameterRecord", "validate_text"]
