"""Error taxonomy for text-to-IFC generation."""

from __future__ import annotations


class IfcaiError(Exception):
    """Base class for all ifcai errors."""


class InputValidationError(IfcaiError):
    """Raised when the building description is too short to extract from.

    This is the only error that reaches the user as a blocking failure.
    """

    def __init__(self, length: int, minimum: int) -> None:
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Please provide a more detailed description "
            f"(got {length} characters, need at least {minimum})."
        )


class ExtractionPartialFailure(IfcaiError):
    """One extraction question failed or timed out.

    Recorded on the extraction report; the field keeps its default.
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class AssemblyFailure(IfcaiError):
    """Document assembly produced an invalid or incomplete document."""
