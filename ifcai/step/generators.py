"""Building generator strategies and their selection.

A generator turns a :class:`ParameterRecord` into STEP text.  The
template generator is always available; the native ifcopenshell generator
is used only when installed and explicitly preferred.  Selection happens
once, at the boundary; the chosen generator never branches on the other.
"""

from __future__ import annotations

import abc
import logging

from ifcai.extraction.schema import ParameterRecord
from ifcai.step.assembler import StepAssembler

logger = logging.getLogger(__name__)


class BuildingGenerator(abc.ABC):
    """Base class for all building generators."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short identifier recorded on generated documents."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Return *True* if this generator can run in the current environment."""

    @abc.abstractmethod
    def generate(self, params: ParameterRecord) -> str:
        """Return the full STEP document for *params*."""


class TemplateGenerator(BuildingGenerator):
    """Generator backed by :class:`StepAssembler`."""

    def __init__(self, assembler: StepAssembler | None = None) -> None:
        self.assembler = assembler if assembler is not None else StepAssembler()

    @property
    def name(self) -> str:
        return "template"

    def is_available(self) -> bool:
        return True

    def generate(self, params: ParameterRecord) -> str:
        return self.assembler.assemble(params)


def select_generator(
    prefer_native: bool = False,
    assembler: StepAssembler | None = None,
) -> BuildingGenerator:
    """Pick the native generator when preferred and available, else templates."""
    template = TemplateGenerator(assembler)
    if not prefer_native:
        return template

    from ifcai.step.native import IfcOpenShellGenerator

    native = IfcOpenShellGenerator()
    if native.is_available():
        logger.info("Using native ifcopenshell generator")
        return native
    logger.info("ifcopenshell not installed, using template generator")
    return template
