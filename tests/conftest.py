"""Shared fixtures: deterministic GUIDs and fresh shared state."""

from __future__ import annotations

import logging
import random

import pytest

from helpers import fixed_clock
from ifcai.step.assembler import StepAssembler
from ifcai.step.ids import GuidFactory
from ifcai.step.templates import TemplateRegistry


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Undo ``setup_logging`` calls made by the CLI under test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def guids() -> GuidFactory:
    return GuidFactory(random.Random(1234))


@pytest.fixture
def registry() -> TemplateRegistry:
    return TemplateRegistry()


@pytest.fixture
def assembler(registry: TemplateRegistry, guids: GuidFactory) -> StepAssembler:
    return StepAssembler(registry, guids, fixed_clock)
