"""STEP document generation — templates, numbering, assembly."""

from ifcai.step.assembler import StepAssembler
from ifcai.step.generators import BuildingGenerator, TemplateGenerator, select_generator
from ifcai.step.ids import GuidFactory, IdBlock, entity_id
from ifcai.step.numbering import block_for, storey_block, wall_block
from ifcai.step.renderer import apply_template
from ifcai.step.templates import TemplateRegistry

__all__ = [
    "BuildingGenerator",
    "GuidFactory",
    "IdBlock",
    "StepAssembler",
    "TemplateGenerator",
    "TemplateRegistry",
    "apply_template",
    "block_for",
    "entity_id",
    "select_generator",
    "storey_block",
    "wall_block",
]
