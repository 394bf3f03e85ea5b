"""StepAssembler — render a ParameterRecord into an IFC4 STEP document.

Usage::

    from ifcai.step import StepAssembler
    from ifcai.extraction import ParameterRecord

    assembler = StepAssembler()
    text = assembler.assemble(ParameterRecord(floor_count=2))

The document is the root template with two open regions.  Storey blocks
(one per floor, in increasing order) fill ``STOREYS``; four wall blocks
(always North, South, East, West) fill ``WALLS``.  Entity ids come from
:mod:`ifcai.step.numbering`, so the structure is fully determined by the
parameters; only GUIDs and the timestamp vary between runs.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from ifcai import config
from ifcai.errors import AssemblyFailure
from ifcai.extraction.schema import ParameterRecord
from ifcai.step import templates
from ifcai.step.ids import GuidFactory, entity_id
from ifcai.step.numbering import STOREY_LAYOUT, WALL_LAYOUT, storey_block, wall_block
from ifcai.step.renderer import apply_template, find_placeholders, step_real, step_refs
from ifcai.step.templates import TemplateRegistry

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StepAssembler:
    """Template-based STEP document assembler.

    Parameters
    ----------
    registry:
        Shared :class:`TemplateRegistry`; a private one is created if omitted.
    guids:
        GUID source; inject a seeded :class:`GuidFactory` for exact output.
    clock:
        Returns the timestamp written into the header.
    """

    def __init__(
        self,
        registry: TemplateRegistry | None = None,
        guids: GuidFactory | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.registry = registry if registry is not None else TemplateRegistry()
        self.guids = guids if guids is not None else GuidFactory()
        self.clock = clock

    def _template(self, key: str) -> str:
        return self.registry.get_or_create(key, templates.GENERATORS[key])

    def _header_values(self) -> dict[str, str]:
        now = self.clock()
        return {
            "DATE": now.isoformat(timespec="seconds"),
            "CREATED": str(int(now.timestamp())),
            "PROJECT_GUID": self.guids.new_guid(),
        }

    # -- full document --------------------------------------------------------

    def assemble(self, params: ParameterRecord) -> str:
        """Return the full STEP document for *params*.

        Raises
        ------
        AssemblyFailure
            If any placeholder is left unresolved.
        ValueError
            If the floor count exceeds the numbering capacity.
        """
        # 1. Root with the fixed values; STOREYS / WALLS stay open.
        root = apply_template(self._template(templates.ROOT), {
            **self._header_values(),
            "BUILDING_GUID": self.guids.new_guid(),
            "PROJECT_REL_GUID": self.guids.new_guid(),
            "PSET_GUID": self.guids.new_guid(),
            "PSET_REL_GUID": self.guids.new_guid(),
            "STOREY_REL_GUID": self.guids.new_guid(),
            "WALL_REL_GUID": self.guids.new_guid(),
            "SURFACE": step_real(params.surface_area_sqm),
            "FLOORS": params.floor_count,
            "BEDROOMS": params.bedroom_count,
            "BATHROOMS": params.bathroom_count,
            "GARAGE": ".T." if params.has_garage else ".F.",
        })

        # 2. Storeys, bottom to top.
        storey_ids: list[int] = []
        storeys: list[str] = []
        for i in range(params.floor_count):
            block = storey_block(i)
            storey_ids.append(block.base)
            storeys.append(self.render_storey(i))

        # 3. Perimeter walls, fixed order.
        wall_height = config.STOREY_HEIGHT * params.floor_count
        wall_ids: list[int] = []
        walls: list[str] = []
        for i in range(len(config.WALL_LAYOUT)):
            block = wall_block(i)
            wall_ids.append(block.base)
            walls.append(self.render_wall(i, wall_height))

        # 4. Close the open regions.
        ground = storey_block(0)
        document = apply_template(root, {
            "STOREYS": "".join(storeys),
            "WALLS": "".join(walls),
            "STOREY_REFS": step_refs(storey_ids),
            "WALL_REFS": step_refs(wall_ids),
            "GROUND_STOREY": ground.base,
        })

        leftover = find_placeholders(document)
        if leftover:
            raise AssemblyFailure(f"unresolved placeholders: {', '.join(leftover)}")

        logger.debug(
            "Assembled document: %d storeys, %d walls, %d bytes",
            len(storeys), len(walls), len(document),
        )
        return document

    def render_storey(self, index: int) -> str:
        """Render the storey block for floor *index* (0 = ground)."""
        block = storey_block(index)
        values: dict[str, object] = {
            **block.ids(STOREY_LAYOUT),
            "GUID": self.guids.new_guid(),
            "NAME": f"Storey {index + 1}",
            "ELEVATION": step_real(index * config.STOREY_HEIGHT),
        }
        return apply_template(self._template(templates.STOREY), values)

    def render_wall(self, index: int, height: float) -> str:
        """Render the wall block for side *index* of :data:`config.WALL_LAYOUT`."""
        name, x, y, (dir_x, dir_y) = config.WALL_LAYOUT[index]
        block = wall_block(index)
        values: dict[str, object] = {
            **block.ids(WALL_LAYOUT),
            "GUID": self.guids.new_guid(),
            "NAME": f"Wall {name}",
            # Walls hang off the ground storey placement.
            "HOST_PLACEMENT": entity_id(storey_block(0), STOREY_LAYOUT["PLACEMENT"]),
            "X": step_real(x),
            "Y": step_real(y),
            "DIR_X": step_real(dir_x),
            "DIR_Y": step_real(dir_y),
            "LENGTH": step_real(config.WALL_LENGTH),
            "THICKNESS": step_real(config.WALL_THICKNESS),
            "HEIGHT": step_real(height),
        }
        return apply_template(self._template(templates.WALL), values)

    # -- fallback -------------------------------------------------------------

    def minimal_document(self) -> str:
        """Return the fixed-structure document: header, project, no storeys or walls."""
        return apply_template(self._template(templates.MINIMAL), self._header_values())
