"""Native IFC generation — wraps ifcopenshell when available.

Builds the same box-shaped building as the template assembler (project,
building, one storey per floor, four perimeter walls, a brief property
set) through ``ifcopenshell.api``.  Any exception raised here makes the
service fall back to the template generator.
"""

from __future__ import annotations

import logging

from ifcai import config
from ifcai.extraction.schema import ParameterRecord
from ifcai.step.generators import BuildingGenerator

logger = logging.getLogger(__name__)

# Runtime detection of ifcopenshell
_HAS_IFCOPENSHELL = False
try:
    import ifcopenshell  # noqa: F401
    import ifcopenshell.api  # noqa: F401

    _HAS_IFCOPENSHELL = True
except ImportError:
    pass


def has_ifcopenshell() -> bool:
    """Return True if ifcopenshell is available at runtime."""
    return _HAS_IFCOPENSHELL


def _wall_matrix(x: float, y: float, dir_x: float, dir_y: float):
    """Placement matrix putting a wall's start corner so it is centred on (x, y)."""
    import numpy as np

    half_l = config.WALL_LENGTH / 2
    half_t = config.WALL_THICKNESS / 2
    # local X runs along the wall, local Y across its thickness
    perp_x, perp_y = -dir_y, dir_x
    matrix = np.eye(4)
    matrix[0:3, 0] = (dir_x, dir_y, 0.0)
    matrix[0:3, 1] = (perp_x, perp_y, 0.0)
    matrix[0:3, 3] = (
        x - dir_x * half_l - perp_x * half_t,
        y - dir_y * half_l - perp_y * half_t,
        0.0,
    )
    return matrix


def _elevation_matrix(z: float):
    import numpy as np

    matrix = np.eye(4)
    matrix[2, 3] = z
    return matrix


class IfcOpenShellGenerator(BuildingGenerator):
    """Generator that authors the building with the ifcopenshell API."""

    @property
    def name(self) -> str:
        return "ifcopenshell"

    def is_available(self) -> bool:
        return _HAS_IFCOPENSHELL

    def generate(self, params: ParameterRecord) -> str:
        if not _HAS_IFCOPENSHELL:
            raise RuntimeError("ifcopenshell is not installed")

        import ifcopenshell
        import ifcopenshell.api

        run = ifcopenshell.api.run
        model = ifcopenshell.file(schema="IFC4")

        project = run("root.create_entity", model, ifc_class="IfcProject", name=config.PROJECT_NAME)
        run("unit.assign_unit", model)
        context = run("context.add_context", model, context_type="Model")
        body = run(
            "context.add_context", model,
            context_type="Model", context_identifier="Body",
            target_view="MODEL_VIEW", parent=context,
        )

        building = run("root.create_entity", model, ifc_class="IfcBuilding", name=config.BUILDING_NAME)
        run("aggregate.assign_object", model, relating_object=project, products=[building])

        storeys = []
        for i in range(params.floor_count):
            elevation = i * config.STOREY_HEIGHT
            storey = run(
                "root.create_entity", model,
                ifc_class="IfcBuildingStorey", name=f"Storey {i + 1}",
            )
            storey.Elevation = elevation
            run("geometry.edit_object_placement", model, product=storey,
                matrix=_elevation_matrix(elevation))
            storeys.append(storey)
        run("aggregate.assign_object", model, relating_object=building, products=storeys)

        height = config.STOREY_HEIGHT * params.floor_count
        walls = []
        for name, x, y, (dir_x, dir_y) in config.WALL_LAYOUT:
            wall = run("root.create_entity", model, ifc_class="IfcWall", name=f"Wall {name}")
            representation = run(
                "geometry.add_wall_representation", model,
                context=body, length=config.WALL_LENGTH,
                height=height, thickness=config.WALL_THICKNESS,
            )
            run("geometry.assign_representation", model, product=wall, representation=representation)
            run("geometry.edit_object_placement", model, product=wall,
                matrix=_wall_matrix(x, y, dir_x, dir_y))
            walls.append(wall)
        run("spatial.assign_container", model, relating_structure=storeys[0], products=walls)

        pset = run("pset.add_pset", model, product=building, name="Ifcai_BuildingBrief")
        run("pset.edit_pset", model, pset=pset, properties={
            "GrossFloorArea": float(params.surface_area_sqm),
            "NumberOfStoreys": params.floor_count,
            "NumberOfBedrooms": params.bedroom_count,
            "NumberOfBathrooms": params.bathroom_count,
            "HasGarage": params.has_garage,
        })

        logger.info("Authored IFC model with ifcopenshell (%d storeys)", len(storeys))
        return model.to_string()
