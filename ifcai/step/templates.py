"""STEP entity templates and the registry that caches them.

Templates are structurally fixed: one per shape (root document, storey,
wall, minimal fallback).  Only the substituted values vary per request,
so each template is generated once and reused for the life of the
registry.

Placeholders use the ``{{NAME}}`` form; see :mod:`ifcai.step.renderer`.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from ifcai import config

logger = logging.getLogger(__name__)

ROOT = "root"
STOREY = "storey"
WALL = "wall"
MINIMAL = "minimal"


class TemplateRegistry:
    """Memoising store of template strings keyed by name.

    The first :meth:`get_or_create` call for a key runs its generator;
    every later call returns the stored template, even when a different
    generator is passed.
    """

    def __init__(self) -> None:
        self._templates: dict[str, str] = {}
        self._lock = threading.Lock()

    def get_or_create(self, key: str, generator: Callable[[], str]) -> str:
        with self._lock:
            template = self._templates.get(key)
            if template is not None:
                logger.debug("Using cached template %r", key)
                return template
            logger.debug("Creating template %r", key)
            template = generator()
            self._templates[key] = template
            return template

    def clear(self) -> None:
        with self._lock:
            self._templates.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)


# ---------------------------------------------------------------------------
# Template generators
# ---------------------------------------------------------------------------


def _header() -> str:
    return (
        "ISO-10303-21;\n"
        "HEADER;\n"
        "FILE_DESCRIPTION(('ViewDefinition [CoordinationView]'),'2;1');\n"
        f"FILE_NAME('{config.PROJECT_NAME}','{{{{DATE}}}}',('{config.AUTHOR}'),"
        f"('{config.APPLICATION_ID}'),'','','');\n"
        "FILE_SCHEMA(('IFC4'));\n"
        "ENDSEC;\n"
    )


def _owner_entities(owner: int, person_org: int, app: int, person: int, org: int) -> str:
    return (
        f"#{owner}=IFCOWNERHISTORY(#{person_org},#{app},$,.ADDED.,$,$,$,{{{{CREATED}}}});\n"
        f"#{person_org}=IFCPERSONANDORGANIZATION(#{person},#{org},$);\n"
        f"#{app}=IFCAPPLICATION(#{org},'{config.APPLICATION_VERSION}',"
        f"'{config.AUTHOR}','{config.APPLICATION_ID}');\n"
        f"#{person}=IFCPERSON($,'User',$,$,$,$,$,$);\n"
        f"#{org}=IFCORGANIZATION($,'{config.ORGANIZATION}',$,$,$);\n"
    )


def root_template() -> str:
    """Full building document with ``STOREYS`` and ``WALLS`` regions."""
    return (
        _header()
        + "DATA;\n"
        f"#1=IFCPROJECT('{{{{PROJECT_GUID}}}}',#2,'{config.PROJECT_NAME}',$,$,$,$,(#20),#3);\n"
        + _owner_entities(2, 4, 5, 15, 16)
        + "#3=IFCUNITASSIGNMENT((#6,#7,#8,#9,#10,#11,#12,#13,#14));\n"
        "#6=IFCSIUNIT(*,.LENGTHUNIT.,$,.METRE.);\n"
        "#7=IFCSIUNIT(*,.AREAUNIT.,$,.SQUARE_METRE.);\n"
        "#8=IFCSIUNIT(*,.VOLUMEUNIT.,$,.CUBIC_METRE.);\n"
        "#9=IFCSIUNIT(*,.PLANEANGLEUNIT.,$,.RADIAN.);\n"
        "#10=IFCSIUNIT(*,.MASSUNIT.,.KILO.,.GRAM.);\n"
        "#11=IFCSIUNIT(*,.TIMEUNIT.,$,.SECOND.);\n"
        "#12=IFCSIUNIT(*,.THERMODYNAMICTEMPERATUREUNIT.,$,.DEGREE_CELSIUS.);\n"
        "#13=IFCSIUNIT(*,.LUMINOUSINTENSITYUNIT.,$,.CANDELA.);\n"
        "#14=IFCSIUNIT(*,.SOLIDANGLEUNIT.,$,.STERADIAN.);\n"
        "#20=IFCGEOMETRICREPRESENTATIONCONTEXT($,'Model',3,1.0E-5,#21,$);\n"
        "#21=IFCAXIS2PLACEMENT3D(#22,$,$);\n"
        "#22=IFCCARTESIANPOINT((0.0,0.0,0.0));\n"
        "/* Building */\n"
        f"#100=IFCBUILDING('{{{{BUILDING_GUID}}}}',#2,'{config.BUILDING_NAME}',"
        "$,$,#101,$,$,.ELEMENT.,$,$,$);\n"
        "#101=IFCLOCALPLACEMENT($,#102);\n"
        "#102=IFCAXIS2PLACEMENT3D(#103,$,$);\n"
        "#103=IFCCARTESIANPOINT((0.0,0.0,0.0));\n"
        "#104=IFCRELAGGREGATES('{{PROJECT_REL_GUID}}',#2,$,$,#1,(#100));\n"
        "#110=IFCPROPERTYSET('{{PSET_GUID}}',#2,'Ifcai_BuildingBrief',$,"
        "(#111,#112,#113,#114,#115));\n"
        "#111=IFCPROPERTYSINGLEVALUE('GrossFloorArea',$,IFCAREAMEASURE({{SURFACE}}),$);\n"
        "#112=IFCPROPERTYSINGLEVALUE('NumberOfStoreys',$,IFCINTEGER({{FLOORS}}),$);\n"
        "#113=IFCPROPERTYSINGLEVALUE('NumberOfBedrooms',$,IFCINTEGER({{BEDROOMS}}),$);\n"
        "#114=IFCPROPERTYSINGLEVALUE('NumberOfBathrooms',$,IFCINTEGER({{BATHROOMS}}),$);\n"
        "#115=IFCPROPERTYSINGLEVALUE('HasGarage',$,IFCBOOLEAN({{GARAGE}}),$);\n"
        "#116=IFCRELDEFINESBYPROPERTIES('{{PSET_REL_GUID}}',#2,$,$,(#100),#110);\n"
        "/* Storeys */\n"
        "{{STOREYS}}"
        "/* Walls */\n"
        "{{WALLS}}"
        "/* Spatial structure */\n"
        f"#{config.RELATIONSHIP_BASE}=IFCRELAGGREGATES('{{{{STOREY_REL_GUID}}}}',#2,$,$,"
        "#100,{{STOREY_REFS}});\n"
        f"#{config.RELATIONSHIP_BASE + 1}=IFCRELCONTAINEDINSPATIALSTRUCTURE("
        "'{{WALL_REL_GUID}}',#2,$,$,{{WALL_REFS}},#{{GROUND_STOREY}});\n"
        "ENDSEC;\n"
        "END-ISO-10303-21;"
    )


def storey_template() -> str:
    """One building storey, placed relative to the building."""
    return (
        "#{{STOREY}}=IFCBUILDINGSTOREY('{{GUID}}',#2,'{{NAME}}',$,$,#{{PLACEMENT}},"
        "$,$,.ELEMENT.,{{ELEVATION}});\n"
        "#{{PLACEMENT}}=IFCLOCALPLACEMENT(#101,#{{AXIS}});\n"
        "#{{AXIS}}=IFCAXIS2PLACEMENT3D(#{{ORIGIN}},$,$);\n"
        "#{{ORIGIN}}=IFCCARTESIANPOINT((0.0,0.0,{{ELEVATION}}));\n"
    )


def wall_template() -> str:
    """One perimeter wall: placement chain plus an extruded rectangle body."""
    return (
        "#{{WALL}}=IFCWALL('{{GUID}}',#2,'{{NAME}}',$,$,#{{PLACEMENT}},#{{SHAPE}},"
        "$,.STANDARD.);\n"
        "#{{PLACEMENT}}=IFCLOCALPLACEMENT(#{{HOST_PLACEMENT}},#{{AXIS}});\n"
        "#{{AXIS}}=IFCAXIS2PLACEMENT3D(#{{ORIGIN}},#{{AXIS_Z}},#{{REF_DIR}});\n"
        "#{{ORIGIN}}=IFCCARTESIANPOINT(({{X}},{{Y}},0.0));\n"
        "#{{AXIS_Z}}=IFCDIRECTION((0.0,0.0,1.0));\n"
        "#{{REF_DIR}}=IFCDIRECTION(({{DIR_X}},{{DIR_Y}},0.0));\n"
        "#{{SHAPE}}=IFCPRODUCTDEFINITIONSHAPE($,$,(#{{BODY}}));\n"
        "#{{BODY}}=IFCSHAPEREPRESENTATION(#20,'Body','SweptSolid',(#{{SOLID}}));\n"
        "#{{SOLID}}=IFCEXTRUDEDAREASOLID(#{{PROFILE}},#{{SOLID_AXIS}},#{{EXTRUSION}},"
        "{{HEIGHT}});\n"
        "#{{PROFILE}}=IFCRECTANGLEPROFILEDEF(.AREA.,$,#{{PROFILE_AXIS}},{{LENGTH}},"
        "{{THICKNESS}});\n"
        "#{{SOLID_AXIS}}=IFCAXIS2PLACEMENT3D(#{{SOLID_ORIGIN}},$,$);\n"
        "#{{EXTRUSION}}=IFCDIRECTION((0.0,0.0,1.0));\n"
        "#{{PROFILE_AXIS}}=IFCAXIS2PLACEMENT2D(#{{PROFILE_ORIGIN}},$);\n"
        "#{{SOLID_ORIGIN}}=IFCCARTESIANPOINT((0.0,0.0,0.0));\n"
        "#{{PROFILE_ORIGIN}}=IFCCARTESIANPOINT((0.0,0.0));\n"
    )


def minimal_template() -> str:
    """Project-only document used when full assembly fails."""
    return (
        _header()
        + "DATA;\n"
        f"#1=IFCPROJECT('{{{{PROJECT_GUID}}}}',#2,'{config.PROJECT_NAME}',$,$,$,$,$,$);\n"
        + _owner_entities(2, 3, 4, 5, 6)
        + "ENDSEC;\n"
        "END-ISO-10303-21;"
    )


GENERATORS: dict[str, Callable[[], str]] = {
    ROOT: root_template,
    STOREY: storey_template,
    WALL: wall_template,
    MINIMAL: minimal_template,
}
