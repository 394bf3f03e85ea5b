"""Tests for StepAssembler — full documents, numbering and the minimal fallback."""

from __future__ import annotations

import random
import re

import pytest

from ifcai.errors import AssemblyFailure
from ifcai.extraction.schema import ParameterRecord
from ifcai.step import templates
from ifcai.step.assembler import StepAssembler
from ifcai.step.ids import GuidFactory
from ifcai.step.renderer import find_placeholders
from ifcai.step.templates import TemplateRegistry

from helpers import entity_ids, fixed_clock, referenced_ids

SCENARIO = ParameterRecord(
    surface_area_sqm=150,
    floor_count=2,
    bedroom_count=3,
    bathroom_count=2,
    has_garage=True,
)


def _lines(document: str, entity: str) -> list[str]:
    return [line for line in document.splitlines() if f"={entity}(" in line]


# ---------------------------------------------------------------------------
# Document structure
# ---------------------------------------------------------------------------


class TestDocumentStructure:
    def test_start_and_end_markers(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(ParameterRecord())
        assert doc.startswith("ISO-10303-21;")
        assert doc.endswith("END-ISO-10303-21;")

    def test_no_placeholders_left(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(SCENARIO)
        assert find_placeholders(doc) == []
        assert "{{" not in doc

    @pytest.mark.parametrize("floors", [1, 2, 5, 10])
    def test_storey_count_and_ids(self, assembler: StepAssembler, floors: int) -> None:
        doc = assembler.assemble(ParameterRecord(floor_count=floors))
        storeys = _lines(doc, "IFCBUILDINGSTOREY")
        assert len(storeys) == floors
        ids = [int(re.match(r"#(\d+)=", line).group(1)) for line in storeys]
        assert ids == [200 + 10 * i for i in range(floors)]

    @pytest.mark.parametrize("floors", [1, 3, 10])
    def test_exactly_four_walls(self, assembler: StepAssembler, floors: int) -> None:
        doc = assembler.assemble(ParameterRecord(floor_count=floors))
        walls = _lines(doc, "IFCWALL")
        ids = [int(re.match(r"#(\d+)=", line).group(1)) for line in walls]
        assert ids == [300, 320, 340, 360]

    @pytest.mark.parametrize("floors", [1, 4, 10])
    def test_entity_ids_unique(self, assembler: StepAssembler, floors: int) -> None:
        ids = entity_ids(assembler.assemble(ParameterRecord(floor_count=floors)))
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize("floors", [1, 2, 10])
    def test_every_reference_resolves(self, assembler: StepAssembler, floors: int) -> None:
        doc = assembler.assemble(ParameterRecord(floor_count=floors))
        assert referenced_ids(doc) <= set(entity_ids(doc))

    def test_storeys_precede_walls(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(ParameterRecord(floor_count=3))
        assert doc.index("IFCBUILDINGSTOREY") < doc.index("IFCWALL(")

    def test_wall_order(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(ParameterRecord())
        names = re.findall(r"IFCWALL\('[0-9a-f]+',#2,'Wall (\w+)'", doc)
        assert names == ["North", "South", "East", "West"]

    def test_too_many_floors_raises(self, assembler: StepAssembler) -> None:
        with pytest.raises(ValueError):
            assembler.assemble(ParameterRecord(floor_count=11))


# ---------------------------------------------------------------------------
# Worked scenario: 150 m², two storeys, garage
# ---------------------------------------------------------------------------


class TestScenario:
    def test_storey_elevations(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(SCENARIO)
        storeys = _lines(doc, "IFCBUILDINGSTOREY")
        assert "'Storey 1'" in storeys[0]
        assert storeys[0].endswith(",.ELEMENT.,0.0);")
        assert "'Storey 2'" in storeys[1]
        assert storeys[1].endswith(",.ELEMENT.,3.0);")
        assert "#203=IFCCARTESIANPOINT((0.0,0.0,0.0));" in doc
        assert "#213=IFCCARTESIANPOINT((0.0,0.0,3.0));" in doc

    def test_wall_height_spans_all_floors(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(SCENARIO)
        solids = _lines(doc, "IFCEXTRUDEDAREASOLID")
        assert len(solids) == 4
        assert all(line.endswith(",6.0);") for line in solids)

    def test_wall_geometry(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(SCENARIO)
        assert "#303=IFCCARTESIANPOINT((0.0,5.0,0.0));" in doc
        assert "#323=IFCCARTESIANPOINT((0.0,-5.0,0.0));" in doc
        assert "#343=IFCCARTESIANPOINT((5.0,0.0,0.0));" in doc
        assert "#363=IFCCARTESIANPOINT((-5.0,0.0,0.0));" in doc
        assert "#345=IFCDIRECTION((0.0,1.0,0.0));" in doc
        assert "#313=IFCRECTANGLEPROFILEDEF(.AREA.,$,#316,10.0,0.2);" in doc

    def test_walls_placed_on_ground_storey(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(SCENARIO)
        assert "#301=IFCLOCALPLACEMENT(#201,#302);" in doc
        assert "#361=IFCLOCALPLACEMENT(#201,#362);" in doc

    def test_property_set(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(SCENARIO)
        assert "IFCAREAMEASURE(150.0)" in doc
        assert "IFCPROPERTYSET(" in doc
        assert "'Ifcai_BuildingBrief'" in doc
        assert "Pset_" not in doc
        assert "'NumberOfStoreys',$,IFCINTEGER(2)" in doc
        assert "'NumberOfBedrooms',$,IFCINTEGER(3)" in doc
        assert "'NumberOfBathrooms',$,IFCINTEGER(2)" in doc
        assert "IFCBOOLEAN(.T.)" in doc

    def test_no_garage_is_false(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(ParameterRecord(has_garage=False))
        assert "IFCBOOLEAN(.F.)" in doc

    def test_spatial_relationships(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(SCENARIO)
        assert re.search(r"^#400=IFCRELAGGREGATES\('[0-9a-f]{32}',#2,\$,\$,#100,\(#200,#210\)\);$",
                         doc, re.M)
        assert re.search(
            r"^#401=IFCRELCONTAINEDINSPATIALSTRUCTURE\('[0-9a-f]{32}',#2,\$,\$,"
            r"\(#300,#320,#340,#360\),#200\);$",
            doc, re.M,
        )

    def test_header_timestamp(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(SCENARIO)
        assert "'2026-01-02T03:04:05+00:00'" in doc
        created = int(fixed_clock().timestamp())
        assert f",.ADDED.,$,$,$,{created});" in doc


# ---------------------------------------------------------------------------
# Reproducibility
# ---------------------------------------------------------------------------


class TestReproducibility:
    def _assembler(self, seed: int) -> StepAssembler:
        return StepAssembler(TemplateRegistry(), GuidFactory(random.Random(seed)), fixed_clock)

    def test_seeded_output_is_identical(self) -> None:
        assert self._assembler(7).assemble(SCENARIO) == self._assembler(7).assemble(SCENARIO)

    def test_structure_independent_of_guids(self) -> None:
        a = self._assembler(1).assemble(SCENARIO)
        b = self._assembler(2).assemble(SCENARIO)
        assert a != b
        assert entity_ids(a) == entity_ids(b)
        strip = re.compile(r"'[0-9a-f]{32}'")
        assert strip.sub("''", a) == strip.sub("''", b)

    def test_guids_unique_within_document(self, assembler: StepAssembler) -> None:
        doc = assembler.assemble(ParameterRecord(floor_count=5))
        guids = re.findall(r"'([0-9a-f]{32})'", doc)
        # project, building, 5 relationship/pset guids, 5 storeys, 4 walls
        assert len(guids) == 1 + 1 + 5 + 5 + 4
        assert len(set(guids)) == len(guids)


# ---------------------------------------------------------------------------
# Registry use and failure modes
# ---------------------------------------------------------------------------


class TestRegistryAndFailures:
    def test_templates_created_once(self, assembler: StepAssembler) -> None:
        assembler.assemble(ParameterRecord(floor_count=3))
        assert len(assembler.registry) == 3
        assembler.assemble(ParameterRecord(floor_count=1))
        assert len(assembler.registry) == 3

    def test_unresolved_placeholder_raises(self, guids: GuidFactory) -> None:
        registry = TemplateRegistry()
        registry.get_or_create(templates.ROOT, lambda: templates.root_template() + "{{BOGUS}}")
        assembler = StepAssembler(registry, guids, fixed_clock)
        with pytest.raises(AssemblyFailure, match="BOGUS"):
            assembler.assemble(ParameterRecord())

    def test_minimal_document(self, assembler: StepAssembler) -> None:
        doc = assembler.minimal_document()
        assert doc.startswith("ISO-10303-21;")
        assert doc.endswith("END-ISO-10303-21;")
        assert "IFCPROJECT(" in doc
        assert "IFCBUILDINGSTOREY" not in doc
        assert "IFCWALL" not in doc
        assert find_placeholders(doc) == []
        assert referenced_ids(doc) <= set(entity_ids(doc))
