"""Tests for generator selection and the native ifcopenshell generator."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from ifcai.extraction.schema import ParameterRecord
from ifcai.step import native
from ifcai.step.assembler import StepAssembler
from ifcai.step.generators import TemplateGenerator, select_generator
from ifcai.step.native import IfcOpenShellGenerator, has_ifcopenshell

requires_ifcopenshell = pytest.mark.skipif(
    not has_ifcopenshell(), reason="ifcopenshell not installed",
)


class TestSelection:
    def test_default_is_template(self, assembler: StepAssembler) -> None:
        generator = select_generator(assembler=assembler)
        assert isinstance(generator, TemplateGenerator)
        assert generator.assembler is assembler

    def test_native_missing_falls_back(self) -> None:
        with patch.object(native, "_HAS_IFCOPENSHELL", False):
            generator = select_generator(prefer_native=True)
        assert isinstance(generator, TemplateGenerator)

    def test_missing_native_refuses_to_generate(self) -> None:
        with patch.object(native, "_HAS_IFCOPENSHELL", False):
            generator = IfcOpenShellGenerator()
            assert generator.is_available() is False
            with pytest.raises(RuntimeError):
                generator.generate(ParameterRecord())

    @requires_ifcopenshell
    def test_native_selected_when_preferred(self) -> None:
        generator = select_generator(prefer_native=True)
        assert generator.name == "ifcopenshell"

    def test_template_generator(self, assembler: StepAssembler) -> None:
        generator = TemplateGenerator(assembler)
        assert generator.name == "template"
        assert generator.is_available() is True
        assert generator.generate(ParameterRecord()).endswith("END-ISO-10303-21;")


class TestPlacementMatrices:
    def test_north_wall_centred(self) -> None:
        matrix = native._wall_matrix(0.0, 5.0, 1.0, 0.0)
        assert matrix[0, 3] == pytest.approx(-5.0)
        assert matrix[1, 3] == pytest.approx(4.9)
        assert tuple(matrix[0:3, 0]) == (1.0, 0.0, 0.0)

    def test_east_wall_rotated(self) -> None:
        matrix = native._wall_matrix(5.0, 0.0, 0.0, 1.0)
        assert tuple(matrix[0:3, 0]) == (0.0, 1.0, 0.0)
        assert tuple(matrix[0:3, 1]) == (-1.0, 0.0, 0.0)
        assert matrix[0, 3] == pytest.approx(5.1)
        assert matrix[1, 3] == pytest.approx(-5.0)

    def test_elevation(self) -> None:
        assert native._elevation_matrix(6.0)[2, 3] == 6.0


@requires_ifcopenshell
class TestIfcOpenShellGenerator:
    @pytest.fixture
    def document(self) -> str:
        params = ParameterRecord(surface_area_sqm=150, floor_count=2, has_garage=True)
        return IfcOpenShellGenerator().generate(params)

    def test_envelope(self, document: str) -> None:
        assert document.startswith("ISO-10303-21;")
        assert document.rstrip().endswith("END-ISO-10303-21;")

    def test_storeys_and_walls(self, document: str) -> None:
        assert document.count("IFCBUILDINGSTOREY(") == 2
        assert document.count("IFCWALL(") == 4

    def test_property_set(self, document: str) -> None:
        assert "Ifcai_BuildingBrief" in document
        assert "GrossFloorArea" in document
        assert "HasGarage" in document
