"""CLI entry point for the IFC generator.

Usage:
    ifcai generate "A two-storey house of 150 m² with 3 bedrooms"
    ifcai render --floors 3 --garage
    ifcai questions
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ifcai import config
from ifcai.config import load_settings
from ifcai.errors import InputValidationError
from ifcai.log import setup_logging

app = typer.Typer(name="ifcai", help="Generate IFC building files from text descriptions")
console = Console()


def _service(no_llm: bool = False, native: bool = False):
    from ifcai.extraction.providers.fallback import FallbackProvider
    from ifcai.service import BuildingService

    try:
        settings = load_settings()
    except ValidationError as exc:
        console.print(f"[red]Invalid settings:[/red] {exc}")
        raise typer.Exit(1)
    if native:
        settings = settings.model_copy(update={"prefer_native": True})
    setup_logging(settings.log_level)
    provider = FallbackProvider() if no_llm else None
    return BuildingService(settings, provider=provider)


def _report(result, path: Path) -> None:
    colour = "yellow" if result.document.status == "fallback" else "green"
    console.print(f"[{colour}]{result.status}[/{colour}] {path}")
    for warning in result.warnings:
        console.print(f"  [yellow]warning:[/yellow] {warning}")


@app.command()
def generate(
    text: str = typer.Argument(..., help="Free-text building description"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    basename: str = typer.Option(config.DEFAULT_BASENAME, help="File name prefix"),
    no_llm: bool = typer.Option(False, "--no-llm", help="Use the regex extractor only"),
    native: bool = typer.Option(False, "--native", help="Prefer the ifcopenshell generator"),
) -> None:
    """Extract parameters from TEXT and write an IFC file."""
    service = _service(no_llm=no_llm, native=native)
    try:
        result = service.generate_from_text(text, basename=basename)
    except InputValidationError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    record = result.extraction.record if result.extraction else None
    if record is not None:
        console.print(f"Parameters: {record.model_dump()}")
    path = service.write(result, output_dir)
    _report(result, path)


@app.command()
def render(
    surface: float = typer.Option(config.DEFAULT_SURFACE_AREA, min=0.01, help="Surface area in m²"),
    floors: int = typer.Option(config.DEFAULT_FLOOR_COUNT, min=1, max=config.MAX_STOREYS),
    bedrooms: int = typer.Option(config.DEFAULT_BEDROOM_COUNT, min=0),
    bathrooms: int = typer.Option(config.DEFAULT_BATHROOM_COUNT, min=0),
    garage: bool = typer.Option(config.DEFAULT_HAS_GARAGE, "--garage/--no-garage"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    basename: str = typer.Option(config.DEFAULT_BASENAME, help="File name prefix"),
    native: bool = typer.Option(False, "--native", help="Prefer the ifcopenshell generator"),
) -> None:
    """Write an IFC file from explicit parameters."""
    from ifcai.extraction.schema import ParameterRecord

    service = _service(no_llm=True, native=native)
    params = ParameterRecord(
        surface_area_sqm=surface,
        floor_count=floors,
        bedroom_count=bedrooms,
        bathroom_count=bathrooms,
        has_garage=garage,
    )
    result = service.generate(params, basename=basename)
    path = service.write(result, output_dir)
    _report(result, path)


@app.command()
def questions() -> None:
    """Show the extraction questions and their defaults."""
    from ifcai.extraction.questions import QUESTIONS

    table = Table(title="Extraction questions")
    table.add_column("Field", style="cyan")
    table.add_column("Question")
    table.add_column("Default", style="green")
    for q in QUESTIONS:
        table.add_row(q.field, q.text, str(q.default))
    console.print(table)


if __name__ == "__main__":
    app()
