"""CLI principal (Typer).

Comandos:
- `assess`: evalúa la idoneidad del suelo a partir de pH, densidad y descripción
  (opcionalmente completando pH/densidad desde SoilGrids con `--lat/--lon`).
- `soil`: muestra los datos de SoilGrids de un punto.
- `doctor`: diagnóstico de entorno y configuración IA.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import httpx
import openai
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.ai_completion import OpenAICompletionService
from adapters.soilgrids import fetch_soil_data
from cli import doctor
from cli.ui_components import build_assessment_panel, build_soil_table, print_banner
from core.config import AppSettings
from core.domain.models import SoilData, SoilSuitabilityOutput
from core.errors import InputValidationError, SoilAssessmentError
from core.logging import init_logging
from core.services.soil_assessment import assess_soil_suitability

app = typer.Typer(
    no_args_is_help=True,
    help="Soil suitability assessment for building foundations (AI-assisted).",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

# Errores esperables en el borde: se muestran sin traceback.
_HANDLED_ERRORS = (SoilAssessmentError, openai.OpenAIError, httpx.HTTPError, ValueError)


def _fail(exc: Exception) -> typer.Exit:
    if isinstance(exc, InputValidationError):
        _console.print(f"[red]Invalid input[/red] {escape(str(exc))}")
    else:
        _console.print(f"[red]Error ({type(exc).__name__}):[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    init_logging("DEBUG" if verbose else settings.log_level)


async def _run_assess(
    *,
    payload: dict[str, Any],
    lat: float | None,
    lon: float | None,
    settings: AppSettings,
) -> tuple[SoilSuitabilityOutput, SoilData | None]:
    soil: SoilData | None = None
    needs_soil = "soilPh" not in payload or "soilBd" not in payload
    if lat is not None and lon is not None and needs_soil:
        soil = await fetch_soil_data(lat=lat, lon=lon, settings=settings)
        if "soilPh" not in payload and soil.ph is not None:
            payload["soilPh"] = soil.ph
        if "soilBd" not in payload and soil.bd is not None:
            payload["soilBd"] = soil.bd

    completion = OpenAICompletionService(settings)
    result = await assess_soil_suitability(payload, completion=completion)
    return result, soil


@app.command()
def assess(
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Building description (size, materials, storeys)."
    ),
    ph: Optional[float] = typer.Option(None, "--ph", help="Soil pH."),
    bd: Optional[float] = typer.Option(None, "--bd", help="Soil bulk density in kg/dm³."),
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude; fills missing pH/density from SoilGrids."),
    lon: Optional[float] = typer.Option(None, "--lon", help="Longitude; fills missing pH/density from SoilGrids."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Assess soil suitability for a building foundation."""

    if (lat is None) != (lon is None):
        raise typer.BadParameter("--lat and --lon must be given together")

    settings = AppSettings()
    payload: dict[str, Any] = {}
    if ph is not None:
        payload["soilPh"] = ph
    if bd is not None:
        payload["soilBd"] = bd
    if description is not None:
        payload["buildingDescription"] = description

    if not as_json:
        print_banner(_console)

    try:
        result, soil = asyncio.run(_run_assess(payload=payload, lat=lat, lon=lon, settings=settings))
    except _HANDLED_ERRORS as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2))
        return

    if soil is not None:
        _console.print(build_soil_table(soil))
    _console.print(build_assessment_panel(result, model=settings.ai_model))


@app.command()
def soil(
    lat: float = typer.Option(..., "--lat", help="Latitude (WGS84)."),
    lon: float = typer.Option(..., "--lon", help="Longitude (WGS84)."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Show SoilGrids pH and bulk density (0-5cm) for a point."""

    settings = AppSettings()
    try:
        data = asyncio.run(fetch_soil_data(lat=lat, lon=lon, settings=settings))
    except _HANDLED_ERRORS as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(json.dumps(data.model_dump(), ensure_ascii=False, indent=2))
        return
    _console.print(build_soil_table(data))


def run() -> None:
    app()
