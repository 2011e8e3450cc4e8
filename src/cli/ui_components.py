"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import SoilData, SoilSuitabilityOutput


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite en modo `--json`)."""

    title = Text("SOIL-ASSESS", style="bold green")
    subtitle = Text("Idoneidad del suelo para cimentaciones • IA", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="green", padding=(1, 4)))


def _value_or_na(value: float | None, unit: str = "") -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f} {unit}".strip()


def build_soil_table(soil: SoilData) -> Table:
    """Tabla con los datos de SoilGrids para un punto."""

    table = Table(title=f"Soil Data ({soil.lat:.4f}, {soil.lon:.4f})")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("pH (0-5cm)", _value_or_na(soil.ph))
    table.add_row("Bulk Density (0-5cm)", _value_or_na(soil.bd, "kg/dm³"))
    return table


def build_assessment_panel(result: SoilSuitabilityOutput, *, model: str | None = None) -> Panel:
    """Panel para presentar la evaluación (el texto suele venir en Markdown)."""

    title = Text("Soil Suitability Assessment", style="bold yellow")
    subtitle = Text(f"Model: {model}", style="dim") if model else None
    return Panel(
        Markdown(result.suitability_assessment.strip()),
        title=title,
        subtitle=subtitle,
        border_style="yellow",
    )
