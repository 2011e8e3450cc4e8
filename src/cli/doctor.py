"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.ai_completion import build_openai_client
from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.errors import CompletionConfigError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_ai_client(settings: AppSettings) -> tuple[str, str]:
    try:
        build_openai_client(settings)
    except CompletionConfigError as exc:
        return "FAIL", str(exc)
    if settings.ai_api_key:
        return "OK", "Remote AI enabled"
    return "OK", "Local OpenAI-compatible server (no key)"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="soil-assess Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    status, detail = _check_ai_client(settings)
    table.add_row("AI client", status, detail)
    table.add_row("AI base_url", "OK", settings.ai_base_url)
    table.add_row("AI model", "OK", settings.ai_model)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.soilgrids_base_url, settings))
    table.add_row("SoilGrids connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if status != "OK":
        _console.print("\n[yellow]Note:[/yellow] run `soil-assess doctor setup-ai` to store an API key.")


@app.command(name="setup-ai")
def setup_ai() -> None:
    """Interactive AI setup (stores config in the user config .env)."""

    provider = typer.prompt(
        "AI provider",
        default="openai",
        show_default=True,
    ).strip().lower()

    presets: dict[str, dict[str, str]] = {
        "openai": {"SOIL_ASSESS_AI_BASE_URL": "https://api.openai.com/v1", "SOIL_ASSESS_AI_MODEL": "gpt-4o-mini"},
        "gemini": {
            "SOIL_ASSESS_AI_BASE_URL": "https://generativelanguage.googleapis.com/v1beta/openai/",
            "SOIL_ASSESS_AI_MODEL": "gemini-2.5-flash",
        },
        "groq": {"SOIL_ASSESS_AI_BASE_URL": "https://api.groq.com/openai/v1", "SOIL_ASSESS_AI_MODEL": "llama-3.3-70b-versatile"},
        "openrouter": {"SOIL_ASSESS_AI_BASE_URL": "https://openrouter.ai/api/v1", "SOIL_ASSESS_AI_MODEL": "openai/gpt-4o-mini"},
        "ollama": {"SOIL_ASSESS_AI_BASE_URL": "http://localhost:11434/v1", "SOIL_ASSESS_AI_MODEL": "llama3"},
    }

    values = presets.get(provider, {}).copy()
    if not values:
        _console.print("[yellow]Unknown provider preset. You can still enter custom values.[/yellow]")

    base_url = typer.prompt("AI base URL", default=values.get("SOIL_ASSESS_AI_BASE_URL", ""), show_default=True).strip()
    model = typer.prompt("AI model", default=values.get("SOIL_ASSESS_AI_MODEL", ""), show_default=True).strip()
    api_key = typer.prompt("AI API key", default="", hide_input=True, show_default=False).strip()

    if not base_url or not model:
        raise typer.BadParameter("base_url and model are required")

    env_path = write_user_env_vars(
        {
            "SOIL_ASSESS_AI_BASE_URL": base_url,
            "SOIL_ASSESS_AI_MODEL": model,
            "SOIL_ASSESS_AI_API_KEY": api_key or None,
        }
    )

    _console.print(f"[green]Saved AI config to:[/green] {env_path}")
