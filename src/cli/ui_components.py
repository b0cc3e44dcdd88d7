"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import BatchItem, ResolvedConfig


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("pg-summarizer", style="bold cyan")
    subtitle = Text("Resúmenes de texto • Chat completions", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def mask_secret(value: str | None) -> str:
    if not value:
        return "-"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:3]}…{value[-4:]}"


def build_summary_panel(summary: str, *, model: str | None = None) -> Panel:
    body = Text(summary)
    if model:
        body.append(f"\n\nModelo: {model}", style="dim")
    return Panel(body, title=Text("Resumen", style="bold yellow"), border_style="yellow")


def build_config_table(config: ResolvedConfig) -> Table:
    """Tabla con la config resuelta (API key enmascarada)."""

    table = Table(title="Resolved settings")
    table.add_column("Setting", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("api_key", mask_secret(config.api_key))
    table.add_row("model", config.model)
    table.add_row("prompt", config.prompt)
    return table


def build_batch_table(items: list[BatchItem], *, max_chars: int = 80) -> Table:
    table = Table(title="Batch summaries")
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Input", style="white")
    table.add_column("Summary", style="magenta")
    for item in items:
        source = item.input if len(item.input) <= max_chars else item.input[: max_chars - 1] + "…"
        table.add_row(str(item.index), source, item.summary)
    return table
