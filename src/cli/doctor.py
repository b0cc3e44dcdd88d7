"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from cli.common import open_settings_store
from cli.ui_components import build_config_table, print_banner
from core.config import DEFAULT_MODEL, AppSettings, write_user_env_vars
from core.domain.errors import MissingApiKeyError, SettingsLookupError
from core.services.config_resolver import resolve_config

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

DOCTOR_TIMEOUT_SECONDS = 10.0


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer (even 401/405) proves the endpoint is reachable.

    Always bounded, even when summarize calls run without a timeout.
    """

    try:
        with build_client(settings, timeout=httpx.Timeout(DOCTOR_TIMEOUT_SECONDS)) as client:
            response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run(
    dsn: str = typer.Option(None, "--dsn", help="Check settings of this PostgreSQL session."),
    skip_network: bool = typer.Option(False, "--skip-network", help="Do not contact the endpoint."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="pg-summarizer Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    config = None
    try:
        with open_settings_store(settings, dsn) as store:
            config = resolve_config(store, namespace=settings.settings_namespace)
        table.add_row("API key", "OK", "Configured")
    except MissingApiKeyError as exc:
        table.add_row("API key", "FAIL", str(exc))
    except SettingsLookupError as exc:
        table.add_row("Settings store", "FAIL", str(exc))

    table.add_row("Namespace", "OK", settings.settings_namespace)
    table.add_row("Endpoint", "OK", settings.api_url)
    timeout = "none" if settings.http_timeout_seconds is None else f"{settings.http_timeout_seconds}s"
    table.add_row("HTTP timeout", "OK", timeout)

    if not skip_network:
        ok_http, detail_http = _check_http(settings.api_url, settings)
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)
    if config is not None:
        _console.print(build_config_table(config))
    else:
        _console.print(
            "\n[yellow]Note:[/yellow] run `pg-summarizer doctor setup` or set PG_SUMMARIZER_API_KEY."
        )
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    model = typer.prompt("Model", default=DEFAULT_MODEL, show_default=True).strip()
    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    prompt = typer.prompt("System prompt (empty = default)", default="", show_default=False).strip()

    if not api_key:
        raise typer.BadParameter("api key is required")

    env_path = write_user_env_vars(
        {
            "PG_SUMMARIZER_API_KEY": api_key,
            "PG_SUMMARIZER_MODEL": model or None,
            "PG_SUMMARIZER_PROMPT": prompt or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
