"""CLI principal (Typer).

Por qué una CLI:
- Permite usar el mismo pipeline que expone el host sin instalar nada en la
  base de datos.
- Los settings salen del entorno/.env o, con `--dsn`, de la sesión PostgreSQL.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_batch_json
from adapters.openai_chat import SummarizeClient
from adapters.settings_stores import LayeredSettingsStore
from cli import doctor
from cli.common import configure_logging, open_settings_store
from cli.ui_components import build_batch_table, build_summary_panel
from core.config import AppSettings
from core.domain.errors import SettingsLookupError, SummarizeError
from core.domain.models import BatchItem
from core.interfaces.settings_store import SettingsStore
from core.services.config_resolver import setting_name
from core.services.summarize_pipeline import hello as pipeline_hello
from core.services.summarize_pipeline import summarize_text

app = typer.Typer(no_args_is_help=True, help="Summarize text with a chat-completion model.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def _main(
    log_level: str = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, WARNING...)."),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level)


def _with_overrides(store: SettingsStore, settings: AppSettings, model: str | None, prompt: str | None) -> SettingsStore:
    if model is None and prompt is None:
        return store
    namespace = settings.settings_namespace
    return LayeredSettingsStore(
        store,
        {
            setting_name("model", namespace): model,
            setting_name("prompt", namespace): prompt,
        },
    )


def _fail(message: str, code: int = 1) -> typer.Exit:
    _err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(code=code)


@app.command()
def hello() -> None:
    """Print the integration greeting."""

    _console.print(pipeline_hello())


@app.command()
def summarize(
    text: str = typer.Argument(..., help="Text to summarize, or '-' to read stdin."),
    dsn: str = typer.Option(None, "--dsn", help="Read settings from this PostgreSQL session."),
    model: str = typer.Option(None, "--model", help="Override the model setting."),
    prompt: str = typer.Option(None, "--prompt", help="Override the prompt setting."),
    plain: bool = typer.Option(False, "--plain", help="Print only the summary text."),
) -> None:
    """Summarize TEXT and print the result."""

    if text == "-":
        text = sys.stdin.read()

    settings = AppSettings()
    try:
        with open_settings_store(settings, dsn) as store, SummarizeClient(settings) as client:
            summary = summarize_text(
                text,
                store=_with_overrides(store, settings, model, prompt),
                client=client,
                namespace=settings.settings_namespace,
            )
    except SettingsLookupError as exc:
        raise _fail(str(exc), code=2) from exc
    except SummarizeError as exc:
        raise _fail(str(exc)) from exc

    if plain:
        typer.echo(summary)
    else:
        _console.print(build_summary_panel(summary, model=model))


@app.command()
def batch(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="One text per line."),
    output: Path = typer.Option(None, "--output", "-o", help="Write results as JSON here."),
    dsn: str = typer.Option(None, "--dsn", help="Read settings from this PostgreSQL session."),
) -> None:
    """Summarize every non-empty line of INPUT_FILE.

    All-or-nothing: the first failure aborts the batch and nothing is written.
    """

    try:
        raw = input_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise _fail(f"{input_file} is not valid UTF-8: {exc.reason}", code=2) from exc

    lines = [line for line in raw.splitlines() if line.strip()]
    settings = AppSettings()
    items: list[BatchItem] = []
    try:
        with open_settings_store(settings, dsn) as store, SummarizeClient(settings) as client:
            for index, line in enumerate(lines):
                summary = summarize_text(
                    line,
                    store=store,
                    client=client,
                    namespace=settings.settings_namespace,
                )
                items.append(BatchItem(index=index, input=line, summary=summary))
    except SettingsLookupError as exc:
        raise _fail(str(exc), code=2) from exc
    except SummarizeError as exc:
        raise _fail(f"item {len(items)}: {exc}") from exc

    if output is not None:
        path = export_batch_json(items=items, output_path=output)
        _console.print(f"[green]Saved {len(items)} summaries to:[/green] {path}")
    else:
        _console.print(build_batch_table(items))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
