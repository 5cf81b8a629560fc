"""CLI principal (Typer).

Comandos:
- `validate`: ejecuta (o reanuda) la validación de la lista canónica.
- `doctor`: diagnósticos y configuración del contacto.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from cli import doctor
from cli.ui_components import build_summary_panel, format_progress_line, print_banner, print_progress_line
from core.config import AppSettings
from core.domain.models import Verdict
from core.log_config import configure_logging
from core.services.validation_pipeline import PipelineHooks, validate_word_list

app = typer.Typer(no_args_is_help=True, help="Validate a word list against Free Dictionary and Wiktionary.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
logger = logging.getLogger(__name__)


def _build_settings(overrides: dict[str, Any]) -> AppSettings:
    try:
        return AppSettings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def validate(
    solutions_path: Optional[Path] = typer.Option(None, "--solutions-path", help="JS module with the word array."),
    retries: Optional[int] = typer.Option(None, "--retries", min=0, help="Retries per request after the first attempt."),
    delay: Optional[float] = typer.Option(None, "--delay", min=0.0, help="Pause after every word (seconds)."),
    fallback_delay: Optional[float] = typer.Option(
        None, "--fallback-delay", min=0.0, help="Pause before querying the fallback tier (seconds)."
    ),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", min=1, help="Save the checkpoint every N words."),
    contact: Optional[str] = typer.Option(None, "--contact", help="Contact embedded in the User-Agent."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    """Validate every word, resuming from the last checkpoint if one exists."""

    settings = _build_settings(
        {
            "solutions_path": solutions_path,
            "max_retries": retries,
            "request_delay_seconds": delay,
            "fallback_delay_seconds": fallback_delay,
            "batch_save_interval": batch_size,
            "contact": contact,
            "log_level": log_level,
        }
    )
    configure_logging(settings.log_level)

    if not no_banner:
        print_banner(_console)

    def on_progress(position: int, total: int, word: str, verdict: Verdict) -> None:
        print_progress_line(_console, format_progress_line(position, total, word, verdict))

    hooks = PipelineHooks(message=_console.print, progress=on_progress)

    try:
        summary = asyncio.run(validate_word_list(settings=settings, hooks=hooks))
    except KeyboardInterrupt:
        _console.print("\n[yellow]Interrupted. The last saved checkpoint will be resumed on the next run.[/yellow]")
        raise typer.Exit(code=130)
    except Exception:
        logger.exception("Fatal error")
        raise typer.Exit(code=1)

    # Evita que el panel final pise la última línea de progreso en TTY.
    if _console.is_terminal:
        _console.print()
    _console.print(build_summary_panel(summary))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
