"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from adapters.http_client import build_async_client
from adapters.word_list_file import WordListFormatError, extract_words, working_subset
from cli.ui_components import build_doctor_table
from core.config import AppSettings, write_user_env_vars
from core.services.validation_pipeline import checkpoint_status

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_SAMPLE_WORD = "hello"


async def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return response.is_success, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


def _check_source(settings: AppSettings) -> tuple[bool, str]:
    path = settings.solutions_path
    if not path.exists():
        return False, f"{path} not found"
    try:
        words = extract_words(path.read_text(encoding="utf-8"), export_name=settings.list_export_name)
    except WordListFormatError as exc:
        return False, str(exc)
    subset = working_subset(words, length=settings.word_length)
    return True, f"{len(words)} entries, {len(subset)} of length {settings.word_length}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    paths = settings.run_paths()
    table = build_doctor_table()

    # Config
    if settings.contact:
        table.add_row("Contact", "OK", settings.user_agent)
    else:
        table.add_row("Contact", "OPTIONAL", "No contact set -> plain User-Agent")
    table.add_row(
        "Pacing",
        "OK",
        f"{settings.request_delay_seconds}s per word, {settings.fallback_delay_seconds}s before fallback",
    )

    # Ficheros
    ok_src, detail_src = _check_source(settings)
    table.add_row("Source list", "OK" if ok_src else "FAIL", detail_src)
    table.add_row("Backup", "PRESENT" if paths.backup.exists() else "NONE", str(paths.backup))

    resumable, last_index, progress_path = checkpoint_status(settings)
    if resumable:
        table.add_row("Checkpoint", "RESUMABLE", f"lastIndex={last_index} ({progress_path})")
    else:
        table.add_row("Checkpoint", "NONE", "Next run starts fresh")

    # Connectivity (best-effort)
    for label, base in (
        ("Free Dictionary", settings.primary_api_base_url),
        ("Wiktionary", settings.fallback_api_base_url),
    ):
        ok_http, detail_http = asyncio.run(_check_http(settings, f"{base.rstrip('/')}/{_SAMPLE_WORD}"))
        table.add_row(label, "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_src:
        _console.print(
            "\n[yellow]Note:[/yellow] set WORD_VALIDATOR_SOLUTIONS_PATH or pass --solutions-path to `validate`."
        )


@app.command(name="setup-contact")
def setup_contact() -> None:
    """Interactive contact setup (stored in the user config .env).

    The contact is embedded in the User-Agent sent to the dictionary APIs.
    """

    contact = typer.prompt(
        "Contact (e.g. mailto:you@example.com)",
        default="",
        show_default=False,
    ).strip()

    if not contact:
        raise typer.BadParameter("contact is required")

    env_path = write_user_env_vars({"WORD_VALIDATOR_CONTACT": contact})

    _console.print(f"[green]Saved contact to:[/green] {env_path}")
