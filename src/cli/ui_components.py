"""Componentes de UI para CLI (Rich).

Tablas, paneles y la línea de progreso viven aquí para no mezclar detalles
visuales con la lógica de los comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Verdict
from core.services.validation_pipeline import RunSummary


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("WORD VALIDATOR", style="bold cyan")
    subtitle = Text("Free Dictionary • Wiktionary • Checkpoints", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_progress_line(position: int, total: int, word: str, verdict: Verdict) -> str:
    mark = "✅" if verdict.valid else "❌"
    suffix = f" ({verdict.source.value})" if verdict.valid and verdict.source else ""
    return f"{mark} [{position}/{total}] {word}{suffix}"


def print_progress_line(console: Console, line: str) -> None:
    """En TTY reescribe la misma línea; en pipes (tee) emite líneas separadas."""

    if console.is_terminal:
        console.print(line, end="\r", markup=False, highlight=False)
    else:
        console.print(line, markup=False, highlight=False)


def build_summary_panel(summary: RunSummary) -> Panel:
    """Panel final con los contadores de la ejecución."""

    body = Text()
    body.append(f"Kept: {len(summary.kept)}", style="bold green")
    body.append(" | ")
    body.append(f"Removed: {len(summary.removed)}", style="bold red")
    body.append(f"\nProcessed this run: {summary.processed} (resumed at {summary.resumed_from})")
    if summary.unresolved:
        body.append(f"\nDropped without verdict: {len(summary.unresolved)}", style="yellow")
    body.append(f"\nWord list rewritten: {summary.paths.solutions}", style="dim")
    body.append(f"\nInvalid words written to: {summary.paths.invalid_log}", style="dim")
    return Panel(body, title=Text("Done", style="bold green"), border_style="green")


def build_doctor_table() -> Table:
    table = Table(title="Word Validator Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
