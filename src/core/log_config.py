"""Configuración de logging (stdlib `logging` + `rich`).

Los módulos usan `logging.getLogger(__name__)`; aquí solo se instala el
handler de Rich en stderr para que los avisos (429, reintentos) no pisen la
línea de progreso de stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx loguea cada request en INFO; demasiado ruido para un batch.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
