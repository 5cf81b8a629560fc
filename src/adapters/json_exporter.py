"""Exportación JSON del informe de palabras inválidas.

Lista ordenada (orden original de la fuente) para poder revisar a mano lo que
se ha eliminado.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from adapters.atomic_writer import write_json_atomic


def export_invalid_words(*, words: Sequence[str], output_path: Path) -> Path:
    """Exporta las palabras rechazadas como array JSON UTF-8."""

    return write_json_atomic(output_path, list(words))
