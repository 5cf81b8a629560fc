"""Escritura atómica de ficheros.

Escribe en `<destino>.tmp` y renombra encima del destino con `os.replace`.
Atómico solo dentro de un mismo filesystem. Si el proceso muere entre la
escritura y el rename puede quedar el `.tmp` huérfano; el destino no se toca.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def temp_path_for(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def write_atomic(path: Path, content: str) -> Path:
    """Reemplaza el contenido de `path` por `content` sin escrituras parciales."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = temp_path_for(path)
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, path)
    return path


def write_json_atomic(path: Path, payload: Any) -> Path:
    return write_atomic(path, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
