"""Lectura/reescritura del módulo JS con la lista canónica de palabras.

Formato esperado (fijo, basado en regex):

    // Total: 2315 words
    export const SOLUTIONS_LIST = [
      "cigar",
      "rebut",
    ];

Solo se reemplaza el bloque del array y el comentario `// Total: N words`;
el resto del fichero queda intacto.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Sequence

TOTAL_COMMENT_RE = re.compile(r"//\s*Total:\s*\d+\s*words")


class WordListFormatError(ValueError):
    """El fichero fuente no contiene el `export const <NAME> = [...]` esperado."""


@lru_cache(maxsize=8)
def _array_re(export_name: str) -> re.Pattern[str]:
    return re.compile(rf"export const {re.escape(export_name)}\s*=\s*\[([\s\S]*?)\]\s*;")


def extract_words(raw_content: str, *, export_name: str = "SOLUTIONS_LIST") -> list[str]:
    """Devuelve las entradas entrecomilladas del array, en orden."""

    match = _array_re(export_name).search(raw_content)
    if not match:
        raise WordListFormatError(f"Could not find `export const {export_name} = [...]` in source file.")

    words: list[str] = []
    for chunk in match.group(1).split(","):
        word = chunk.strip().replace('"', "").replace("'", "")
        if word:
            words.append(word)
    return words


def working_subset(words: Sequence[str], *, length: int = 5) -> list[str]:
    """Palabras (recortadas) con la longitud exigida, en el orden de la fuente."""

    trimmed = (w.strip() for w in words)
    return [w for w in trimmed if len(w) == length]


def render_array_block(words: Sequence[str], *, export_name: str = "SOLUTIONS_LIST") -> str:
    body = ",\n  ".join(f'"{w.lower()}"' for w in words)
    return f"export const {export_name} = [\n  {body}\n];"


def rewrite_word_list(
    raw_content: str,
    valid_words: Sequence[str],
    *,
    export_name: str = "SOLUTIONS_LIST",
) -> str:
    """Sustituye el array por `valid_words` y actualiza `// Total: N words`."""

    pattern = _array_re(export_name)
    if not pattern.search(raw_content):
        raise WordListFormatError(f"Could not find `export const {export_name} = [...]` in source file.")

    block = render_array_block(valid_words, export_name=export_name)
    content = pattern.sub(lambda _m: block, raw_content, count=1)
    return TOTAL_COMMENT_RE.sub(f"// Total: {len(valid_words)} words", content)
