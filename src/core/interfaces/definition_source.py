"""Contrato de un tier de diccionario.

Protocol estructural: Free Dictionary, Wiktionary o un stub de test son
intercambiables para el validador.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import TierResult, VerdictSource


@runtime_checkable
class DefinitionSource(Protocol):
    """Contrato mínimo para un servicio de definiciones.

    Reglas:
    - `lookup` es asíncrono porque hace I/O (HTTP).
    - Nunca lanza por fallos del propio servicio: los devuelve como
      `TierResult(ok=False, reason=...)`.
    """

    source: VerdictSource

    async def lookup(self, word: str) -> TierResult:
        """Consulta `word` (ya en minúsculas) y dice si el servicio la reconoce."""

        ...
