"""Política de validación de una palabra (dos tiers).

1. Tier primario (Free Dictionary).
2. Si no confirma: pausa corta y tier de respaldo (Wiktionary).
3. Si ninguno confirma: inválida.

Palabras con longitud distinta de la exigida se rechazan sin tocar la red.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from core.domain.models import Verdict
from core.interfaces.definition_source import DefinitionSource

logger = logging.getLogger(__name__)


class WordValidator:
    def __init__(
        self,
        *,
        primary: DefinitionSource,
        fallback: DefinitionSource,
        fallback_delay: float = 0.4,
        word_length: int = 5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._fallback_delay = fallback_delay
        self._word_length = word_length
        self._sleep = sleep

    async def validate(self, word: str) -> Verdict:
        w = word.strip().lower()
        if len(w) != self._word_length:
            return Verdict(valid=False, reason="length")

        first = await self._primary.lookup(w)
        if first.ok:
            return Verdict(valid=True, source=self._primary.source)
        logger.debug("Primary tier rejected %r: %s", w, first.reason)

        await self._sleep(self._fallback_delay)

        second = await self._fallback.lookup(w)
        if second.ok:
            return Verdict(valid=True, source=self._fallback.source)
        logger.debug("Fallback tier rejected %r: %s", w, second.reason)

        return Verdict(valid=False)
