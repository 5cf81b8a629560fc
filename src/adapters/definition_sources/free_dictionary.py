"""Tier primario: Free Dictionary API (dictionaryapi.dev).

Éxito = respuesta 2xx cuyo JSON es una lista con al menos una entrada con
`meanings` no vacío.
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import RetryingFetcher
from core.domain.models import TierResult, VerdictSource


def has_meanings(payload: Any) -> bool:
    if not isinstance(payload, list):
        return False
    for entry in payload:
        if isinstance(entry, dict) and entry.get("meanings"):
            return True
    return False


class FreeDictionarySource:
    """Consulta `GET {base}/{word}` en Free Dictionary."""

    source = VerdictSource.PRIMARY
    _base_url = "https://api.dictionaryapi.dev/api/v2/entries/en"

    def __init__(self, fetcher: RetryingFetcher, *, base_url: str | None = None) -> None:
        self._fetcher = fetcher
        self._base_url = (base_url or self._base_url).rstrip("/")

    def url_for(self, word: str) -> str:
        return f"{self._base_url}/{quote(word, safe='')}"

    async def lookup(self, word: str) -> TierResult:
        try:
            resp = await self._fetcher.get(self.url_for(word), label=word)
        except (httpx.HTTPError, asyncio.TimeoutError, TimeoutError) as exc:
            return TierResult(ok=False, reason=f"request_failed:{type(exc).__name__}")

        if not resp.is_success:
            return TierResult(ok=False, reason=f"http_{resp.status_code}")

        try:
            data = resp.json()
        except ValueError:
            return TierResult(ok=False, reason="non_json_response")

        if not has_meanings(data):
            return TierResult(ok=False, reason="no_meanings")
        return TierResult(ok=True)
