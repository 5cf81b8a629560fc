"""Tier de respaldo: endpoint REST de definiciones de Wiktionary.

Éxito = respuesta 2xx cuyo JSON es un objeto con lista `en` no vacía
(al menos una entrada en inglés).
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import RetryingFetcher
from core.domain.models import TierResult, VerdictSource


def has_english_entries(payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    entries = payload.get("en")
    return isinstance(entries, list) and len(entries) > 0


class WiktionarySource:
    """Consulta `GET {base}/{word}` en la API REST de Wiktionary."""

    source = VerdictSource.FALLBACK
    _base_url = "https://en.wiktionary.org/api/rest_v1/page/definition"

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

        if not has_english_entries(data):
            return TierResult(ok=False, reason="no_english_entries")
        return TierResult(ok=True)
