"""Wrapper de httpx.

- Estandariza timeouts, headers (User-Agent con contacto) y política de reintentos.
- `RetryingFetcher` ejecuta un GET lógico: reintenta solo 429 y fallos de
  transporte transitorios; cualquier otro status se devuelve tal cual.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Awaitable, Callable

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

JITTER_RATIO = 0.25
_LEADING_INT_RE = re.compile(r"[+-]?\d+")

# Reset/refused/DNS (NetworkError), timeouts de httpx, desconexión del servidor
# a mitad de respuesta y el timeout local de `asyncio.wait_for`.
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    asyncio.TimeoutError,
    TimeoutError,
)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    `transport` permite inyectar un `httpx.MockTransport` en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def parse_retry_after(value: str | None, *, now: datetime | None = None) -> float | None:
    """Interpreta `Retry-After` en segundos.

    Soporta segundos enteros (solo el prefijo entero: "1.5" → 1, "120abc" → 120)
    y HTTP-date. Una fecha ya pasada equivale a 0.
    Devuelve None si no hay cabecera o no se entiende (se usa backoff calculado).
    """

    if not value:
        return None
    text = value.strip()
    seconds = _LEADING_INT_RE.match(text)
    if seconds:
        return float(max(0, int(seconds.group(0))))

    try:
        when = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None
    if when is None:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0.0, (when - now).total_seconds())


def compute_backoff(attempt: int, *, base: float, maximum: float) -> float:
    """Backoff exponencial sin jitter: `base * 2**(attempt-1)` acotado a [base, max]."""

    raw = base * (2 ** max(0, attempt - 1))
    return min(maximum, max(base, raw))


def apply_jitter(seconds: float, *, rng: random.Random | None = None) -> float:
    """±25 % de jitter, nunca negativo."""

    uniform = rng.uniform if rng is not None else random.uniform
    delta = seconds * JITTER_RATIO
    return max(0.0, seconds + uniform(-delta, delta))


@dataclass(frozen=True)
class RetryPolicy:
    retries: int = 3
    request_timeout: float = 10.0
    base_backoff: float = 1.5
    max_backoff: float = 60.0
    rate_limit_buffer: float = 2.0

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "RetryPolicy":
        return cls(
            retries=settings.max_retries,
            request_timeout=settings.request_timeout_seconds,
            base_backoff=settings.base_backoff_seconds,
            max_backoff=settings.max_backoff_seconds,
            rate_limit_buffer=settings.rate_limit_buffer_seconds,
        )

    def backoff(self, attempt: int, *, rng: random.Random | None = None) -> float:
        return apply_jitter(
            compute_backoff(attempt, base=self.base_backoff, maximum=self.max_backoff),
            rng=rng,
        )


class RetryingFetcher:
    """GET con presupuesto acotado de intentos (`retries + 1`)."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        policy: RetryPolicy | None = None,
        sleep: SleepFunc = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._client = client
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._rng = rng

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def get(self, url: str, *, label: str, retries: int | None = None) -> httpx.Response:
        """Ejecuta el GET; devuelve la última respuesta o propaga el error final."""

        policy = self._policy
        total = (policy.retries if retries is None else retries) + 1
        attempt = 0

        while True:
            attempt += 1
            try:
                response = await asyncio.wait_for(
                    self._client.get(url),
                    timeout=policy.request_timeout,
                )
            except TRANSIENT_ERRORS as exc:
                if attempt >= total:
                    raise
                wait = policy.backoff(attempt, rng=self._rng)
                logger.warning(
                    "Transient error on %r (attempt %d/%d): %s. Retrying in %.1fs",
                    label,
                    attempt,
                    total,
                    str(exc) or type(exc).__name__,
                    wait,
                )
                await self._sleep(wait)
                continue

            if response.status_code != 429:
                return response
            if attempt >= total:
                return response

            retry_after = parse_retry_after(response.headers.get("Retry-After"))
            base_wait = retry_after if retry_after is not None else policy.backoff(attempt, rng=self._rng)
            wait = base_wait + policy.rate_limit_buffer
            logger.warning(
                "429 rate limited on %r (attempt %d/%d). Waiting %.1fs",
                label,
                attempt,
                total,
                wait,
            )
            await self._sleep(wait)
