"""Modelos del dominio (Pydantic v2).

Estos modelos describen *qué* produce la validación (veredictos, estado
persistido), no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class VerdictSource(str, Enum):
    """Tier que confirmó una palabra."""

    PRIMARY = "FreeDictionary"
    FALLBACK = "Wiktionary"


class TierResult(BaseModel):
    """Resultado explícito de consultar un tier.

    `ok=False` significa "este tier no confirma la palabra, probar el siguiente";
    `reason` deja constancia del motivo (status HTTP, JSON inesperado, red...).
    """

    ok: bool
    reason: str | None = None


class Verdict(BaseModel):
    """Veredicto final de una palabra. Se produce una sola vez por ejecución."""

    valid: bool
    source: VerdictSource | None = None
    reason: str | None = Field(
        default=None,
        description="Motivo de rechazo local (p.ej. 'length').",
    )


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class StateMeta(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    created_at: str = Field(default_factory=_utc_now_iso, alias="createdAt")


class ValidationState(BaseModel):
    """Progreso persistido entre ejecuciones.

    `results` va indexado por palabra: reprocesar tras un crash sobrescribe el
    mismo valor en vez de duplicar entradas.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    last_index: int = Field(default=0, ge=0, alias="lastIndex")
    results: dict[str, bool] = Field(default_factory=dict)
    meta: StateMeta = Field(default_factory=StateMeta)
