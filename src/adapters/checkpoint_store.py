"""Checkpoint de progreso en JSON.

La existencia del fichero es la señal de "hay una ejecución a medias":
- ausente → empezar desde cero (o la anterior terminó bien)
- presente → reanudar desde `lastIndex`
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from adapters.atomic_writer import write_json_atomic
from core.domain.models import ValidationState, Verdict

logger = logging.getLogger(__name__)


class CheckpointStore:
    """Dueño único del `ValidationState` de una ejecución."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._state = ValidationState()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def state(self) -> ValidationState:
        return self._state

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> ValidationState:
        if not self._path.exists():
            self._state = ValidationState()
            return self._state

        data = json.loads(self._path.read_text(encoding="utf-8"))
        self._state = ValidationState.model_validate(data)
        logger.info(
            "Resuming from checkpoint %s (lastIndex=%d, %d results)",
            self._path,
            self._state.last_index,
            len(self._state.results),
        )
        return self._state

    def record(self, index: int, word: str, verdict: Verdict) -> None:
        # Indexado por palabra: reprocesar tras un crash no duplica.
        self._state.results[word] = verdict.valid
        self._state.last_index = index + 1

    def flush(self) -> Path:
        payload = self._state.model_dump(mode="json", by_alias=True)
        write_json_atomic(self._path, payload)
        logger.debug("Checkpoint saved at lastIndex=%d", self._state.last_index)
        return self._path

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
