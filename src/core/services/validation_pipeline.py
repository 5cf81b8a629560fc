"""Orquestación de una ejecución de validación.

Máquina de estados secuencial INIT → PROCESS → FINALIZE → DONE:

- INIT: lee la fuente, deriva el subconjunto de trabajo, carga el checkpoint
  y crea el backup si es una ejecución nueva.
- PROCESS: una palabra cada vez, en orden; pausa fija tras cada una y
  checkpoint cada `batch_save_interval` palabras y en la última.
- FINALIZE: escribe el informe de inválidas, reescribe la lista canónica y
  borra el checkpoint (en ese orden). El reparto válidas/inválidas sale del
  checkpoint, no de la fuente.

La UI (progreso, avisos) queda fuera vía `PipelineHooks`. No hay rollback: si
algo revienta, el último checkpoint guardado es el punto de reanudación.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable

import httpx

from adapters.atomic_writer import write_atomic
from adapters.checkpoint_store import CheckpointStore
from adapters.definition_sources import FreeDictionarySource, WiktionarySource
from adapters.http_client import RetryingFetcher, RetryPolicy, build_async_client
from adapters.json_exporter import export_invalid_words
from adapters.word_list_file import extract_words, rewrite_word_list, working_subset
from core.config import AppSettings, RunPaths
from core.domain.models import Verdict
from core.services.word_validator import WordValidator

logger = logging.getLogger(__name__)


class RunPhase(str, Enum):
    INIT = "init"
    PROCESS = "process"
    FINALIZE = "finalize"
    DONE = "done"


@dataclass
class PipelineHooks:
    """Callbacks opcionales para la capa de UI."""

    message: Callable[[str], None] | None = None
    progress: Callable[[int, int, str, Verdict], None] | None = None


@dataclass
class RunSummary:
    """Resultado de una ejecución completa."""

    kept: list[str]
    removed: list[str]
    total: int
    resumed_from: int
    processed: int
    backup_created: bool
    paths: RunPaths
    unresolved: list[str] = field(default_factory=list)


class ValidationRun:
    """Una ejecución del pipeline sobre un fichero fuente."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        validator: WordValidator,
        store: CheckpointStore | None = None,
        hooks: PipelineHooks | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._paths = settings.run_paths()
        self._validator = validator
        self._store = store or CheckpointStore(self._paths.progress)
        self._hooks = hooks or PipelineHooks()
        self._sleep = sleep
        self.phase = RunPhase.INIT

        self._raw_content = ""
        self._words: list[str] = []
        self._backup_created = False

    @property
    def words(self) -> list[str]:
        return list(self._words)

    def _message(self, text: str) -> None:
        logger.info(text)
        if self._hooks.message:
            self._hooks.message(text)

    def _enter(self, phase: RunPhase) -> None:
        logger.debug("Phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def _init(self) -> None:
        paths = self._paths
        self._raw_content = paths.solutions.read_text(encoding="utf-8")
        all_words = extract_words(self._raw_content, export_name=self._settings.list_export_name)
        self._words = working_subset(all_words, length=self._settings.word_length)

        resuming = self._store.exists()
        state = self._store.load()
        if resuming:
            self._message("Resuming from previous session...")

        if state.last_index == 0 and not paths.backup.exists():
            paths.backup.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(paths.solutions, paths.backup)
            self._backup_created = True
            self._message(f"Backup created: {paths.backup}")

    async def _process(self) -> int:
        state = self._store.state
        total = len(self._words)
        interval = self._settings.batch_save_interval
        start = state.last_index
        self._message(f"Processing {total} words starting at index {start}...")

        for index in range(start, total):
            word = self._words[index]
            verdict = await self._validator.validate(word)
            self._store.record(index, word, verdict)

            if self._hooks.progress:
                self._hooks.progress(state.last_index, total, word, verdict)

            await self._sleep(self._settings.request_delay_seconds)

            if state.last_index % interval == 0 or state.last_index == total:
                self._store.flush()

        return max(0, total - start)

    def _finalize(self) -> tuple[list[str], list[str], list[str]]:
        paths = self._paths
        results = self._store.state.results
        # Orden de inserción = orden de proceso. No depende de lo que quede en
        # la fuente (puede estar ya reescrita si FINALIZE falló a medias).
        kept = [w for w, ok in results.items() if ok]
        removed = [w for w, ok in results.items() if not ok]
        known = {w.lower() for w in results}
        unresolved = [w for w in self._words if w.lower() not in known]
        if unresolved:
            logger.warning("%d words have no recorded verdict and were dropped", len(unresolved))

        final_content = rewrite_word_list(
            self._raw_content,
            kept,
            export_name=self._settings.list_export_name,
        )
        # El checkpoint se borra lo último: hasta entonces es punto de reanudación.
        export_invalid_words(words=removed, output_path=paths.invalid_log)
        write_atomic(paths.solutions, final_content)
        self._store.clear()
        return kept, removed, unresolved

    async def execute(self) -> RunSummary:
        self._enter(RunPhase.INIT)
        self._init()
        resumed_from = self._store.state.last_index

        self._enter(RunPhase.PROCESS)
        processed = await self._process()

        self._enter(RunPhase.FINALIZE)
        kept, removed, unresolved = self._finalize()

        self._enter(RunPhase.DONE)
        return RunSummary(
            kept=kept,
            removed=removed,
            total=len(self._words),
            resumed_from=resumed_from,
            processed=processed,
            backup_created=self._backup_created,
            paths=self._paths,
            unresolved=unresolved,
        )


def build_validator(
    settings: AppSettings,
    client: httpx.AsyncClient,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> WordValidator:
    fetcher = RetryingFetcher(client, policy=RetryPolicy.from_settings(settings), sleep=sleep)
    return WordValidator(
        primary=FreeDictionarySource(fetcher, base_url=settings.primary_api_base_url),
        fallback=WiktionarySource(fetcher, base_url=settings.fallback_api_base_url),
        fallback_delay=settings.fallback_delay_seconds,
        word_length=settings.word_length,
        sleep=sleep,
    )


async def validate_word_list(
    *,
    settings: AppSettings,
    hooks: PipelineHooks | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RunSummary:
    """Ejecuta el pipeline completo con los adaptadores HTTP reales."""

    async with build_async_client(settings, transport=transport) as client:
        run = ValidationRun(
            settings=settings,
            validator=build_validator(settings, client, sleep=sleep),
            hooks=hooks,
            sleep=sleep,
        )
        return await run.execute()


def checkpoint_status(settings: AppSettings) -> tuple[bool, int, Path]:
    """(hay checkpoint, lastIndex, ruta) sin modificar nada."""

    store = CheckpointStore(settings.run_paths().progress)
    if not store.exists():
        return False, 0, store.path
    return True, store.load().last_index, store.path
