"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los adaptadores (HTTP, checkpoint, ficheros) leen de aquí sus constantes:
  timeouts, backoff, pausas entre palabras y rutas de trabajo.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "word-validator"
USER_AGENT_BASE = "WordleValidator/1.0"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# word-validator user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


@dataclass(frozen=True)
class RunPaths:
    """Rutas que toca una ejecución (todas resueltas)."""

    solutions: Path
    backup: Path
    progress: Path
    invalid_log: Path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Todas las duraciones en segundos.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORD_VALIDATOR_",
        extra="ignore",
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    def __init__(self, **values) -> None:
        # Orden: proyecto primero (dev), luego config global de usuario.
        # La ruta de usuario se resuelve al instanciar, no al importar.
        values.setdefault("_env_file", (".env", str(get_user_env_file())))
        super().__init__(**values)

    # Ficheros
    solutions_path: Path = Field(
        default=Path("src/data/solutions.js"),
        description="Módulo JS con el array exportado de palabras candidatas.",
    )
    backup_path: Path | None = Field(
        default=None,
        description="Copia intacta del fichero fuente (por defecto '<fuente>.backup').",
    )
    progress_path: Path | None = Field(
        default=None,
        description="Checkpoint JSON (por defecto 'validation-progress.json' junto a la fuente).",
    )
    invalid_log_path: Path | None = Field(
        default=None,
        description="Informe JSON de palabras inválidas (por defecto 'invalid-words.json').",
    )
    list_export_name: str = Field(
        default="SOLUTIONS_LIST",
        min_length=1,
        pattern=r"^[A-Za-z_$][A-Za-z0-9_$]*$",
        description="Nombre del `export const` que contiene las palabras.",
    )
    word_length: int = Field(default=5, ge=1, le=32)

    # APIs
    primary_api_base_url: str = Field(
        default="https://api.dictionaryapi.dev/api/v2/entries/en",
        min_length=8,
        description="Base URL de Free Dictionary (tier primario).",
    )
    fallback_api_base_url: str = Field(
        default="https://en.wiktionary.org/api/rest_v1/page/definition",
        min_length=8,
        description="Base URL del endpoint REST de Wiktionary (tier de respaldo).",
    )
    contact: str | None = Field(
        default=None,
        description="Contacto del operador embebido en el User-Agent (p.ej. 'mailto:you@example.com').",
    )

    # HTTP / reintentos
    request_timeout_seconds: float = Field(default=10.0, gt=0, description="Timeout por request (segundos).")
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Reintentos tras el primer intento (total = max_retries + 1).",
    )
    base_backoff_seconds: float = Field(default=1.5, gt=0)
    max_backoff_seconds: float = Field(default=60.0, gt=0)
    rate_limit_buffer_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Enfriamiento extra tras cualquier 429 (sobre Retry-After/backoff).",
    )

    # Ritmo
    request_delay_seconds: float = Field(default=0.8, ge=0, description="Pausa fija tras cada palabra.")
    fallback_delay_seconds: float = Field(default=0.4, ge=0, description="Pausa antes de consultar Wiktionary.")
    batch_save_interval: int = Field(default=25, ge=1, description="Cada cuántas palabras se guarda el checkpoint.")

    log_level: str = Field(default="WARNING", description="Nivel de logging (DEBUG, INFO, WARNING...).")

    @property
    def user_agent(self) -> str:
        contact = (self.contact or "").strip()
        return f"{USER_AGENT_BASE} ({contact})" if contact else USER_AGENT_BASE

    def run_paths(self) -> RunPaths:
        solutions = self.solutions_path
        data_dir = solutions.parent
        return RunPaths(
            solutions=solutions,
            backup=self.backup_path or solutions.with_name(solutions.name + ".backup"),
            progress=self.progress_path or data_dir / "validation-progress.json",
            invalid_log=self.invalid_log_path or data_dir / "invalid-words.json",
        )
