from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AppSettings


class RecordingSleep:
    """Sustituto de `asyncio.sleep` que solo anota las esperas."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path: Path):
    for key in ("WORD_VALIDATOR_CONTACT", "WORD_VALIDATOR_SOLUTIONS_PATH", "WORD_VALIDATOR_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def make_settings(tmp_path: Path):
    def _make(**overrides) -> AppSettings:
        values = {
            "solutions_path": tmp_path / "data" / "solutions.js",
            "request_delay_seconds": 0,
            "fallback_delay_seconds": 0,
            "_env_file": None,
        }
        values.update(overrides)
        return AppSettings(**values)

    return _make
