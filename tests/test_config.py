import sys
from pathlib import Path

import pytest

from core.config import AppSettings, write_user_env_vars


def test_user_agent_without_contact():
    assert AppSettings(_env_file=None).user_agent == "WordleValidator/1.0"


def test_user_agent_from_environment(monkeypatch):
    monkeypatch.setenv("WORD_VALIDATOR_CONTACT", "mailto:ops@example.com")
    assert AppSettings(_env_file=None).user_agent == "WordleValidator/1.0 (mailto:ops@example.com)"


def test_run_paths_default_to_source_siblings():
    paths = AppSettings(solutions_path=Path("/srv/data/solutions.js"), _env_file=None).run_paths()

    assert paths.backup == Path("/srv/data/solutions.js.backup")
    assert paths.progress == Path("/srv/data/validation-progress.json")
    assert paths.invalid_log == Path("/srv/data/invalid-words.json")


def test_run_paths_explicit_overrides(tmp_path):
    settings = AppSettings(
        solutions_path=tmp_path / "s.js",
        progress_path=tmp_path / "state" / "p.json",
        _env_file=None,
    )
    assert settings.run_paths().progress == tmp_path / "state" / "p.json"


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("# comment\nWORD_VALIDATOR_LOG_LEVEL=INFO\n", encoding="utf-8")

    write_user_env_vars({"WORD_VALIDATOR_CONTACT": "mailto:me@example.com"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert "WORD_VALIDATOR_CONTACT=mailto:me@example.com" in lines
    assert "WORD_VALIDATOR_LOG_LEVEL=INFO" in lines


def test_user_env_file_is_resolved_per_instance(monkeypatch, tmp_path):
    from core import config

    env_path = tmp_path / "user" / ".env"
    write_user_env_vars({"WORD_VALIDATOR_CONTACT": "mailto:late@example.com"}, env_path=env_path)
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    assert AppSettings().contact == "mailto:late@example.com"


@pytest.mark.skipif(sys.platform.startswith("win") or sys.platform == "darwin", reason="XDG solo en Linux")
def test_user_env_file_follows_xdg_config_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "other-xdg"))
    write_user_env_vars(
        {"WORD_VALIDATOR_LOG_LEVEL": "DEBUG"},
        env_path=tmp_path / "other-xdg" / "word-validator" / ".env",
    )

    assert AppSettings().log_level == "DEBUG"


def test_explicit_env_file_none_skips_user_env(monkeypatch, tmp_path):
    from core import config

    env_path = tmp_path / "user" / ".env"
    write_user_env_vars({"WORD_VALIDATOR_CONTACT": "mailto:late@example.com"}, env_path=env_path)
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    assert AppSettings(_env_file=None).contact is None
