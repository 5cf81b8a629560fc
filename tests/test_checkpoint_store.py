import json

from adapters.checkpoint_store import CheckpointStore
from core.domain.models import Verdict, VerdictSource


def test_load_without_file_returns_fresh_state(tmp_path):
    store = CheckpointStore(tmp_path / "validation-progress.json")

    state = store.load()

    assert store.exists() is False
    assert state.last_index == 0
    assert state.results == {}
    assert state.meta.created_at


def test_flush_uses_persisted_key_names(tmp_path):
    path = tmp_path / "validation-progress.json"
    store = CheckpointStore(path)
    store.load()
    store.record(0, "CRANE", Verdict(valid=True, source=VerdictSource.PRIMARY))
    store.record(1, "ZZZZZ", Verdict(valid=False))

    store.flush()

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["lastIndex"] == 2
    assert data["results"] == {"CRANE": True, "ZZZZZ": False}
    assert "createdAt" in data["meta"]


def test_load_reads_existing_checkpoint_verbatim(tmp_path):
    path = tmp_path / "validation-progress.json"
    path.write_text(
        json.dumps(
            {
                "lastIndex": 1,
                "results": {"CRANE": True},
                "meta": {"createdAt": "2024-01-01T00:00:00.000Z", "host": "ci"},
                "note": "kept",
            }
        ),
        encoding="utf-8",
    )
    store = CheckpointStore(path)

    state = store.load()

    assert state.last_index == 1
    assert state.results == {"CRANE": True}
    assert state.meta.created_at == "2024-01-01T00:00:00.000Z"

    store.flush()
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["note"] == "kept"
    assert data["meta"]["host"] == "ci"


def test_record_is_idempotent(tmp_path):
    store = CheckpointStore(tmp_path / "p.json")
    store.load()
    verdict = Verdict(valid=True, source=VerdictSource.FALLBACK)

    store.record(4, "AYAHS", verdict)
    snapshot = store.state.model_dump()
    store.record(4, "AYAHS", verdict)

    assert store.state.model_dump() == snapshot
    assert store.state.last_index == 5
    assert list(store.state.results) == ["AYAHS"]


def test_clear_removes_file(tmp_path):
    path = tmp_path / "p.json"
    store = CheckpointStore(path)
    store.load()
    store.flush()
    assert path.exists()

    store.clear()
    store.clear()

    assert not path.exists()
