"""
History Store Tests
===================
Capped newest-first list, clear, backends, and time-ago formatting.
"""
import json
from unittest.mock import patch

import pytest

from bugsquash.models.envelope import IssueStub
from bugsquash.services.history_store import (
    HistoryStore,
    InMemoryBackend,
    JsonFileBackend,
    format_time_ago,
)

STUB = IssueStub(title="TypeError: x", number=12, repo="your-repo")


def _add(store, i):
    return store.add(input=f"run {i}", issue=STUB, root_cause=f"cause {i}", severity="low", score=70 + i)


@pytest.fixture
def store():
    return HistoryStore(InMemoryBackend())


def test_empty_by_default(store):
    assert store.get_history() == []


def test_eleven_adds_keep_ten_newest_first(store):
    for i in range(11):
        _add(store, i)

    items = store.get_history()
    assert len(items) == 10
    assert [item.input for item in items] == [f"run {i}" for i in range(10, 0, -1)]
    assert "run 0" not in [item.input for item in items]


def test_clear_leaves_nothing(store):
    for i in range(3):
        _add(store, i)
    store.clear()
    assert store.get_history() == []
    assert len(store) == 0


def test_add_assigns_id_and_timestamp():
    store = HistoryStore(InMemoryBackend(), clock=lambda: 1700000000.5)
    item = _add(store, 1)
    assert item.timestamp == 1700000000500
    assert item.id
    assert _add(store, 2).id != item.id


def test_input_truncated_to_200_chars(store):
    item = store.add(input="z" * 500, issue=STUB, root_cause="c", score=50)
    assert item.input == "z" * 200
    assert item.severity is None


def test_custom_capacity():
    store = HistoryStore(InMemoryBackend(), max_items=2)
    for i in range(5):
        _add(store, i)
    assert [item.input for item in store.get_history()] == ["run 4", "run 3"]


def test_slot_written_wholesale_with_camel_case_keys():
    backend = InMemoryBackend()
    store = HistoryStore(backend, key="slot")
    _add(store, 1)
    stored = json.loads(backend.get("slot"))
    assert isinstance(stored, list)
    assert stored[0]["rootCause"] == "cause 1"
    assert stored[0]["issue"] == {"title": "TypeError: x", "number": 12, "repo": "your-repo"}


def test_corrupt_slot_reads_as_empty():
    backend = InMemoryBackend()
    backend.set("bugsquash_history", "{not json")
    store = HistoryStore(backend)
    assert store.get_history() == []
    _add(store, 1)
    assert len(store.get_history()) == 1


def test_json_file_backend_persists(tmp_path):
    path = str(tmp_path / "data" / "history.json")
    _add(HistoryStore(JsonFileBackend(path)), 1)
    _add(HistoryStore(JsonFileBackend(path)), 2)

    reopened = HistoryStore(JsonFileBackend(path))
    assert [item.input for item in reopened.get_history()] == ["run 2", "run 1"]

    reopened.clear()
    assert HistoryStore(JsonFileBackend(path)).get_history() == []


def test_json_file_backend_failed_write_keeps_previous_file(tmp_path):
    path = tmp_path / "history.json"
    store = HistoryStore(JsonFileBackend(str(path)))
    _add(store, 1)
    before = path.read_text(encoding="utf-8")

    with patch("bugsquash.services.history_store.json.dump", side_effect=OSError("disk full")):
        with pytest.raises(OSError):
            _add(store, 2)

    assert path.read_text(encoding="utf-8") == before
    assert [item.input for item in store.get_history()] == ["run 1"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["history.json"]


def test_json_file_backend_tolerates_garbage(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("garbage", encoding="utf-8")
    assert JsonFileBackend(str(path)).get("anything") is None


# ---------------------------------------------------------------------------
# Time ago
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("age_seconds, expected", [
    (0, "just now"),
    (59, "just now"),
    (60, "1m ago"),
    (3599, "59m ago"),
    (3600, "1h ago"),
    (86399, "23h ago"),
    (86400, "1d ago"),
    (3 * 86400 + 5, "3d ago"),
])
def test_format_time_ago(age_seconds, expected):
    now = 1_700_000_000_000
    assert format_time_ago(now - age_seconds * 1000, now_ms=now) == expected
