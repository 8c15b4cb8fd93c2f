"""
History Store
=============
Capped log of past pipeline runs, newest first.

Update policy:
    - add()   → push-front, truncate to max_items, write the whole list back
    - clear() → delete the slot
    - Oldest entries are evicted once max_items is exceeded

Storage:
    The list lives in a single named slot of a key-value backend, JSON-encoded.
    Backends:
        InMemoryBackend  — process-local dict (default)
        JsonFileBackend  — one JSON object on disk, atomically replaced on every mutation

    A missing or unreadable slot reads as an empty history.
"""
import json
import logging
import os
import tempfile
import time
import uuid
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from bugsquash.core.config import HISTORY_FILE, MAX_HISTORY
from bugsquash.core.constants import HISTORY_INPUT_MAX_CHARS, HISTORY_KEY
from bugsquash.models.envelope import HistoryItem, IssueStub

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------
class InMemoryBackend:
    """Key-value backend held in a dict."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileBackend:
    """Key-value backend persisted as one JSON object in ``path``."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read history file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        # Written beside the target and swapped in with os.replace
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".history-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


# ---------------------------------------------------------------------------
# History Store
# ---------------------------------------------------------------------------
class HistoryStore:
    """
    Capped, newest-first history of completed runs.

    Usage:
        store = HistoryStore(InMemoryBackend())
        store.add(input="TypeError: ...", issue=stub, root_cause="...", severity="high", score=85)
        items = store.get_history()
    """

    def __init__(
        self,
        backend=None,
        key: str = HISTORY_KEY,
        max_items: int = MAX_HISTORY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.backend = backend if backend is not None else InMemoryBackend()
        self.key = key
        self.max_items = max_items
        self._clock = clock

    def get_history(self) -> List[HistoryItem]:
        stored = self.backend.get(self.key)
        if not stored:
            return []
        try:
            raw_items = json.loads(stored)
            return [HistoryItem.model_validate(item) for item in raw_items]
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning("Discarding unreadable history slot %r: %s", self.key, e)
            return []

    def add(
        self,
        input: str,
        issue: IssueStub,
        root_cause: str,
        score: int,
        severity: Optional[str] = None,
    ) -> HistoryItem:
        item = HistoryItem(
            id=uuid.uuid4().hex[:12],
            timestamp=int(self._clock() * 1000),
            input=input[:HISTORY_INPUT_MAX_CHARS],
            issue=issue,
            root_cause=root_cause,
            severity=severity,
            score=score,
        )
        updated = [item] + self.get_history()
        self._write(updated[:self.max_items])
        logger.debug("History entry %s added (%d kept)", item.id, min(len(updated), self.max_items))
        return item

    def clear(self) -> None:
        self.backend.delete(self.key)
        logger.info("History cleared")

    def _write(self, items: List[HistoryItem]) -> None:
        payload = [item.model_dump(by_alias=True) for item in items]
        self.backend.set(self.key, json.dumps(payload))

    def __len__(self) -> int:
        return len(self.get_history())


def format_time_ago(timestamp_ms: int, now_ms: Optional[int] = None) -> str:
    """Human-readable age of a history entry: just now / 5m ago / 3h ago / 2d ago."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    seconds = (now_ms - timestamp_ms) // 1000

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


_default_store: Optional[HistoryStore] = None


def get_history_store() -> HistoryStore:
    """Process-wide store, file-backed when HISTORY_FILE is set."""
    global _default_store
    if _default_store is None:
        backend = JsonFileBackend(HISTORY_FILE) if HISTORY_FILE else InMemoryBackend()
        _default_store = HistoryStore(backend)
    return _default_store
