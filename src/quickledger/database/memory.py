"""In-memory collaborators for tests and embedding."""

import threading
from collections import defaultdict
from typing import Iterable, Optional

from quickledger.database.base import CategoryDirectory, SequenceStore, TransactionSink
from quickledger.domain.entities import CategoryRecord, ParsedEntry


class InMemoryCategoryDirectory(CategoryDirectory):
    """Category directory backed by a dict of user ID to records."""

    def __init__(self, categories: Optional[dict[str, Iterable[CategoryRecord]]] = None):
        self._categories: dict[str, list[CategoryRecord]] = {
            user_id: list(records) for user_id, records in (categories or {}).items()
        }

    def add(self, user_id: str, record: CategoryRecord) -> None:
        self._categories.setdefault(user_id, []).append(record)

    def get_categories(self, user_id: str) -> list[CategoryRecord]:
        return list(self._categories.get(user_id, []))


class InMemorySequenceStore(SequenceStore):
    """Process-local counters guarded by one lock."""

    def __init__(self, start: Optional[dict[str, int]] = None):
        self._lock = threading.Lock()
        self._counters: dict[str, int] = defaultdict(int, start or {})

    def atomic_increment(self, date_part: str) -> int:
        with self._lock:
            self._counters[date_part] += 1
            return self._counters[date_part]

    def current(self, date_part: str) -> int:
        with self._lock:
            return self._counters.get(date_part, 0)


class InMemoryTransactionSink(TransactionSink):
    """Append-only list of entries."""

    def __init__(self):
        self._lock = threading.Lock()
        self.entries: list[ParsedEntry] = []

    def record(self, entry: ParsedEntry) -> None:
        with self._lock:
            self.entries.append(entry)
