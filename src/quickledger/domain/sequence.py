"""Date-scoped bookkeeping ID allocation."""

import logging
import secrets
import threading
import time
from contextlib import contextmanager
from datetime import date
from typing import TYPE_CHECKING, Optional

from quickledger.config import QuickEntrySettings, load_settings
from quickledger.domain.entities import MAX_SEQUENCE, BookkeepingID, FallbackID
from quickledger.domain.errors import AllocatorUnavailableError, SequenceExhaustedError
from quickledger.utils.date_parser import to_date_part

if TYPE_CHECKING:
    from quickledger.database.base import SequenceStore

logger = logging.getLogger(__name__)


class SequenceIDAllocator:
    """Allocate ``YYYYMMDD-NNNNN`` IDs from an atomic per-day counter.

    Calls for the same day serialize on a per-day lock around
    ``SequenceStore.atomic_increment``; calls for different days use
    different locks. The store's increment is itself atomic, so several
    processes sharing one store also never receive the same sequence.
    """

    def __init__(
        self,
        store: "SequenceStore",
        settings: Optional[QuickEntrySettings] = None,
    ):
        """Initialize allocator.

        Args:
            store: Durable counter store
            settings: Limits (defaults to load_settings())
        """
        self.store = store
        self.settings = settings or load_settings()
        self._registry_lock = threading.Lock()
        # date_part -> [lock, number of callers holding or waiting on it]
        self._day_locks: dict[str, list] = {}

    @contextmanager
    def _day_lock(self, date_part: str):
        """Hold the lock for one day; it is dropped once no caller needs it."""
        with self._registry_lock:
            slot = self._day_locks.get(date_part)
            if slot is None:
                slot = self._day_locks[date_part] = [threading.Lock(), 0]
            slot[1] += 1
        try:
            with slot[0]:
                yield
        finally:
            with self._registry_lock:
                slot[1] -= 1
                if slot[1] == 0:
                    del self._day_locks[date_part]

    def allocate(self, day: date) -> BookkeepingID:
        """Allocate the next ID for a day.

        Args:
            day: Calendar day the ID belongs to

        Returns:
            BookkeepingID with a sequence never handed out before for that day

        Raises:
            SequenceExhaustedError: If the day's counter passed the maximum
            AllocatorUnavailableError: If the store failed
        """
        date_part = to_date_part(day)
        with self._day_lock(date_part):
            try:
                sequence = self.store.atomic_increment(date_part)
            except Exception as exc:
                logger.error("Sequence store failed for %s: %s", date_part, exc)
                raise AllocatorUnavailableError(
                    f"收支ID產生失敗: {exc}", date_part=date_part
                ) from exc

        limit = min(self.settings.max_sequence, MAX_SEQUENCE)
        if sequence > limit:
            logger.error("Sequence exhausted for %s (%d)", date_part, sequence)
            raise SequenceExhaustedError(date_part, limit)

        entry_id = BookkeepingID(date_part=date_part, sequence=sequence)
        logger.info("Allocated bookkeeping ID %s", entry_id)
        return entry_id

    def allocate_fallback(self) -> FallbackID:
        """Return a timestamp-prefixed ID. Never fails."""
        entry_id = FallbackID(
            timestamp_ms=time.time_ns() // 1_000_000,
            nonce=f"{secrets.randbelow(100_000):05d}",
        )
        logger.warning("Using fallback ID %s", entry_id)
        return entry_id
