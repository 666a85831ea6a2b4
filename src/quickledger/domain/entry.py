"""Quick-entry domain service."""

import logging
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Iterable, Optional

from quickledger.config import DEFAULT_INCOME_PREFIXES, QuickEntrySettings, load_settings
from quickledger.domain.category import CategoryResolver
from quickledger.domain.entities import (
    CategoryRecord,
    Direction,
    EntryID,
    MatchResult,
    ParsedEntry,
    ParsedFragments,
    QuickEntryResponse,
    RawInput,
)
from quickledger.domain.errors import (
    AllocatorUnavailableError,
    ErrorKind,
    QuickEntryError,
    StorageError,
)
from quickledger.domain.formatting import GENERIC_FAILURE_MESSAGE, ResponseFormatter
from quickledger.domain.parser import MessageParser
from quickledger.domain.sequence import SequenceIDAllocator
from quickledger.utils.date_parser import now_in

if TYPE_CHECKING:
    from quickledger.database.base import CategoryDirectory, SequenceStore, TransactionSink

logger = logging.getLogger(__name__)


def determine_direction(
    fragments: ParsedFragments,
    category: CategoryRecord,
    income_prefixes: Iterable[str] = DEFAULT_INCOME_PREFIXES,
) -> Direction:
    """Explicit negatives are expenses; otherwise income major codes decide."""
    if fragments.is_explicit_negative:
        return Direction.EXPENSE
    major_code = str(category.major_code)
    if any(major_code.startswith(prefix) for prefix in income_prefixes):
        return Direction.INCOME
    return Direction.EXPENSE


def assemble_entry(
    fragments: ParsedFragments,
    match: MatchResult,
    entry_id: EntryID,
    user_id: str,
    *,
    raw_text: str,
    created_at: datetime,
    income_prefixes: Iterable[str] = DEFAULT_INCOME_PREFIXES,
) -> ParsedEntry:
    """Combine parse, match and ID into a ParsedEntry. No side effects."""
    return ParsedEntry(
        id=entry_id,
        user_id=user_id,
        amount=fragments.amount,
        direction=determine_direction(fragments, match.category, income_prefixes),
        category=match.category,
        payment_method=fragments.payment_method,
        raw_text=raw_text,
        created_at=created_at,
        remark=fragments.remark,
    )


class QuickEntryService:
    """Service turning quick-entry messages into recorded entries."""

    def __init__(
        self,
        directory: "CategoryDirectory",
        sequence_store: "SequenceStore",
        sink: "TransactionSink",
        settings: Optional[QuickEntrySettings] = None,
    ):
        """Initialize quick-entry service.

        Args:
            directory: Per-user category directory
            sequence_store: Durable per-day counter store
            sink: Destination for accepted entries
            settings: Tunables (defaults to load_settings())
        """
        self.settings = settings or load_settings()
        self.parser = MessageParser(self.settings)
        self.resolver = CategoryResolver(directory, self.settings)
        self.allocator = SequenceIDAllocator(sequence_store, self.settings)
        self.formatter = ResponseFormatter(self.settings)
        self.sink = sink

    def process(
        self,
        text: Optional[str],
        user_id: str,
        request_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> QuickEntryResponse:
        """Parse, resolve, allocate and record one message.

        Args:
            text: Raw message text
            user_id: Owner of the entry and of the category directory
            request_id: Correlation ID for logs (generated if not provided)
            now: Entry time (defaults to the configured timezone's wall clock);
                its date selects the ID's date part

        Returns:
            QuickEntryResponse; expected failures are reported, not raised
        """
        raw = RawInput(
            text=text or "",
            user_id=user_id,
            request_id=request_id or uuid.uuid4().hex[:8],
        )
        if now is None:
            now = now_in(self.settings.timezone)

        fragments: Optional[ParsedFragments] = None
        try:
            fragments = self.parser.parse(raw.text)
            match = self.resolver.resolve(fragments.category_phrase, raw.user_id)
            entry_id = self._allocate(now)
            entry = assemble_entry(
                fragments,
                match,
                entry_id,
                raw.user_id,
                raw_text=raw.text,
                created_at=now,
                income_prefixes=self.settings.income_major_prefixes,
            )
            self._record(entry)
        except QuickEntryError as exc:
            logger.info(
                "[%s] Quick entry rejected for user %s: %s (%s)",
                raw.request_id,
                raw.user_id,
                exc.kind.value,
                exc,
            )
            context = {**exc.context, "raw_text": raw.text, "fragments": fragments, "now": now}
            return QuickEntryResponse(
                success=False,
                message=self.formatter.format_failure(exc.kind, context),
                error_kind=exc.kind.value,
            )
        except Exception:
            logger.exception("[%s] Quick entry failed unexpectedly", raw.request_id)
            message = self.formatter.format_failure(
                ErrorKind.SYSTEM_ERROR, {"raw_text": raw.text, "now": now}
            )
            return QuickEntryResponse(
                success=False,
                message=message or GENERIC_FAILURE_MESSAGE,
                error_kind=ErrorKind.SYSTEM_ERROR.value,
            )

        logger.info(
            "[%s] Recorded %s for user %s: %d (%s, %s)",
            raw.request_id,
            entry.id,
            raw.user_id,
            entry.amount,
            entry.direction.value,
            entry.category.sub_name,
        )
        return QuickEntryResponse(
            success=True,
            message=self.formatter.format_success(entry),
            entry=entry,
        )

    def _allocate(self, now: datetime) -> EntryID:
        try:
            return self.allocator.allocate(now.date())
        except AllocatorUnavailableError:
            if not self.settings.allow_fallback_ids:
                raise
            return self.allocator.allocate_fallback()

    def _record(self, entry: ParsedEntry) -> None:
        try:
            self.sink.record(entry)
        except QuickEntryError:
            raise
        except Exception as exc:
            logger.error("Transaction sink failed for %s: %s", entry.id, exc)
            raise StorageError(f"儲存失敗: {exc}", entry_id=str(entry.id)) from exc
