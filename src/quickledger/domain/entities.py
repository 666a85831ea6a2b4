"""Domain model entities for quickledger.

These are pure data classes describing one quick-entry request from raw text
to the finished entry. They are independent of how the surrounding
application stores categories, counters or entries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class RawInput:
    """One inbound quick-entry message."""

    text: str
    user_id: str
    request_id: str


@dataclass(frozen=True)
class ParsedFragments:
    """Pieces split out of a quick-entry message.

    ``amount`` is always positive; the explicit-negative form is carried by
    ``is_explicit_negative``.
    """

    category_phrase: str
    amount: int
    raw_amount_token: str
    payment_method: str
    is_explicit_negative: bool
    remark: str = ""

    def __post_init__(self):
        if self.amount <= 0:
            raise ValueError(f"ParsedFragments.amount must be positive, got {self.amount}")


@dataclass(frozen=True)
class CategoryRecord:
    """Category (subject) from a user's directory."""

    major_code: str
    major_name: str
    sub_code: str
    sub_name: str
    synonyms: frozenset[str] = field(default_factory=frozenset)

    @property
    def code(self) -> str:
        """Combined ``major-sub`` code."""
        return f"{self.major_code}-{self.sub_code}"


class MatchType(str, Enum):
    """How a category phrase was matched."""

    EXACT = "exact"
    SYNONYM_EXACT = "synonym_exact"
    CONTAINS_SUB_NAME = "contains_sub_name"
    CONTAINS_SYNONYM = "contains_synonym"
    SIMILAR_NAME = "similar_name"


@dataclass(frozen=True)
class MatchResult:
    """Resolved category with a confidence score in [0, 1]."""

    category: CategoryRecord
    score: float
    match_type: MatchType

    def __post_init__(self):
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"MatchResult.score must be within [0, 1], got {self.score}")
        if (self.score == 1.0) != (self.match_type is MatchType.EXACT):
            raise ValueError("MatchResult.score is 1.0 exactly when match_type is EXACT")


class Direction(str, Enum):
    """Money flow of an entry."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return "收入" if self is Direction.INCOME else "支出"


MAX_SEQUENCE = 99_999


@dataclass(frozen=True, order=True)
class BookkeepingID:
    """Date-scoped sequential identifier, e.g. ``20250715-00001``."""

    date_part: str
    sequence: int

    def __post_init__(self):
        if len(self.date_part) != 8 or not self.date_part.isdigit():
            raise ValueError(f"date_part must be YYYYMMDD, got '{self.date_part}'")
        if not 1 <= self.sequence <= MAX_SEQUENCE:
            raise ValueError(f"sequence must be within 1..99999, got {self.sequence}")

    def __str__(self) -> str:
        return f"{self.date_part}-{self.sequence:05d}"

    @classmethod
    def parse(cls, value: str) -> "BookkeepingID":
        """Parse ``YYYYMMDD-NNNNN`` back into an ID."""
        date_part, sep, sequence = value.partition("-")
        if not sep or len(sequence) != 5 or not sequence.isdigit():
            raise ValueError(f"Not a bookkeeping ID: '{value}'")
        return cls(date_part=date_part, sequence=int(sequence))

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class FallbackID:
    """Timestamp-prefixed ID used only when sequence allocation is unavailable."""

    timestamp_ms: int
    nonce: str

    def __str__(self) -> str:
        return f"F{self.timestamp_ms}-{self.nonce}"

    @property
    def is_fallback(self) -> bool:
        return True


EntryID = Union[BookkeepingID, FallbackID]


@dataclass(frozen=True)
class ParsedEntry:
    """Accepted quick entry, ready to hand to a transaction sink."""

    id: EntryID
    user_id: str
    amount: int
    direction: Direction
    category: CategoryRecord
    payment_method: str
    raw_text: str
    created_at: datetime
    remark: str = ""

    @property
    def signed_amount(self) -> int:
        """Amount with expenses negative."""
        return self.amount if self.direction is Direction.INCOME else -self.amount


@dataclass(frozen=True)
class QuickEntryResponse:
    """Outbound result of processing one quick-entry message."""

    success: bool
    message: str
    entry: Optional[ParsedEntry] = None
    error_kind: Optional[str] = None
