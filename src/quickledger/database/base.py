"""Abstract collaborator interfaces consumed by the quick-entry core."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

# Domain modules import this one only under TYPE_CHECKING, so no import cycle
from quickledger.domain.entities import CategoryRecord, ParsedEntry


class CategoryDirectory(ABC):
    """Read-only source of a user's categories."""

    @abstractmethod
    def get_categories(self, user_id: str) -> list[CategoryRecord]:
        """Return the user's active categories, in directory order."""
        pass


class SequenceStore(ABC):
    """Durable per-day counter."""

    @abstractmethod
    def atomic_increment(self, date_part: str) -> int:
        """Increment the counter for ``date_part`` and return the new value.

        Two calls for the same ``date_part`` never return the same value,
        whichever process or thread makes them.
        """
        pass


class TransactionSink(ABC):
    """Destination for accepted entries."""

    @abstractmethod
    def record(self, entry: ParsedEntry) -> None:
        """Durably store an entry. Entries are never updated in place."""
        pass


class Database(CategoryDirectory, SequenceStore, TransactionSink):
    """Storage backend providing all three collaborators plus management calls."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        user_id: str,
        major_code: str,
        major_name: str,
        sub_code: str,
        sub_name: str,
        synonyms: Optional[list[str]] = None,
    ) -> int:
        """Create a category for a user. Returns category row ID."""
        pass

    @abstractmethod
    def count_categories(self, user_id: str) -> int:
        """Count a user's active categories."""
        pass

    # Entry operations
    @abstractmethod
    def list_entries(
        self, user_id: str, day: Optional[date] = None
    ) -> list[dict]:
        """List recorded entries for a user, optionally for one day.

        Rows are returned as dicts (entry_id, amount, direction, category,
        payment_method, remark, created_at) for display.
        """
        pass
