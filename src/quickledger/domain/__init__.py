"""Domain layer for quickledger."""

from quickledger.domain.parser import MessageParser
from quickledger.domain.category import CategoryResolver
from quickledger.domain.sequence import SequenceIDAllocator
from quickledger.domain.formatting import ResponseFormatter
from quickledger.domain.entry import QuickEntryService, assemble_entry

__all__ = [
    "MessageParser",
    "CategoryResolver",
    "SequenceIDAllocator",
    "ResponseFormatter",
    "QuickEntryService",
    "assemble_entry",
]
