"""Shared domain error messages and error types."""

from enum import Enum
from typing import Any, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked because a collaborator is unavailable."""


class ErrorKind(str, Enum):
    """Terminal failure kinds reported by quick entry."""

    EMPTY_MESSAGE = "EMPTY_MESSAGE"
    FORMAT_NOT_RECOGNIZED = "FORMAT_NOT_RECOGNIZED"
    LEADING_ZERO_REJECTED = "LEADING_ZERO_REJECTED"
    NON_POSITIVE_AMOUNT = "NON_POSITIVE_AMOUNT"
    AMOUNT_TOO_LARGE = "AMOUNT_TOO_LARGE"
    UNSUPPORTED_CURRENCY = "UNSUPPORTED_CURRENCY"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    DIRECTORY_UNAVAILABLE = "DIRECTORY_UNAVAILABLE"
    SEQUENCE_EXHAUSTED = "SEQUENCE_EXHAUSTED"
    ALLOCATOR_UNAVAILABLE = "ALLOCATOR_UNAVAILABLE"
    STORAGE_ERROR = "STORAGE_ERROR"
    SYSTEM_ERROR = "SYSTEM_ERROR"


class QuickEntryError(DomainError):
    """Quick-entry failure carrying an :class:`ErrorKind` and context."""

    kind: ErrorKind = ErrorKind.SYSTEM_ERROR

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.context: dict[str, Any] = context


class ParseError(QuickEntryError, ValidationError):
    """Message text could not be turned into fragments."""

    def __init__(self, kind: ErrorKind, message: str, **context: Any):
        super().__init__(message, **context)
        self.kind = kind


class CategoryNotFoundError(QuickEntryError, NotFoundError):
    kind = ErrorKind.CATEGORY_NOT_FOUND

    def __init__(self, phrase: str):
        super().__init__(category_phrase_not_found(phrase), phrase=phrase)
        self.phrase = phrase


class DirectoryUnavailableError(QuickEntryError, DependencyError):
    kind = ErrorKind.DIRECTORY_UNAVAILABLE


class SequenceExhaustedError(QuickEntryError, ConflictError):
    kind = ErrorKind.SEQUENCE_EXHAUSTED

    def __init__(self, date_part: str, limit: int):
        super().__init__(sequence_exhausted(date_part, limit), date_part=date_part)
        self.date_part = date_part


class AllocatorUnavailableError(QuickEntryError, DependencyError):
    kind = ErrorKind.ALLOCATOR_UNAVAILABLE


class StorageError(QuickEntryError, DependencyError):
    kind = ErrorKind.STORAGE_ERROR


def category_phrase_not_found(phrase: str) -> str:
    """Return message for a phrase that matched no category."""
    return f"找不到科目: {phrase}"


def sequence_exhausted(date_part: str, limit: int) -> str:
    """Return message when a day's sequence counter is used up."""
    return f"{date_part} 的收支序號已用完 (上限 {limit:05d})"


def leading_zero_rejected(raw_amount: str) -> str:
    """Return message for an amount token with a leading zero."""
    return f"金額格式錯誤：不允許前導零 \"{raw_amount}\""


def unsupported_currency(suffix: str) -> str:
    """Return message for an unsupported currency suffix."""
    return f"不支援的幣別單位: {suffix}"


def amount_too_large(amount: int, limit: int) -> str:
    """Return message for an amount above the configured maximum."""
    return f"金額不能超過{limit:,} (收到 {amount:,})"


def error_reason(kind: ErrorKind, context: Optional[dict[str, Any]] = None) -> str:
    """Return the user-facing reason text for an error kind.

    Args:
        kind: Failure kind
        context: Optional details such as ``phrase``, ``raw_amount`` or ``suffix``

    Returns:
        Traditional Chinese reason line, specific to the kind
    """
    context = context or {}
    if kind is ErrorKind.EMPTY_MESSAGE:
        return "空訊息，請輸入記帳內容，例如「午餐150」"
    if kind is ErrorKind.FORMAT_NOT_RECOGNIZED:
        return "無法識別記帳格式，請使用「科目+金額」，例如「午餐150」"
    if kind is ErrorKind.LEADING_ZERO_REJECTED:
        return leading_zero_rejected(str(context.get("raw_amount", "")))
    if kind is ErrorKind.NON_POSITIVE_AMOUNT:
        return "金額必須大於0"
    if kind is ErrorKind.AMOUNT_TOO_LARGE:
        limit = context.get("limit")
        return f"金額不能超過{limit:,}" if isinstance(limit, int) else "金額過大"
    if kind is ErrorKind.UNSUPPORTED_CURRENCY:
        return unsupported_currency(str(context.get("suffix", ""))) + "，僅支援新台幣 (元/塊/圓)"
    if kind is ErrorKind.CATEGORY_NOT_FOUND:
        return category_phrase_not_found(str(context.get("phrase", "")))
    if kind is ErrorKind.DIRECTORY_UNAVAILABLE:
        return "暫時無法讀取科目表，請稍後再試"
    if kind is ErrorKind.SEQUENCE_EXHAUSTED:
        return f"今日收支序號已達上限 ({context.get('date_part', '')})"
    if kind is ErrorKind.ALLOCATOR_UNAVAILABLE:
        return "暫時無法產生收支ID，請稍後再試"
    if kind is ErrorKind.STORAGE_ERROR:
        return "儲存失敗，請稍後再試"
    return "系統錯誤，請稍後再試"
