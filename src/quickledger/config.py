"""Quick-entry configuration.

All tunable constants of the parser, the category resolver and the ID
allocator live in :class:`QuickEntrySettings`. :func:`load_settings` returns a
cached instance built from ``QUICKLEDGER_*`` environment variables layered over
the defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Final, Optional


class ConfigurationError(RuntimeError):
    """Raised when an environment override cannot be interpreted."""


DEFAULT_PAYMENT_METHODS: Final[tuple[str, ...]] = ("現金", "刷卡", "行動支付", "轉帳")
DEFAULT_SUPPORTED_UNITS: Final[tuple[str, ...]] = ("元", "塊", "圓")
DEFAULT_UNSUPPORTED_CURRENCIES: Final[tuple[str, ...]] = ("NT", "USD", "$")
DEFAULT_INCOME_PREFIXES: Final[tuple[str, ...]] = ("8", "9")
DEFAULT_TIMEZONE: Final[str] = "Asia/Taipei"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DB_PATH_ENV: Final[str] = "QUICKLEDGER_DB_PATH"
DEFAULT_DB_DIR: Final[str] = ".quickledger"
DEFAULT_DB_FILE: Final[str] = "quickledger.db"


@dataclass(frozen=True)
class QuickEntrySettings:
    """Tunable constants for quick-entry parsing and ID allocation."""

    # Amount extraction
    min_amount_digits: int = 3
    max_amount: int = 999_999_999

    # Payment methods, scanned in this order
    payment_methods: tuple[str, ...] = DEFAULT_PAYMENT_METHODS
    negative_default_payment: str = "現金"
    standard_default_payment: str = "刷卡"

    # Currency suffixes
    supported_units: tuple[str, ...] = DEFAULT_SUPPORTED_UNITS
    unsupported_currencies: tuple[str, ...] = DEFAULT_UNSUPPORTED_CURRENCIES

    # Category matching
    name_score_cap: float = 0.9
    # Floor for a sub name found inside a longer phrase ("午餐吃太多")
    contained_name_score: float = 0.8
    synonym_score_cap: float = 0.95
    synonym_exact_score: float = 0.98
    fuzzy_threshold: float = 0.7
    min_candidate_length: int = 2
    similarity_floor: float = 0.6
    similarity_weight: float = 0.75

    # Direction
    income_major_prefixes: tuple[str, ...] = DEFAULT_INCOME_PREFIXES

    # Sequence allocation
    max_sequence: int = 99_999
    allow_fallback_ids: bool = True

    timezone: str = DEFAULT_TIMEZONE
    log_level: str = DEFAULT_LOG_LEVEL


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'") from exc


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{raw}'")


def settings_from_env() -> QuickEntrySettings:
    """Build settings from environment variables without caching."""
    defaults = QuickEntrySettings()
    return QuickEntrySettings(
        min_amount_digits=_env_int("QUICKLEDGER_MIN_AMOUNT_DIGITS", defaults.min_amount_digits),
        max_amount=_env_int("QUICKLEDGER_MAX_AMOUNT", defaults.max_amount),
        payment_methods=_env_list("QUICKLEDGER_PAYMENT_METHODS", defaults.payment_methods),
        negative_default_payment=os.getenv(
            "QUICKLEDGER_NEGATIVE_DEFAULT_PAYMENT", defaults.negative_default_payment
        ),
        standard_default_payment=os.getenv(
            "QUICKLEDGER_STANDARD_DEFAULT_PAYMENT", defaults.standard_default_payment
        ),
        supported_units=_env_list("QUICKLEDGER_SUPPORTED_UNITS", defaults.supported_units),
        unsupported_currencies=_env_list(
            "QUICKLEDGER_UNSUPPORTED_CURRENCIES", defaults.unsupported_currencies
        ),
        name_score_cap=_env_float("QUICKLEDGER_NAME_SCORE_CAP", defaults.name_score_cap),
        synonym_score_cap=_env_float("QUICKLEDGER_SYNONYM_SCORE_CAP", defaults.synonym_score_cap),
        contained_name_score=_env_float(
            "QUICKLEDGER_CONTAINED_NAME_SCORE", defaults.contained_name_score
        ),
        fuzzy_threshold=_env_float("QUICKLEDGER_FUZZY_THRESHOLD", defaults.fuzzy_threshold),
        income_major_prefixes=_env_list(
            "QUICKLEDGER_INCOME_MAJOR_PREFIXES", defaults.income_major_prefixes
        ),
        allow_fallback_ids=_env_bool("QUICKLEDGER_ALLOW_FALLBACK_IDS", defaults.allow_fallback_ids),
        timezone=os.getenv("QUICKLEDGER_TIMEZONE", defaults.timezone),
        log_level=os.getenv("QUICKLEDGER_LOG_LEVEL", defaults.log_level),
    )


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Return the SQLite file to use.

    An explicit path wins, then QUICKLEDGER_DB_PATH, then
    ~/.quickledger/quickledger.db (the directory is created on demand).
    """
    if database_path:
        return database_path
    from_env = os.getenv(DB_PATH_ENV)
    if from_env:
        return from_env
    db_dir = Path.home() / DEFAULT_DB_DIR
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / DEFAULT_DB_FILE)


@lru_cache
def load_settings() -> QuickEntrySettings:
    """Return cached settings loaded from environment variables."""
    return settings_from_env()


__all__ = [
    "ConfigurationError",
    "QuickEntrySettings",
    "load_settings",
    "settings_from_env",
    "resolve_database_path",
    "DB_PATH_ENV",
]
