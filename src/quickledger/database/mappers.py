"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the directory and entry tables
can change without touching the parser or the resolver.
"""

from typing import Iterable

from quickledger.domain import entities as domain
from quickledger.database.models import (
    Category as ORMCategory,
    Entry as ORMEntry,
)

SYNONYM_SEPARATOR = ","


def split_synonyms(raw: str) -> frozenset[str]:
    """Split a comma-separated synonym column into a set."""
    return frozenset(part.strip() for part in (raw or "").split(SYNONYM_SEPARATOR) if part.strip())


def join_synonyms(synonyms: Iterable[str]) -> str:
    """Join synonyms into the stored comma-separated form."""
    return SYNONYM_SEPARATOR.join(s.strip() for s in synonyms if s.strip())


def category_to_domain(orm_category: ORMCategory) -> domain.CategoryRecord:
    """Convert SQLAlchemy Category model to domain CategoryRecord."""
    return domain.CategoryRecord(
        major_code=orm_category.major_code,
        major_name=orm_category.major_name,
        sub_code=orm_category.sub_code,
        sub_name=orm_category.sub_name,
        synonyms=split_synonyms(orm_category.synonyms),
    )


def entry_to_orm(entry: domain.ParsedEntry) -> ORMEntry:
    """Convert a domain ParsedEntry to a new SQLAlchemy Entry row."""
    entry_id = entry.id
    return ORMEntry(
        entry_id=str(entry_id),
        user_id=entry.user_id,
        date_part=None if entry_id.is_fallback else entry_id.date_part,
        amount=entry.amount,
        direction=entry.direction.value,
        major_code=entry.category.major_code,
        sub_code=entry.category.sub_code,
        sub_name=entry.category.sub_name,
        payment_method=entry.payment_method,
        remark=entry.remark,
        raw_text=entry.raw_text,
        is_fallback_id=entry_id.is_fallback,
        created_at=entry.created_at,
    )


def entry_to_row(orm_entry: ORMEntry) -> dict:
    """Convert SQLAlchemy Entry row to a display dict."""
    return {
        "entry_id": orm_entry.entry_id,
        "amount": orm_entry.amount,
        "direction": orm_entry.direction,
        "category": orm_entry.sub_name,
        "payment_method": orm_entry.payment_method,
        "remark": orm_entry.remark,
        "created_at": orm_entry.created_at,
    }
