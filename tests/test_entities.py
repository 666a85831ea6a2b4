"""Tests for domain entities."""

from datetime import datetime, UTC

import pytest

from quickledger.domain.entities import (
    BookkeepingID,
    CategoryRecord,
    Direction,
    FallbackID,
    MatchResult,
    MatchType,
    ParsedEntry,
    ParsedFragments,
)


class TestBookkeepingID:
    def test_str(self):
        assert str(BookkeepingID("20250715", 1)) == "20250715-00001"
        assert str(BookkeepingID("20250715", 99999)) == "20250715-99999"

    def test_parse(self):
        assert BookkeepingID.parse("20250715-00042") == BookkeepingID("20250715", 42)

    @pytest.mark.parametrize("value", ["20250715", "20250715-42", "2025071-00001", "x-00001"])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            BookkeepingID.parse(value)

    @pytest.mark.parametrize("sequence", [0, 100_000, -1])
    def test_sequence_range(self, sequence):
        with pytest.raises(ValueError):
            BookkeepingID("20250715", sequence)

    def test_total_order(self):
        ids = [
            BookkeepingID("20250716", 1),
            BookkeepingID("20250715", 2),
            BookkeepingID("20250715", 1),
        ]
        assert [str(i) for i in sorted(ids)] == [
            "20250715-00001",
            "20250715-00002",
            "20250716-00001",
        ]

    def test_immutability(self):
        entry_id = BookkeepingID("20250715", 1)
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            entry_id.sequence = 2


def test_fallback_id_str():
    entry_id = FallbackID(1752553800000, "00042")
    assert str(entry_id) == "F1752553800000-00042"
    assert entry_id.is_fallback
    assert not BookkeepingID("20250715", 1).is_fallback


class TestMatchResult:
    record = CategoryRecord("101", "餐飲", "02", "午餐")

    def test_exact_must_score_one(self):
        with pytest.raises(ValueError):
            MatchResult(self.record, 0.9, MatchType.EXACT)

    def test_fuzzy_cannot_score_one(self):
        with pytest.raises(ValueError):
            MatchResult(self.record, 1.0, MatchType.CONTAINS_SUB_NAME)

    @pytest.mark.parametrize("score", [-0.1, 1.5])
    def test_score_range(self, score):
        with pytest.raises(ValueError):
            MatchResult(self.record, score, MatchType.SIMILAR_NAME)

    def test_valid(self):
        match = MatchResult(self.record, 0.98, MatchType.SYNONYM_EXACT)
        assert match.category.code == "101-02"


def test_fragments_require_positive_amount():
    with pytest.raises(ValueError):
        ParsedFragments("午餐", 0, "0", "刷卡", False)


def test_direction_labels():
    assert Direction.INCOME.label == "收入"
    assert Direction.EXPENSE.label == "支出"


def test_signed_amount():
    entry = ParsedEntry(
        id=BookkeepingID("20250715", 1),
        user_id="alice",
        amount=120,
        direction=Direction.EXPENSE,
        category=CategoryRecord("101", "餐飲", "02", "午餐"),
        payment_method="刷卡",
        raw_text="午餐120",
        created_at=datetime.now(UTC),
    )
    assert entry.signed_amount == -120
