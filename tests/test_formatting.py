"""Tests for response formatting."""

import pytest

from quickledger.domain.entities import BookkeepingID, MatchResult, MatchType, ParsedFragments
from quickledger.domain.entry import assemble_entry
from quickledger.domain.errors import ErrorKind
from quickledger.domain.formatting import GENERIC_FAILURE_MESSAGE, ResponseFormatter


@pytest.fixture
def formatter(settings):
    return ResponseFormatter(settings)


@pytest.fixture
def lunch_entry(sample_categories, fixed_now):
    fragments = ParsedFragments(
        category_phrase="午餐",
        amount=120,
        raw_amount_token="120",
        payment_method="刷卡",
        is_explicit_negative=False,
        remark="午餐 和同事",
    )
    match = MatchResult(sample_categories[1], 1.0, MatchType.EXACT)
    return assemble_entry(
        fragments,
        match,
        BookkeepingID("20250715", 7),
        "alice",
        raw_text="午餐120 和同事",
        created_at=fixed_now,
    )


def test_success_contains_id_amount_and_category(formatter, lunch_entry):
    message = formatter.format_success(lunch_entry)
    assert str(lunch_entry.id) in message
    assert str(lunch_entry.amount) in message
    assert lunch_entry.category.sub_name in message


def test_success_layout(formatter, lunch_entry):
    lines = formatter.format_success(lunch_entry).splitlines()
    assert lines == [
        "記帳成功！",
        "收支ID：20250715-00007",
        "金額：120元 (支出)",
        "支付方式：刷卡",
        "時間：2025/07/15 12:30",
        "科目：午餐",
        "備註：午餐 和同事",
    ]


@pytest.mark.parametrize(
    "kind, context, expected",
    [
        (ErrorKind.EMPTY_MESSAGE, {}, "空訊息"),
        (ErrorKind.FORMAT_NOT_RECOGNIZED, {"raw_text": "午餐"}, "無法識別記帳格式"),
        (ErrorKind.LEADING_ZERO_REJECTED, {"raw_amount": "01"}, "前導零 \"01\""),
        (ErrorKind.NON_POSITIVE_AMOUNT, {}, "金額必須大於0"),
        (ErrorKind.AMOUNT_TOO_LARGE, {"limit": 999_999_999}, "999,999,999"),
        (ErrorKind.UNSUPPORTED_CURRENCY, {"suffix": "NT"}, "不支援的幣別單位: NT"),
        (ErrorKind.CATEGORY_NOT_FOUND, {"phrase": "不存在的科目"}, "找不到科目: 不存在的科目"),
        (ErrorKind.DIRECTORY_UNAVAILABLE, {}, "科目表"),
        (ErrorKind.SEQUENCE_EXHAUSTED, {"date_part": "20250715"}, "20250715"),
        (ErrorKind.ALLOCATOR_UNAVAILABLE, {}, "收支ID"),
        (ErrorKind.STORAGE_ERROR, {}, "儲存失敗"),
        (ErrorKind.SYSTEM_ERROR, {}, "系統錯誤"),
    ],
)
def test_failure_reason_per_kind(formatter, kind, context, expected):
    message = formatter.format_failure(kind, context)
    assert message.startswith("記帳失敗！")
    reason = message.splitlines()[-1]
    assert reason.startswith("錯誤原因：")
    assert expected in reason


def test_failure_accepts_kind_value(formatter):
    message = formatter.format_failure("CATEGORY_NOT_FOUND", {"phrase": "健身"})
    assert "找不到科目: 健身" in message


def test_failure_partial_details_from_raw_text(formatter, fixed_now):
    message = formatter.format_failure(
        ErrorKind.CATEGORY_NOT_FOUND,
        {"raw_text": "健身房1500現金", "phrase": "健身房", "now": fixed_now},
    )
    assert "金額：1500元" in message
    assert "支付方式：現金" in message
    assert "科目：健身房" in message
    assert "備註：健身房1500現金" in message
    assert "時間：2025/07/15 12:30" in message


def test_failure_without_details_uses_placeholders(formatter):
    message = formatter.format_failure(ErrorKind.EMPTY_MESSAGE, {"raw_text": ""})
    assert "金額：未知元" in message
    assert "支付方式：未指定" in message
    assert "科目：未知科目" in message


def test_failure_prefers_parsed_fragments(formatter):
    fragments = ParsedFragments("午餐", 120, "120", "刷卡", False)
    message = formatter.format_failure(
        ErrorKind.ALLOCATOR_UNAVAILABLE, {"raw_text": "午餐120", "fragments": fragments}
    )
    assert "金額：120元" in message
    assert "科目：午餐" in message


def test_unknown_kind_never_raises(formatter):
    assert formatter.format_failure("NOT_A_KIND", {}) == GENERIC_FAILURE_MESSAGE


def test_broken_entry_never_raises(formatter):
    assert formatter.format_success(None) == GENERIC_FAILURE_MESSAGE
