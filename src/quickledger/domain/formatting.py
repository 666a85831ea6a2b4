"""User-facing confirmation and error messages (Traditional Chinese)."""

import logging
from datetime import datetime
from typing import Any, Optional

from quickledger.config import QuickEntrySettings, load_settings
from quickledger.domain.entities import ParsedEntry, ParsedFragments
from quickledger.domain.errors import ErrorKind, error_reason
from quickledger.utils.amount_parser import DIGIT_RUN, extract_amount
from quickledger.utils.date_parser import get_timezone

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "記帳失敗！\n錯誤原因：系統錯誤，請稍後再試"
DISPLAY_FORMAT = "%Y/%m/%d %H:%M"
UNKNOWN_AMOUNT = "未知"
UNKNOWN_PAYMENT = "未指定"
UNKNOWN_SUBJECT = "未知科目"


class ResponseFormatter:
    """Render quick-entry results. Formatting never raises."""

    def __init__(self, settings: Optional[QuickEntrySettings] = None):
        self.settings = settings or load_settings()

    def _display_time(self, moment: Optional[datetime] = None) -> str:
        zone = get_timezone(self.settings.timezone)
        if moment is None:
            moment = datetime.now(zone)
        elif moment.tzinfo is None:
            moment = moment.replace(tzinfo=zone)
        return moment.astimezone(zone).strftime(DISPLAY_FORMAT)

    def format_success(self, entry: ParsedEntry) -> str:
        """Render the confirmation for an accepted entry.

        The text always contains the entry ID, the amount and the category name.
        """
        try:
            return "\n".join(
                [
                    "記帳成功！",
                    f"收支ID：{entry.id}",
                    f"金額：{entry.amount}元 ({entry.direction.label})",
                    f"支付方式：{entry.payment_method}",
                    f"時間：{self._display_time(entry.created_at)}",
                    f"科目：{entry.category.sub_name}",
                    f"備註：{entry.remark or entry.category.sub_name}",
                ]
            )
        except Exception:
            logger.exception("Failed to format success message")
            return GENERIC_FAILURE_MESSAGE

    def format_failure(
        self, error_kind: ErrorKind | str, context: Optional[dict[str, Any]] = None
    ) -> str:
        """Render a failure message with a reason specific to ``error_kind``.

        Args:
            error_kind: ErrorKind or its string value
            context: Optional ``raw_text``, ``fragments`` (ParsedFragments),
                ``now`` and kind-specific details such as ``phrase``

        Returns:
            Multi-line message ending in ``錯誤原因：<reason>``
        """
        try:
            context = context or {}
            kind = ErrorKind(error_kind)
            raw_text = str(context.get("raw_text") or "")
            amount, payment, subject = self._partial(raw_text, context.get("fragments"))
            return "\n".join(
                [
                    "記帳失敗！",
                    f"金額：{amount}元",
                    f"支付方式：{payment}",
                    f"時間：{self._display_time(context.get('now'))}",
                    f"科目：{subject}",
                    f"備註：{raw_text}",
                    f"錯誤原因：{error_reason(kind, context)}",
                ]
            )
        except Exception:
            logger.exception("Failed to format failure message for %r", error_kind)
            return GENERIC_FAILURE_MESSAGE

    def _partial(
        self, raw_text: str, fragments: Optional[ParsedFragments]
    ) -> tuple[str, str, str]:
        """Best-effort amount, payment method and subject for a failed entry."""
        if fragments is not None:
            return str(fragments.amount), fragments.payment_method, fragments.category_phrase

        amount = UNKNOWN_AMOUNT
        payment = UNKNOWN_PAYMENT
        subject = UNKNOWN_SUBJECT
        if not raw_text:
            return amount, payment, subject

        extracted = extract_amount(raw_text, min_digits=1, units=self.settings.supported_units)
        if extracted.matched:
            amount = str(extracted.amount)

        for method in self.settings.payment_methods:
            if method in raw_text:
                payment = method
                break

        leftover = DIGIT_RUN.sub("", raw_text)
        for token in (*self.settings.payment_methods, *self.settings.supported_units, "-"):
            leftover = leftover.replace(token, "")
        if leftover.strip():
            subject = leftover.strip()
        return amount, payment, subject
