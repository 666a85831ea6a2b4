"""Quick-entry message parser.

Splits a short message such as ``"午餐-100"`` or ``"薪水50000轉帳"`` into a
category phrase, a positive amount and a payment method. Two shapes are
recognised:

- explicit negative: ``<category>-<digits><trailing>``, default payment 現金
- standard: ``<category><digits><trailing>``, default payment 刷卡

The amount is the longest digit run of at least ``min_amount_digits`` digits
that has a category phrase in front of it; when no run is that long, the first
such run is used. The shape is decided by whether that run carries a minus
sign, so "7-11咖啡120" is a standard entry for "7-11咖啡".
"""

import logging
import re
from typing import Optional

from quickledger.config import QuickEntrySettings, load_settings
from quickledger.domain.entities import ParsedFragments
from quickledger.domain.errors import (
    ErrorKind,
    ParseError,
    amount_too_large,
    leading_zero_rejected,
    unsupported_currency,
)
from quickledger.utils.amount_parser import DIGIT_RUN, longest_digit_run

logger = logging.getLogger(__name__)

NEGATIVE_SIGN = "-"


def _has_word(phrase: str) -> bool:
    return any(ch.isalnum() for ch in phrase)


def _phrase_start(message: str) -> Optional[int]:
    """Offset after the first word token; digit runs from here have a word before them."""
    for index, ch in enumerate(message):
        if ch.isalnum():
            run = DIGIT_RUN.match(message, index)
            return run.end() if run else index + 1
    return None


class MessageParser:
    """Parser for quick-entry messages. Stateless and safe to share."""

    def __init__(self, settings: Optional[QuickEntrySettings] = None):
        """Initialize message parser.

        Args:
            settings: Parsing constants (defaults to load_settings())
        """
        self.settings = settings or load_settings()

    def parse(self, text: Optional[str]) -> ParsedFragments:
        """Parse a quick-entry message.

        Args:
            text: Raw message text

        Returns:
            ParsedFragments with a positive amount

        Raises:
            ParseError: With kind EMPTY_MESSAGE, FORMAT_NOT_RECOGNIZED,
                LEADING_ZERO_REJECTED, NON_POSITIVE_AMOUNT, AMOUNT_TOO_LARGE
                or UNSUPPORTED_CURRENCY
        """
        message = (text or "").strip()
        if not message:
            raise ParseError(ErrorKind.EMPTY_MESSAGE, "空訊息")

        run = self.select_amount_run(message)
        if run is None:
            logger.warning("Unrecognized quick-entry format: %r", message)
            raise ParseError(ErrorKind.FORMAT_NOT_RECOGNIZED, "無法識別記帳格式", text=message)

        head = message[: run.start()].rstrip()
        is_negative = head.endswith(NEGATIVE_SIGN)
        phrase = head[: -len(NEGATIVE_SIGN)].strip() if is_negative else head.strip()
        if not _has_word(phrase):
            logger.warning("No category phrase in %r", message)
            raise ParseError(ErrorKind.FORMAT_NOT_RECOGNIZED, "無法識別記帳格式", text=message)

        raw_amount = run.group()
        if not is_negative and len(raw_amount) > 1 and raw_amount.startswith("0"):
            logger.warning("Leading zero rejected in amount %r", raw_amount)
            raise ParseError(
                ErrorKind.LEADING_ZERO_REJECTED,
                leading_zero_rejected(raw_amount),
                raw_amount=raw_amount,
                text=message,
            )

        amount = int(raw_amount)
        self._check_amount(amount, raw_amount)

        trailing = message[run.end():].strip()
        self._check_currency(trailing)
        trailing = self._strip_unit(trailing)

        if is_negative:
            payment = self._scan_payment(trailing, self.settings.negative_default_payment)
        else:
            payment = self._scan_payment(trailing, self.settings.standard_default_payment)

        fragments = ParsedFragments(
            category_phrase=phrase,
            amount=amount,
            raw_amount_token=f"{NEGATIVE_SIGN}{raw_amount}" if is_negative else raw_amount,
            payment_method=payment,
            is_explicit_negative=is_negative,
            remark=self._remark(phrase, trailing),
        )
        logger.debug(
            "Parsed %r -> phrase=%r amount=%d payment=%s negative=%s",
            message,
            fragments.category_phrase,
            fragments.amount,
            fragments.payment_method,
            fragments.is_explicit_negative,
        )
        return fragments

    def select_amount_run(self, message: str) -> Optional[re.Match]:
        """Pick the digit run that holds the amount, or None.

        Only runs with a word character somewhere before them qualify.
        """
        start = _phrase_start(message)
        if start is None:
            return None
        return longest_digit_run(
            message, self.settings.min_amount_digits, start
        ) or DIGIT_RUN.search(message, start)

    def _check_amount(self, amount: int, raw_amount: str) -> None:
        if amount <= 0:
            logger.warning("Non-positive amount %r rejected", raw_amount)
            raise ParseError(
                ErrorKind.NON_POSITIVE_AMOUNT, "金額必須大於0", raw_amount=raw_amount
            )
        if amount > self.settings.max_amount:
            logger.warning("Amount %d above maximum %d", amount, self.settings.max_amount)
            raise ParseError(
                ErrorKind.AMOUNT_TOO_LARGE,
                amount_too_large(amount, self.settings.max_amount),
                raw_amount=raw_amount,
                limit=self.settings.max_amount,
            )

    def _check_currency(self, trailing: str) -> None:
        upper = trailing.upper()
        for currency in self.settings.unsupported_currencies:
            if currency and upper.endswith(currency.upper()):
                logger.warning("Unsupported currency suffix in %r", trailing)
                raise ParseError(
                    ErrorKind.UNSUPPORTED_CURRENCY,
                    unsupported_currency(currency),
                    suffix=currency,
                )

    def _strip_unit(self, trailing: str) -> str:
        for unit in self.settings.supported_units:
            if trailing.startswith(unit):
                trailing = trailing[len(unit):].strip()
                break
        for unit in self.settings.supported_units:
            if trailing.endswith(unit):
                trailing = trailing[: -len(unit)].strip()
                break
        return trailing

    def _scan_payment(self, trailing: str, default: str) -> str:
        # First listed method found anywhere in the trailing text wins
        for method in self.settings.payment_methods:
            if method in trailing:
                return method
        return default

    def _remark(self, phrase: str, trailing: str) -> str:
        leftover = trailing
        for method in self.settings.payment_methods:
            if method in leftover:
                leftover = leftover.replace(method, "", 1).strip()
                break
        return f"{phrase} {leftover}" if leftover else phrase
