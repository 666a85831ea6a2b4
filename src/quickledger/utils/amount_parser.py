"""Amount extraction utilities."""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

DIGIT_RUN = re.compile(r"\d+")


@dataclass(frozen=True)
class AmountExtraction:
    """Result of scanning free text for an amount.

    ``matched`` is False when no digit run qualified; that is a result,
    not an error.
    """

    amount: int
    matched: bool
    unit: Optional[str] = None
    token: str = ""
    start: int = -1


NO_AMOUNT = AmountExtraction(amount=0, matched=False)


def longest_digit_run(text: str, min_digits: int, start: int = 0) -> Optional[re.Match]:
    """Return the longest digit run with at least ``min_digits`` digits.

    Only runs beginning at or after ``start`` are considered. Ties go to the
    first run in the text.
    """
    best: Optional[re.Match] = None
    for match in DIGIT_RUN.finditer(text, start):
        length = match.end() - match.start()
        if length < min_digits:
            continue
        if best is None or length > best.end() - best.start():
            best = match
    return best


def extract_amount(
    text: str,
    min_digits: int = 3,
    units: Iterable[str] = ("元", "塊", "圓"),
) -> AmountExtraction:
    """Extract a positive integer amount from free text.

    Picks the longest digit run that has at least ``min_digits`` digits, so
    short runs such as "7" in "7-11" are treated as noise.

    Handles texts like:
    - "午餐150"
    - "計程車 350元"
    - "7-11 咖啡 120"

    Args:
        text: Free text
        min_digits: Minimum digit count for a run to count as an amount
        units: Supported currency units that may directly follow the amount

    Returns:
        AmountExtraction with ``matched=False`` when nothing qualified
    """
    if not text:
        return NO_AMOUNT

    best = longest_digit_run(text, min_digits)
    if best is None:
        return NO_AMOUNT

    amount = int(best.group())
    if amount <= 0:
        return NO_AMOUNT

    rest = text[best.end():]
    unit = next((u for u in units if rest.startswith(u)), None)
    return AmountExtraction(
        amount=amount,
        matched=True,
        unit=unit,
        token=best.group(),
        start=best.start(),
    )
