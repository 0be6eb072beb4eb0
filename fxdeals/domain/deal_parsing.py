"""Shared deal field parsing helpers.

This module centralizes text-to-value conversion used by batch ingestion and
by the request layer so timestamp and amount contracts stay identical on both
entry points.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Final

DEAL_TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

_DOMAIN_DEAL_TIMESTAMP_FORMATS: Final[tuple[str, ...]] = (
    DEAL_TIMESTAMP_FORMAT,
    "%Y-%m-%d %H:%M:%S.%f",
)

DEAL_AMOUNT_MAX_SCALE: Final[int] = 8
DEAL_AMOUNT_MAX_PRECISION: Final[int] = 24

_DOMAIN_DEAL_AMOUNT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def domain_deal_parse_timestamp(value: str | None) -> datetime | None:
    """Parse one deal timestamp in `YYYY-MM-DD HH:MM:SS` form.

    Fractional seconds are accepted. Surrounding whitespace is not.

    Args:
        value: Candidate timestamp text.

    Returns:
        datetime | None: Naive timestamp when parsable, else None.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not value:
        return None

    for supported_format in _DOMAIN_DEAL_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, supported_format)
        except ValueError:
            continue
    return None


def domain_deal_parse_amount(value: str | None) -> Decimal | None:
    """Parse one deal amount as a finite decimal.

    Plain and exponent notation are accepted. Surrounding whitespace, digit
    group underscores and `NaN`/`Infinity` literals are not.

    Args:
        value: Candidate amount text.

    Returns:
        Decimal | None: Parsed amount, or None when the text is not a decimal literal.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None or _DOMAIN_DEAL_AMOUNT_PATTERN.fullmatch(value) is None:
        return None

    try:
        return Decimal(value)
    except InvalidOperation:
        return None


def domain_deal_amount_is_positive(value: Decimal | None) -> bool:
    """Return whether an amount is present, finite and strictly positive.

    Args:
        value: Candidate amount.

    Returns:
        bool: True when the amount is usable for a deal.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None or not value.is_finite():
        return False
    return value > 0


def domain_deal_amount_fits_storage(value: Decimal | None) -> bool:
    """Return whether an amount is stored without rounding.

    The amount column keeps at most `DEAL_AMOUNT_MAX_SCALE` fractional digits
    and `DEAL_AMOUNT_MAX_PRECISION` digits overall. Trailing fractional zeros
    do not count against the scale.

    Args:
        value: Candidate amount.

    Returns:
        bool: True when the amount is finite and within both limits.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None or not value.is_finite():
        return False
    if value.is_zero():
        return True

    _, digits, exponent = value.as_tuple()
    while digits[-1] == 0:
        digits = digits[:-1]
        exponent += 1
    fractional_digit_count = max(0, -exponent)
    integer_digit_count = max(0, len(digits) + exponent)
    if fractional_digit_count > DEAL_AMOUNT_MAX_SCALE:
        return False
    return integer_digit_count <= DEAL_AMOUNT_MAX_PRECISION - DEAL_AMOUNT_MAX_SCALE
