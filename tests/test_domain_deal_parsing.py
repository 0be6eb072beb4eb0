"""Regression tests for shared deal timestamp and amount parsing helpers."""

from datetime import datetime
from decimal import Decimal

from fxdeals.domain import (
    DealBatchReport,
    domain_deal_amount_fits_storage,
    domain_deal_amount_is_positive,
    domain_deal_parse_amount,
    domain_deal_parse_timestamp,
)


def test_domain_deal_parse_timestamp_accepts_supported_variants() -> None:
    """Parse the canonical deal timestamp layout with and without fractions.

    Returns:
        None: Assertions validate timestamp parsing.

    Raises:
        AssertionError: Raised when supported values are not parsed.
    """

    assert domain_deal_parse_timestamp("2024-08-20 12:30:00") == datetime(2024, 8, 20, 12, 30, 0)
    assert domain_deal_parse_timestamp("2024-08-20 12:30:00.250") == datetime(2024, 8, 20, 12, 30, 0, 250000)


def test_domain_deal_parse_timestamp_returns_none_for_invalid_values() -> None:
    """Return None for blank, ISO-T separated and out-of-range timestamps.

    Returns:
        None: Assertions validate invalid timestamp handling.

    Raises:
        AssertionError: Raised when invalid values are parsed unexpectedly.
    """

    assert domain_deal_parse_timestamp(None) is None
    assert domain_deal_parse_timestamp("") is None
    assert domain_deal_parse_timestamp("2024-08-20") is None
    assert domain_deal_parse_timestamp("2024-08-20T12:30:00") is None
    assert domain_deal_parse_timestamp("2024-13-20 12:30:00") is None
    assert domain_deal_parse_timestamp("yesterday") is None


def test_domain_deal_parse_amount_handles_numeric_and_invalid_text() -> None:
    """Parse finite decimals and reject blank, textual and non-finite amounts.

    Returns:
        None: Assertions validate amount parsing.

    Raises:
        AssertionError: Raised when amount parsing diverges.
    """

    assert domain_deal_parse_amount("1000.00") == Decimal("1000.00")
    assert domain_deal_parse_amount("-5.00") == Decimal("-5.00")
    assert domain_deal_parse_amount("") is None
    assert domain_deal_parse_amount("abc") is None
    assert domain_deal_parse_amount("NaN") is None
    assert domain_deal_parse_amount("Infinity") is None


def test_domain_deal_parse_amount_rejects_padding_and_digit_separators() -> None:
    """Reject amount text the timestamp parser would also refuse to trim.

    Returns:
        None: Assertions validate strict amount literals.

    Raises:
        AssertionError: Raised when loose amount text is parsed.
    """

    assert domain_deal_parse_amount(" 5 ") is None
    assert domain_deal_parse_amount("5 ") is None
    assert domain_deal_parse_amount("1_000") is None
    assert domain_deal_parse_amount("1,000") is None
    assert domain_deal_parse_amount("+5") == Decimal("5")
    assert domain_deal_parse_amount(".5") == Decimal("0.5")
    assert domain_deal_parse_amount("1e3") == Decimal("1000")
    assert domain_deal_parse_amount("2.50E-2") == Decimal("0.025")


def test_domain_deal_amount_fits_storage_enforces_scale_and_precision() -> None:
    """Accept up to 8 fractional and 16 integer digits.

    Returns:
        None: Assertions validate storage limits.

    Raises:
        AssertionError: Raised when limits diverge.
    """

    assert domain_deal_amount_fits_storage(Decimal("1.12345678"))
    assert domain_deal_amount_fits_storage(Decimal("1.123456780"))
    assert domain_deal_amount_fits_storage(Decimal("9999999999999999.99999999"))
    assert domain_deal_amount_fits_storage(Decimal("1E+15"))
    assert domain_deal_amount_fits_storage(Decimal("0"))
    assert not domain_deal_amount_fits_storage(Decimal("0.000000001"))
    assert not domain_deal_amount_fits_storage(Decimal("1.123456789"))
    assert not domain_deal_amount_fits_storage(Decimal("12345678901234567"))
    assert not domain_deal_amount_fits_storage(Decimal("1E+16"))
    assert not domain_deal_amount_fits_storage(Decimal("NaN"))
    assert not domain_deal_amount_fits_storage(None)


def test_domain_deal_amount_is_positive_rejects_zero_negative_and_missing() -> None:
    """Accept strictly positive amounts only.

    Returns:
        None: Assertions validate positivity rule.

    Raises:
        AssertionError: Raised when positivity rule diverges.
    """

    assert domain_deal_amount_is_positive(Decimal("0.01"))
    assert not domain_deal_amount_is_positive(Decimal("0"))
    assert not domain_deal_amount_is_positive(Decimal("-1"))
    assert not domain_deal_amount_is_positive(None)
    assert not domain_deal_amount_is_positive(Decimal("NaN"))


def test_domain_deal_batch_report_summary_message() -> None:
    """Render the batch summary line and error flag from counters.

    Returns:
        None: Assertions validate report helpers.

    Raises:
        AssertionError: Raised when summary text diverges.
    """

    report = DealBatchReport(successful_count=1, total_count=2, errors=("Row 2: failed",))

    assert report.batch_has_errors()
    assert report.batch_summary_message() == "Batch deals processing complete: 1 out of 2 deals saved successfully."
    assert not DealBatchReport(successful_count=0, total_count=0).batch_has_errors()
