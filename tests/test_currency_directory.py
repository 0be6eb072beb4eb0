"""Unit tests for ISO currency code validation and find-or-create resolution."""

from __future__ import annotations

import pytest

from fxdeals.currency import CurrencyDirectoryService, currency_is_iso_4217_code
from fxdeals.db import RecordAlreadyExistsError
from fxdeals.domain import Currency, DealErrorKind, Err, Ok

from conftest import InMemoryDealRecordStore


class _RacingCurrencyStore(InMemoryDealRecordStore):
    """Store stub whose first lookup misses a currency inserted concurrently."""

    def __init__(self, concurrent_code: str) -> None:
        """Initialize racing stub with one pre-seeded currency.

        Args:
            concurrent_code: Code inserted by the simulated concurrent writer.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        super().__init__()
        self.currencies_by_code[concurrent_code] = Currency(currency_code=concurrent_code, currency_id=77)
        self._lookup_calls = 0

    def db_currency_find_by_code(self, currency_code: str) -> Currency | None:
        """Hide the seeded currency on the first lookup only.

        Args:
            currency_code: ISO code.

        Returns:
            Currency | None: None on first call, stored value afterwards.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self._lookup_calls += 1
        if self._lookup_calls == 1:
            return None
        return super().db_currency_find_by_code(currency_code)


class _FailingCurrencyStore(InMemoryDealRecordStore):
    """Store stub whose currency reads fail."""

    def db_currency_find_by_code(self, currency_code: str) -> Currency | None:
        """Raise deterministic store failure.

        Args:
            currency_code: ISO code.

        Returns:
            Currency | None: This stub never returns.

        Raises:
            RuntimeError: Always raised to simulate a store outage.
        """

        raise RuntimeError("currency lookup failed")


def test_currency_is_iso_4217_code_accepts_known_uppercase_codes() -> None:
    """Accept recognized uppercase ISO 4217 codes.

    Returns:
        None: Assertions validate accepted codes.

    Raises:
        AssertionError: Raised when a known code is rejected.
    """

    for currency_code in ("USD", "EUR", "JPY", "GBP", "AED"):
        assert currency_is_iso_4217_code(currency_code)


def test_currency_is_iso_4217_code_rejects_unknown_malformed_and_lowercase() -> None:
    """Reject empty, unknown, wrong-length, padded and lowercase codes.

    Returns:
        None: Assertions validate rejected codes.

    Raises:
        AssertionError: Raised when an invalid code is accepted.
    """

    for currency_code in (None, "", "XYZ", "US", "USDD", " USD", "usd", "Eur", "12A"):
        assert not currency_is_iso_4217_code(currency_code)


def test_currency_directory_find_or_create_creates_once_then_reuses(deal_store) -> None:
    """Create an unseen currency once and return the same record afterwards.

    Returns:
        None: Assertions validate idempotent resolution.

    Raises:
        AssertionError: Raised when duplicate currency records are created.
    """

    directory = CurrencyDirectoryService(store=deal_store)

    first_result = directory.currency_find_or_create("EUR")
    second_result = directory.currency_find_or_create("EUR")

    assert isinstance(first_result, Ok)
    assert isinstance(second_result, Ok)
    assert first_result.value == second_result.value
    assert first_result.value.currency_id is not None
    assert first_result.value.currency_name is None
    assert deal_store.currency_save_calls == 1
    assert directory.currency_find_by_code("EUR") == first_result.value


def test_currency_directory_find_or_create_leaves_existing_metadata_untouched(deal_store) -> None:
    """Return an existing currency without rewriting its metadata.

    Returns:
        None: Assertions validate metadata preservation.

    Raises:
        AssertionError: Raised when an existing record is modified.
    """

    stored = deal_store.db_currency_save(Currency(currency_code="USD", currency_name="US Dollar", currency_symbol="$"))
    directory = CurrencyDirectoryService(store=deal_store)

    result = directory.currency_find_or_create("USD")

    assert isinstance(result, Ok)
    assert result.value == stored
    assert deal_store.currency_save_calls == 1


def test_currency_directory_find_or_create_rereads_after_lost_race() -> None:
    """Return the concurrently inserted currency when create hits the unique key.

    Returns:
        None: Assertions validate race recovery.

    Raises:
        AssertionError: Raised when the race is not recovered.
    """

    store = _RacingCurrencyStore(concurrent_code="CHF")
    directory = CurrencyDirectoryService(store=store)

    result = directory.currency_find_or_create("CHF")

    assert isinstance(result, Ok)
    assert result.value.currency_id == 77
    assert store.currency_save_calls == 1


def test_currency_directory_find_or_create_reports_store_failure() -> None:
    """Convert store failures into STORE_FAILURE results.

    Returns:
        None: Assertions validate error conversion.

    Raises:
        AssertionError: Raised when store failure is not reported.
    """

    directory = CurrencyDirectoryService(store=_FailingCurrencyStore())

    result = directory.currency_find_or_create("USD")

    assert isinstance(result, Err)
    assert result.kind is DealErrorKind.STORE_FAILURE
    assert "USD" in result.message
    assert "currency lookup failed" in result.message


def test_currency_directory_create_raises_for_existing_code(deal_store) -> None:
    """Propagate the store uniqueness error from a direct create.

    Returns:
        None: Assertions validate uniqueness enforcement.

    Raises:
        AssertionError: Raised when duplicate create succeeds.
    """

    directory = CurrencyDirectoryService(store=deal_store)
    directory.currency_create(Currency(currency_code="GBP"))

    with pytest.raises(RecordAlreadyExistsError, match="GBP"):
        directory.currency_create(Currency(currency_code="GBP"))
