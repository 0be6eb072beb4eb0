"""Currency directory for ISO code validation and find-or-create resolution."""

from __future__ import annotations

import pycountry

from fxdeals.db import DealRecordStorePort, RecordAlreadyExistsError
from fxdeals.domain import Currency, DealErrorKind, Err, Ok, Result


def currency_is_iso_4217_code(currency_code: str | None) -> bool:
    """Return whether a code is a recognized ISO 4217 alphabetic code.

    Matching is case-sensitive: `usd` is rejected even though `USD` exists.

    Args:
        currency_code: Candidate code.

    Returns:
        bool: True when the code exists in the ISO 4217 database.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(currency_code, str) or not currency_code:
        return False
    if len(currency_code) != 3 or not currency_code.isalpha():
        return False

    currency_record = pycountry.currencies.get(alpha_3=currency_code)
    return currency_record is not None and currency_record.alpha_3 == currency_code


class CurrencyDirectoryService:
    """Resolve currency reference records against the deal record store.

    The directory never updates metadata of an existing currency. New
    currencies are created with only their code populated.
    """

    def __init__(self, store: DealRecordStorePort):
        """Initialize currency directory.

        Args:
            store: Record store exposing currency lookup and insert.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when store is None.
        """

        if store is None:
            raise ValueError("store must not be None")
        self._store = store

    def currency_is_valid_code(self, currency_code: str | None) -> bool:
        """Return whether a code is non-empty and a recognized ISO 4217 code.

        Args:
            currency_code: Candidate code.

        Returns:
            bool: Validity flag; never raises for bad input.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return currency_is_iso_4217_code(currency_code)

    def currency_find_by_code(self, currency_code: str) -> Currency | None:
        """Look up one stored currency by exact code.

        Args:
            currency_code: ISO 4217 code.

        Returns:
            Currency | None: Stored currency or None.

        Raises:
            RuntimeError: Raised when the store read fails.
        """

        return self._store.db_currency_find_by_code(currency_code)

    def currency_create(self, currency: Currency) -> Currency:
        """Persist one new currency record.

        Args:
            currency: Currency to create.

        Returns:
            Currency: Stored currency with identity.

        Raises:
            RecordAlreadyExistsError: Raised when the code already exists.
            RuntimeError: Raised when the store write fails.
        """

        return self._store.db_currency_save(currency)

    def currency_find_or_create(self, currency_code: str) -> Result[Currency]:
        """Resolve one stored currency by code, creating it when unseen.

        A create that loses a uniqueness race re-reads the winning row. Any
        store exception is returned as `STORE_FAILURE`.

        Args:
            currency_code: Validated ISO 4217 code.

        Returns:
            Result[Currency]: Resolved currency, or `STORE_FAILURE` error.

        Raises:
            RuntimeError: This method converts store failures into results.
        """

        try:
            existing_currency = self.currency_find_by_code(currency_code)
            if existing_currency is not None:
                return Ok(existing_currency)

            try:
                return Ok(self.currency_create(Currency(currency_code=currency_code)))
            except RecordAlreadyExistsError:
                concurrent_currency = self.currency_find_by_code(currency_code)
                if concurrent_currency is None:
                    raise
                return Ok(concurrent_currency)
        except Exception as error:
            return Err(
                kind=DealErrorKind.STORE_FAILURE,
                message=f"failed to resolve currency {currency_code}: {error}",
            )
