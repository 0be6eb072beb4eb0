"""Shared in-memory record store and service fixtures for deal tests."""

from __future__ import annotations

from dataclasses import replace

import pytest

from fxdeals.currency import CurrencyDirectoryService
from fxdeals.db import RecordAlreadyExistsError
from fxdeals.domain import Currency, Deal
from fxdeals.jobs import DealBatchIngestionJob, DealSubmissionService


class InMemoryDealRecordStore:
    """Dictionary-backed record store enforcing unique deal ids and currency codes."""

    def __init__(self) -> None:
        """Initialize empty store state and call counters.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.deals_by_unique_id: dict[str, Deal] = {}
        self.currencies_by_code: dict[str, Currency] = {}
        self.deal_save_calls = 0
        self.currency_save_calls = 0
        self._next_deal_id = 1
        self._next_currency_id = 1

    def db_deal_find_by_unique_id(self, deal_unique_id: str) -> Deal | None:
        """Return stored deal by unique id.

        Args:
            deal_unique_id: External deal identifier.

        Returns:
            Deal | None: Stored deal or None.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        return self.deals_by_unique_id.get(deal_unique_id)

    def db_deal_save(self, deal: Deal) -> Deal:
        """Store deal and assign identity.

        Args:
            deal: Deal to store.

        Returns:
            Deal: Stored deal.

        Raises:
            RecordAlreadyExistsError: Raised when the unique id is already stored.
        """

        self.deal_save_calls += 1
        if deal.deal_unique_id in self.deals_by_unique_id:
            raise RecordAlreadyExistsError(f"deal with unique ID {deal.deal_unique_id} already exists")
        stored_deal = replace(deal, deal_id=self._next_deal_id)
        self._next_deal_id += 1
        self.deals_by_unique_id[deal.deal_unique_id] = stored_deal
        return stored_deal

    def db_currency_find_by_code(self, currency_code: str) -> Currency | None:
        """Return stored currency by code.

        Args:
            currency_code: ISO code.

        Returns:
            Currency | None: Stored currency or None.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        return self.currencies_by_code.get(currency_code)

    def db_currency_save(self, currency: Currency) -> Currency:
        """Store currency and assign identity.

        Args:
            currency: Currency to store.

        Returns:
            Currency: Stored currency.

        Raises:
            RecordAlreadyExistsError: Raised when the code is already stored.
        """

        self.currency_save_calls += 1
        if currency.currency_code in self.currencies_by_code:
            raise RecordAlreadyExistsError(f"currency {currency.currency_code} already exists")
        stored_currency = replace(currency, currency_id=self._next_currency_id)
        self._next_currency_id += 1
        self.currencies_by_code[currency.currency_code] = stored_currency
        return stored_currency


@pytest.fixture
def deal_store() -> InMemoryDealRecordStore:
    """Provide an empty in-memory record store."""

    return InMemoryDealRecordStore()


@pytest.fixture
def currency_directory(deal_store: InMemoryDealRecordStore) -> CurrencyDirectoryService:
    """Provide a currency directory over the in-memory store."""

    return CurrencyDirectoryService(store=deal_store)


@pytest.fixture
def submission_service(
    deal_store: InMemoryDealRecordStore,
    currency_directory: CurrencyDirectoryService,
) -> DealSubmissionService:
    """Provide a submission service over the in-memory store."""

    return DealSubmissionService(store=deal_store, currency_directory=currency_directory)


@pytest.fixture
def batch_ingestion_job(
    currency_directory: CurrencyDirectoryService,
    submission_service: DealSubmissionService,
) -> DealBatchIngestionJob:
    """Provide a batch ingestion job over the in-memory store."""

    return DealBatchIngestionJob(currency_directory=currency_directory, submission_service=submission_service)
