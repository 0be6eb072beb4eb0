"""Single-deal submission and duplicate-checked save path."""

from __future__ import annotations

import logging
from dataclasses import replace

from fxdeals.currency import CurrencyDirectoryService
from fxdeals.db import DealRecordStorePort, RecordAlreadyExistsError
from fxdeals.domain import Currency, Deal, DealErrorKind, Err, Ok, Result
from fxdeals.validation import DealValidator

from .interfaces import DealSubmissionPort

logger = logging.getLogger(__name__)


class DealSubmissionService(DealSubmissionPort):
    """Persist deals after duplicate checks, with optional full validation.

    The existence check before insert is an early exit only. Concurrent
    submissions of one unique id are settled by the store's unique key, which
    is reported as the same `DUPLICATE_DEAL` error.
    """

    def __init__(
        self,
        store: DealRecordStorePort,
        currency_directory: CurrencyDirectoryService,
        validator: DealValidator | None = None,
    ):
        """Initialize deal submission service.

        Args:
            store: Record store for deal lookup and insert.
            currency_directory: Directory used to resolve unsaved currencies.
            validator: Optional validator override.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if store is None:
            raise ValueError("store must not be None")
        if currency_directory is None:
            raise ValueError("currency_directory must not be None")

        self._store = store
        self._currency_directory = currency_directory
        self._validator = validator or DealValidator(currency_directory=currency_directory)

    def deal_exists_by_unique_id(self, deal_unique_id: str) -> bool:
        """Return whether a deal with the unique id is already stored.

        Args:
            deal_unique_id: External deal identifier.

        Returns:
            bool: True when a stored deal exists.

        Raises:
            RuntimeError: Raised when the store read fails.
        """

        return self._store.db_deal_find_by_unique_id(deal_unique_id) is not None

    def deal_find_by_unique_id(self, deal_unique_id: str) -> Deal | None:
        """Fetch one stored deal by unique identifier.

        Args:
            deal_unique_id: External deal identifier.

        Returns:
            Deal | None: Stored deal or None.

        Raises:
            RuntimeError: Raised when the store read fails.
        """

        return self._store.db_deal_find_by_unique_id(deal_unique_id)

    def deal_save(self, deal: Deal) -> Result[Deal]:
        """Persist one deal unless its unique id is already stored.

        Currencies without a store identity are resolved through the currency
        directory before insert. Any exception raised by the store, including
        connection and driver errors not wrapped in `RuntimeError`, becomes
        `STORE_FAILURE`.

        Args:
            deal: Deal to persist.

        Returns:
            Result[Deal]: Stored deal, or `DUPLICATE_DEAL` / `STORE_FAILURE` error.

        Raises:
            RuntimeError: This method converts store failures into results.
        """

        duplicate_error = Err(
            kind=DealErrorKind.DUPLICATE_DEAL,
            message=f"deal with unique ID {deal.deal_unique_id} already exists",
        )
        try:
            if self.deal_exists_by_unique_id(deal.deal_unique_id):
                logger.warning("duplicate deal rejected", extra={"deal_unique_id": deal.deal_unique_id})
                return duplicate_error
        except Exception as error:
            return self._deal_store_failure(deal, error)

        from_currency_result = self._deal_resolve_currency(deal.from_currency)
        if isinstance(from_currency_result, Err):
            return from_currency_result
        to_currency_result = self._deal_resolve_currency(deal.to_currency)
        if isinstance(to_currency_result, Err):
            return to_currency_result

        resolved_deal = replace(
            deal,
            from_currency=from_currency_result.value,
            to_currency=to_currency_result.value,
        )
        try:
            stored_deal = self._store.db_deal_save(resolved_deal)
        except RecordAlreadyExistsError:
            logger.warning("duplicate deal rejected by store", extra={"deal_unique_id": deal.deal_unique_id})
            return duplicate_error
        except Exception as error:
            return self._deal_store_failure(deal, error)

        logger.info(
            "deal saved",
            extra={"deal_unique_id": stored_deal.deal_unique_id, "deal_id": stored_deal.deal_id},
        )
        return Ok(stored_deal)

    def deal_submit_single(self, deal: Deal) -> Result[Deal]:
        """Validate one deal and persist it through the duplicate-checked path.

        Args:
            deal: Candidate deal.

        Returns:
            Result[Deal]: Stored deal, or `VALIDATION_FAILED`, `DUPLICATE_DEAL`
            or `STORE_FAILURE` error.

        Raises:
            RuntimeError: This method converts failures into results.
        """

        validation_result = self._validator.validation_validate(deal)
        if isinstance(validation_result, Err):
            logger.warning(
                "deal validation failed",
                extra={"deal_unique_id": deal.deal_unique_id, "error_kind": validation_result.kind.value},
            )
            return Err(
                kind=DealErrorKind.VALIDATION_FAILED,
                message=f"Deal validation failed for unique ID {deal.deal_unique_id}: {validation_result.message}",
            )
        return self.deal_save(deal)

    def _deal_resolve_currency(self, currency: Currency) -> Result[Currency]:
        if currency.currency_id is not None:
            return Ok(currency)
        return self._currency_directory.currency_find_or_create(currency.currency_code)

    def _deal_store_failure(self, deal: Deal, error: Exception) -> Err:
        logger.error(
            "deal persistence failed",
            extra={"deal_unique_id": deal.deal_unique_id},
            exc_info=error,
        )
        return Err(kind=DealErrorKind.STORE_FAILURE, message=str(error))
