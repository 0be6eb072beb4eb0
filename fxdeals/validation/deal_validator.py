"""Business-rule validation for one deal."""

from __future__ import annotations

from fxdeals.currency import CurrencyDirectoryService
from fxdeals.domain import (
    DEAL_AMOUNT_MAX_PRECISION,
    DEAL_AMOUNT_MAX_SCALE,
    Deal,
    DealErrorKind,
    Err,
    Ok,
    Result,
    domain_deal_amount_fits_storage,
    domain_deal_amount_is_positive,
)


class DealValidator:
    """Validate field-level and cross-field deal rules.

    Rules run in a fixed order and stop at the first failure:
    unique id, from-currency code, to-currency code, distinct pair,
    timestamp presence, positive amount, storable amount.
    """

    def __init__(self, currency_directory: CurrencyDirectoryService):
        """Initialize deal validator.

        Args:
            currency_directory: Directory used for ISO code validity checks.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when currency_directory is None.
        """

        if currency_directory is None:
            raise ValueError("currency_directory must not be None")
        self._currency_directory = currency_directory

    def validation_validate(self, deal: Deal) -> Result[Deal]:
        """Validate one deal and return the first failed rule.

        Args:
            deal: Candidate deal.

        Returns:
            Result[Deal]: The same deal when valid, else the failing rule.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if not deal.deal_unique_id:
            return Err(DealErrorKind.MISSING_UNIQUE_ID, "deal unique ID is missing")

        from_currency_code = deal.from_currency.currency_code if deal.from_currency else None
        to_currency_code = deal.to_currency.currency_code if deal.to_currency else None

        if not self._currency_directory.currency_is_valid_code(from_currency_code):
            return Err(DealErrorKind.INVALID_CURRENCY_CODE, f"invalid from currency code: {from_currency_code}")
        if not self._currency_directory.currency_is_valid_code(to_currency_code):
            return Err(DealErrorKind.INVALID_CURRENCY_CODE, f"invalid to currency code: {to_currency_code}")
        if from_currency_code == to_currency_code:
            return Err(DealErrorKind.SAME_CURRENCY_PAIR, "from currency and to currency must differ")
        if deal.deal_timestamp is None:
            return Err(DealErrorKind.INVALID_TIMESTAMP, "deal timestamp is missing")
        if not domain_deal_amount_is_positive(deal.deal_amount):
            return Err(DealErrorKind.INVALID_AMOUNT, "deal amount is missing or not positive")
        if not domain_deal_amount_fits_storage(deal.deal_amount):
            return Err(
                DealErrorKind.INVALID_AMOUNT,
                f"deal amount exceeds {DEAL_AMOUNT_MAX_SCALE} decimal places"
                f" or {DEAL_AMOUNT_MAX_PRECISION - DEAL_AMOUNT_MAX_SCALE} integer digits",
            )

        return Ok(deal)

    def validation_is_valid(self, deal: Deal) -> bool:
        """Return whether a deal passes every rule.

        Args:
            deal: Candidate deal.

        Returns:
            bool: True when valid.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return isinstance(self.validation_validate(deal), Ok)
