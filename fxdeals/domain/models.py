"""Typed domain models shared across runtime layers.

Deals and currencies are immutable value objects. Persisted instances carry
their store-assigned identity; unsaved instances carry `None`.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class Currency:
    """Currency reference record keyed by ISO 4217 code.

    Attributes:
        currency_code: ISO 4217 alphabetic code, upper-case by convention.
        currency_id: Store-assigned identity, or None when not yet persisted.
        currency_name: Optional display name.
        currency_symbol: Optional display symbol.
    """

    currency_code: str
    currency_id: int | None = None
    currency_name: str | None = None
    currency_symbol: str | None = None


@dataclass(frozen=True)
class Deal:
    """One foreign-exchange deal.

    Attributes:
        deal_unique_id: Externally supplied identifier, unique across all deals.
        from_currency: Currency the amount is exchanged from.
        to_currency: Currency the amount is exchanged to.
        deal_timestamp: Deal timestamp without timezone.
        deal_amount: Strictly positive deal amount.
        deal_id: Store-assigned identity, or None when not yet persisted.
    """

    deal_unique_id: str | None
    from_currency: Currency
    to_currency: Currency
    deal_timestamp: datetime | None
    deal_amount: Decimal | None
    deal_id: int | None = None


@dataclass(frozen=True)
class DealBatchReport:
    """Outcome of one batch ingestion call.

    Attributes:
        successful_count: Number of rows persisted as deals.
        total_count: Number of rows read from the input.
        errors: One message per failed row in row order, plus at most one
            whole-file error entry.
    """

    successful_count: int
    total_count: int
    errors: tuple[str, ...] = field(default_factory=tuple)

    def batch_has_errors(self) -> bool:
        """Return whether any row or whole-file failure was recorded.

        Returns:
            bool: True when the error list is non-empty.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return bool(self.errors)

    def batch_summary_message(self) -> str:
        """Render the one-line batch summary used by API and CLI surfaces.

        Returns:
            str: Human-readable summary line.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return (
            f"Batch deals processing complete: {self.successful_count} out of "
            f"{self.total_count} deals saved successfully."
        )
