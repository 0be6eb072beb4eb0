"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules.
"""

from typing import Protocol

from fxdeals.domain import Currency, Deal, HealthStatus


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class RecordAlreadyExistsError(RuntimeError):
    """Raised when a write collides with a storage-level unique key."""


class DealRecordStorePort(Protocol):
    """Port definition for deal and currency persistence by unique key.

    Implementations must enforce uniqueness of `deal_unique_id` and
    `currency_code` at the storage layer.
    """

    def db_deal_find_by_unique_id(self, deal_unique_id: str) -> Deal | None:
        """Fetch one deal by its external unique identifier.

        Args:
            deal_unique_id: External deal identifier.

        Returns:
            Deal | None: Stored deal with resolved currencies, or None when absent.

        Raises:
            RuntimeError: Raised when the read fails.
        """

    def db_deal_save(self, deal: Deal) -> Deal:
        """Persist one new deal and assign its identity.

        Args:
            deal: Deal whose currencies already carry store identities.

        Returns:
            Deal: Stored deal with `deal_id` populated.

        Raises:
            RecordAlreadyExistsError: Raised when the unique id is already stored.
            ValueError: Raised when currency identities are missing.
            RuntimeError: Raised when persistence fails.
        """

    def db_currency_find_by_code(self, currency_code: str) -> Currency | None:
        """Fetch one currency by exact ISO code.

        Args:
            currency_code: ISO 4217 code.

        Returns:
            Currency | None: Stored currency, or None when absent.

        Raises:
            RuntimeError: Raised when the read fails.
        """

    def db_currency_save(self, currency: Currency) -> Currency:
        """Persist one new currency and assign its identity.

        Args:
            currency: Currency to create.

        Returns:
            Currency: Stored currency with `currency_id` populated.

        Raises:
            RecordAlreadyExistsError: Raised when the code is already stored.
            RuntimeError: Raised when persistence fails.
        """
