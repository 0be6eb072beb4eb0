"""Database service for deal and currency persistence by unique key."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, Engine, Numeric, String, bindparam, text
from sqlalchemy.engine import Dialect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.types import TypeDecorator, TypeEngine

from fxdeals.domain import Currency, Deal

from .interfaces import DealRecordStorePort, RecordAlreadyExistsError


class DealAmountType(TypeDecorator):
    """Exact decimal column type for deal amounts.

    PostgreSQL uses `NUMERIC(24, 8)`. SQLite has no exact decimal storage, so
    the amount is written and read as plain decimal text there.
    """

    impl = Numeric(24, 8)
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(40))
        return dialect.type_descriptor(Numeric(24, 8, asdecimal=True))

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> Decimal | str | None:
        if value is None or dialect.name != "sqlite":
            return value
        return format(Decimal(value), "f")

    def process_result_value(self, value: Any, dialect: Dialect) -> Decimal | None:
        if value is None or isinstance(value, Decimal):
            return value
        return Decimal(str(value))


_DB_DEAL_AMOUNT_TYPE = DealAmountType()

_DB_DEAL_SELECT_SQL = (
    "SELECT "
    "d.deal_id, d.deal_unique_id, d.deal_timestamp, d.deal_amount, "
    "fc.currency_id AS from_currency_id, fc.currency_code AS from_currency_code, "
    "fc.currency_name AS from_currency_name, fc.currency_symbol AS from_currency_symbol, "
    "tc.currency_id AS to_currency_id, tc.currency_code AS to_currency_code, "
    "tc.currency_name AS to_currency_name, tc.currency_symbol AS to_currency_symbol "
    "FROM deal d "
    "JOIN currency fc ON fc.currency_id = d.from_currency_id "
    "JOIN currency tc ON tc.currency_id = d.to_currency_id "
)

_DB_CURRENCY_SELECT_SQL = "SELECT currency_id, currency_code, currency_name, currency_symbol FROM currency "


class SQLAlchemyDealRecordStore(DealRecordStorePort):
    """SQLAlchemy implementation of deal and currency reads and inserts.

    Every write runs in its own transaction. Uniqueness of deal identifiers and
    currency codes is enforced by table constraints and surfaced as
    `RecordAlreadyExistsError`.
    """

    def __init__(self, engine: Engine):
        """Initialize deal record store.

        Args:
            engine: SQLAlchemy engine used for all persistence operations.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")

        self._engine = engine

    def db_deal_find_by_unique_id(self, deal_unique_id: str) -> Deal | None:
        """Fetch one deal with both currencies by external unique identifier.

        Args:
            deal_unique_id: External deal identifier.

        Returns:
            Deal | None: Stored deal, or None when absent.

        Raises:
            RuntimeError: Raised when read operation fails.
        """

        statement = text(_DB_DEAL_SELECT_SQL + "WHERE d.deal_unique_id = :deal_unique_id").columns(
            deal_timestamp=DateTime(),
            deal_amount=_DB_DEAL_AMOUNT_TYPE,
        )
        try:
            with self._engine.connect() as connection:
                row = connection.execute(statement, {"deal_unique_id": deal_unique_id}).mappings().first()
        except SQLAlchemyError as error:
            raise RuntimeError("deal read by unique id failed") from error

        if row is None:
            return None
        return self._db_map_deal_row(row)

    def db_deal_save(self, deal: Deal) -> Deal:
        """Insert one deal row and return it re-read with its identity.

        Args:
            deal: Deal whose currencies carry store identities.

        Returns:
            Deal: Stored deal.

        Raises:
            RecordAlreadyExistsError: Raised when the unique id is already stored.
            ValueError: Raised when currency identities are missing.
            RuntimeError: Raised when persistence fails.
        """

        if deal.from_currency.currency_id is None or deal.to_currency.currency_id is None:
            raise ValueError("deal currencies must be persisted before the deal")

        insert_statement = text(
            "INSERT INTO deal ("
            "deal_unique_id, from_currency_id, to_currency_id, deal_timestamp, deal_amount"
            ") VALUES ("
            ":deal_unique_id, :from_currency_id, :to_currency_id, :deal_timestamp, :deal_amount"
            ") RETURNING deal_id"
        ).bindparams(
            bindparam("deal_timestamp", type_=DateTime()),
            bindparam("deal_amount", type_=_DB_DEAL_AMOUNT_TYPE),
        )
        select_statement = text(_DB_DEAL_SELECT_SQL + "WHERE d.deal_id = :deal_id").columns(
            deal_timestamp=DateTime(),
            deal_amount=_DB_DEAL_AMOUNT_TYPE,
        )

        try:
            with self._engine.begin() as connection:
                created_row = connection.execute(
                    insert_statement,
                    {
                        "deal_unique_id": deal.deal_unique_id,
                        "from_currency_id": deal.from_currency.currency_id,
                        "to_currency_id": deal.to_currency.currency_id,
                        "deal_timestamp": deal.deal_timestamp,
                        "deal_amount": deal.deal_amount,
                    },
                ).mappings().one()
                stored_row = connection.execute(select_statement, {"deal_id": created_row["deal_id"]}).mappings().one()
        except IntegrityError as error:
            if self._db_is_unique_violation(error, "deal_unique_id"):
                raise RecordAlreadyExistsError(
                    f"deal with unique ID {deal.deal_unique_id} already exists"
                ) from error
            raise RuntimeError("deal insert violated a table constraint") from error
        except SQLAlchemyError as error:
            raise RuntimeError("deal insert failed") from error

        return self._db_map_deal_row(stored_row)

    def db_currency_find_by_code(self, currency_code: str) -> Currency | None:
        """Fetch one currency by exact ISO code.

        Args:
            currency_code: ISO 4217 code.

        Returns:
            Currency | None: Stored currency, or None when absent.

        Raises:
            RuntimeError: Raised when read operation fails.
        """

        statement = text(_DB_CURRENCY_SELECT_SQL + "WHERE currency_code = :currency_code")
        try:
            with self._engine.connect() as connection:
                row = connection.execute(statement, {"currency_code": currency_code}).mappings().first()
        except SQLAlchemyError as error:
            raise RuntimeError("currency read by code failed") from error

        if row is None:
            return None
        return self._db_map_currency_row(row, prefix="")

    def db_currency_save(self, currency: Currency) -> Currency:
        """Insert one currency row.

        Args:
            currency: Currency to create.

        Returns:
            Currency: Stored currency with identity.

        Raises:
            RecordAlreadyExistsError: Raised when the code is already stored.
            RuntimeError: Raised when persistence fails.
        """

        statement = text(
            "INSERT INTO currency (currency_code, currency_name, currency_symbol) "
            "VALUES (:currency_code, :currency_name, :currency_symbol) "
            "RETURNING currency_id, currency_code, currency_name, currency_symbol"
        )

        try:
            with self._engine.begin() as connection:
                row = connection.execute(
                    statement,
                    {
                        "currency_code": currency.currency_code,
                        "currency_name": currency.currency_name,
                        "currency_symbol": currency.currency_symbol,
                    },
                ).mappings().one()
        except IntegrityError as error:
            if self._db_is_unique_violation(error, "currency_code"):
                raise RecordAlreadyExistsError(f"currency {currency.currency_code} already exists") from error
            raise RuntimeError("currency insert violated a table constraint") from error
        except SQLAlchemyError as error:
            raise RuntimeError("currency insert failed") from error

        return self._db_map_currency_row(row, prefix="")

    def _db_map_deal_row(self, row: Any) -> Deal:
        """Map one joined deal row to a typed deal.

        Args:
            row: SQLAlchemy mapping row from the deal select.

        Returns:
            Deal: Typed deal with both currencies.

        Raises:
            KeyError: Raised when row structure is incompatible.
        """

        return Deal(
            deal_id=row["deal_id"],
            deal_unique_id=row["deal_unique_id"],
            from_currency=self._db_map_currency_row(row, prefix="from_"),
            to_currency=self._db_map_currency_row(row, prefix="to_"),
            deal_timestamp=row["deal_timestamp"],
            deal_amount=row["deal_amount"],
        )

    def _db_map_currency_row(self, row: Any, prefix: str) -> Currency:
        return Currency(
            currency_id=row[f"{prefix}currency_id"],
            currency_code=row[f"{prefix}currency_code"],
            currency_name=row[f"{prefix}currency_name"],
            currency_symbol=row[f"{prefix}currency_symbol"],
        )

    def _db_is_unique_violation(self, error: IntegrityError, column_name: str) -> bool:
        """Return whether an integrity error names a unique key on one column.

        PostgreSQL reports the constraint name and SQLite reports the column,
        so both are matched against the message text.

        Args:
            error: Integrity error raised by the driver.
            column_name: Unique column of interest.

        Returns:
            bool: True when the error is a unique violation for the column.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        message = str(error.orig).lower()
        if "unique" not in message and "duplicate key" not in message:
            return False
        return column_name in message
