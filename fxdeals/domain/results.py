"""Explicit success/failure result values for deal processing.

Component operations return `Ok(value)` or `Err(kind, message)` instead of
raising for business-rule failures, so batch callers can branch on each row
result and keep going.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

ValueT = TypeVar("ValueT")


class DealErrorKind(str, Enum):
    """Failure categories reported by validation, ingestion and persistence."""

    MALFORMED_ROW = "MALFORMED_ROW"
    MISSING_UNIQUE_ID = "MISSING_UNIQUE_ID"
    INVALID_CURRENCY_CODE = "INVALID_CURRENCY_CODE"
    SAME_CURRENCY_PAIR = "SAME_CURRENCY_PAIR"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    DUPLICATE_DEAL = "DUPLICATE_DEAL"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STORE_FAILURE = "STORE_FAILURE"


@dataclass(frozen=True)
class Ok(Generic[ValueT]):
    """Successful result wrapping one value."""

    value: ValueT


@dataclass(frozen=True)
class Err:
    """Failed result carrying a failure category and a readable reason.

    Attributes:
        kind: Failure category.
        message: Human-readable reason suitable for reports and API payloads.
    """

    kind: DealErrorKind
    message: str


Result = Union[Ok[ValueT], Err]
