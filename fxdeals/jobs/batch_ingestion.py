"""Batch ingestion of comma-delimited deal rows.

Rows are read one at a time, parsed into a deal, and saved through the
duplicate-checked save path. Each row produces an `Ok` or `Err` result; failed
rows become report entries and processing continues with the next row.
"""

from __future__ import annotations

import csv
import logging
from typing import Final, Iterable

from fxdeals.currency import CurrencyDirectoryService
from fxdeals.domain import (
    DEAL_AMOUNT_MAX_PRECISION,
    DEAL_AMOUNT_MAX_SCALE,
    Deal,
    DealBatchReport,
    DealErrorKind,
    Err,
    Ok,
    Result,
    domain_deal_amount_fits_storage,
    domain_deal_parse_amount,
    domain_deal_parse_timestamp,
)

from .deal_submission import DealSubmissionService
from .interfaces import DealBatchIngestionPort

logger = logging.getLogger(__name__)

DEAL_ROW_MIN_FIELD_COUNT: Final[int] = 5

_JOB_PARSE_FAILURE_KINDS: Final[frozenset[DealErrorKind]] = frozenset(
    {
        DealErrorKind.MALFORMED_ROW,
        DealErrorKind.MISSING_UNIQUE_ID,
        DealErrorKind.INVALID_CURRENCY_CODE,
        DealErrorKind.SAME_CURRENCY_PAIR,
        DealErrorKind.INVALID_TIMESTAMP,
        DealErrorKind.INVALID_AMOUNT,
    }
)


class DealBatchIngestionJob(DealBatchIngestionPort):
    """Sequential CSV ingestion pipeline producing a per-file report.

    Row layout is `uniqueId,fromCode,toCode,timestamp,amount` with no header.
    Extra trailing fields are ignored.
    """

    def __init__(
        self,
        currency_directory: CurrencyDirectoryService,
        submission_service: DealSubmissionService,
    ):
        """Initialize batch ingestion job.

        Args:
            currency_directory: Directory for code checks and currency resolution.
            submission_service: Service providing the duplicate-checked save path.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if currency_directory is None:
            raise ValueError("currency_directory must not be None")
        if submission_service is None:
            raise ValueError("submission_service must not be None")

        self._currency_directory = currency_directory
        self._submission_service = submission_service

    def job_ingest_csv(self, stream: Iterable[str]) -> DealBatchReport:
        """Ingest every row of one comma-delimited text stream.

        Args:
            stream: Text stream or iterable of lines without a header row.

        Returns:
            DealBatchReport: Success and total counters with ordered row errors.

        Raises:
            RuntimeError: Row and stream failures are reported, not raised.
        """

        total_count = 0
        successful_count = 0
        errors: list[str] = []

        try:
            for row_values in csv.reader(stream):
                total_count += 1
                row_result = self._job_process_row(total_count, row_values)
                if isinstance(row_result, Ok):
                    successful_count += 1
                    continue

                errors.append(_job_format_row_error(total_count, row_values, row_result))
                logger.warning(
                    "deal row rejected",
                    extra={
                        "row_number": total_count,
                        "deal_unique_id": row_values[0] if row_values else None,
                        "error_kind": row_result.kind.value,
                    },
                )
        except (OSError, UnicodeError, csv.Error) as error:
            logger.error("deal batch stream failed", exc_info=error)
            errors.append(f"General error processing CSV file: {error}")

        logger.info(
            "finished processing deal batch",
            extra={"successful_count": successful_count, "total_count": total_count},
        )
        return DealBatchReport(
            successful_count=successful_count,
            total_count=total_count,
            errors=tuple(errors),
        )

    def _job_process_row(self, row_number: int, values: list[str]) -> Result[Deal]:
        """Parse and save one row, turning any raised error into a row failure.

        Args:
            row_number: One-based row position in the input.
            values: Field values of the row.

        Returns:
            Result[Deal]: Stored deal, or the row failure.

        Raises:
            RuntimeError: This method converts row failures into results.
        """

        try:
            row_result = self.job_parse_row(values)
            if isinstance(row_result, Err):
                return row_result
            return self._submission_service.deal_save(row_result.value)
        except Exception as error:
            logger.error("deal row processing failed", extra={"row_number": row_number}, exc_info=error)
            return Err(DealErrorKind.STORE_FAILURE, str(error))

    def job_parse_row(self, values: list[str]) -> Result[Deal]:
        """Parse and validate one CSV row into an unsaved deal.

        Currencies are resolved (and created when unseen) as soon as each code
        passes validation, so a row rejected by a later rule may still leave a
        new currency behind.

        Args:
            values: Field values of one row.

        Returns:
            Result[Deal]: Deal with resolved currencies, or the first failed rule.

        Raises:
            RuntimeError: This method converts failures into results.
        """

        if len(values) < DEAL_ROW_MIN_FIELD_COUNT:
            return Err(
                DealErrorKind.MALFORMED_ROW,
                f"expected at least {DEAL_ROW_MIN_FIELD_COUNT} fields, got {len(values)}",
            )

        deal_unique_id, from_currency_code, to_currency_code, timestamp_text, amount_text = values[:5]
        if not deal_unique_id:
            return Err(DealErrorKind.MISSING_UNIQUE_ID, "deal unique ID is missing")

        if not self._currency_directory.currency_is_valid_code(from_currency_code):
            return Err(DealErrorKind.INVALID_CURRENCY_CODE, f"invalid from currency code: {from_currency_code}")
        from_currency_result = self._currency_directory.currency_find_or_create(from_currency_code)
        if isinstance(from_currency_result, Err):
            return from_currency_result

        if not self._currency_directory.currency_is_valid_code(to_currency_code):
            return Err(DealErrorKind.INVALID_CURRENCY_CODE, f"invalid to currency code: {to_currency_code}")
        to_currency_result = self._currency_directory.currency_find_or_create(to_currency_code)
        if isinstance(to_currency_result, Err):
            return to_currency_result

        if from_currency_code == to_currency_code:
            return Err(DealErrorKind.SAME_CURRENCY_PAIR, "from currency and to currency must differ")

        deal_timestamp = domain_deal_parse_timestamp(timestamp_text)
        if deal_timestamp is None:
            return Err(DealErrorKind.INVALID_TIMESTAMP, f"invalid timestamp: {timestamp_text}")

        deal_amount = domain_deal_parse_amount(amount_text)
        if deal_amount is None:
            return Err(DealErrorKind.INVALID_AMOUNT, f"deal amount is not a valid number: {amount_text}")
        if deal_amount <= 0:
            return Err(DealErrorKind.INVALID_AMOUNT, f"deal amount must be positive: {amount_text}")
        if not domain_deal_amount_fits_storage(deal_amount):
            return Err(
                DealErrorKind.INVALID_AMOUNT,
                f"deal amount exceeds {DEAL_AMOUNT_MAX_SCALE} decimal places"
                f" or {DEAL_AMOUNT_MAX_PRECISION - DEAL_AMOUNT_MAX_SCALE} integer digits: {amount_text}",
            )

        return Ok(
            Deal(
                deal_unique_id=deal_unique_id,
                from_currency=from_currency_result.value,
                to_currency=to_currency_result.value,
                deal_timestamp=deal_timestamp,
                deal_amount=deal_amount,
            )
        )


def _job_format_row_error(row_number: int, values: list[str], row_error: Err) -> str:
    """Render one report entry for a failed row.

    Args:
        row_number: One-based row position in the input.
        values: Raw field values of the row.
        row_error: Failure returned by parsing or saving.

    Returns:
        str: Report entry naming the row, its unique id and the reason.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    first_field = values[0] if values else "<empty row>"
    if row_error.kind in _JOB_PARSE_FAILURE_KINDS:
        return f"Row {row_number}: invalid deal with unique ID {first_field}: {row_error.message}"
    return f"Row {row_number}: failed to save deal with ID {first_field}: {row_error.message}"
