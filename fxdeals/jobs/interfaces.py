"""Typed interfaces for job-layer deal processing responsibilities."""

from typing import Iterable, Protocol

from fxdeals.domain import Deal, DealBatchReport, Result


class DealSubmissionPort(Protocol):
    """Port definition for single-deal submission and lookup."""

    def deal_submit_single(self, deal: Deal) -> Result[Deal]:
        """Validate, duplicate-check and persist one deal.

        Args:
            deal: Candidate deal.

        Returns:
            Result[Deal]: Stored deal, or `VALIDATION_FAILED`, `DUPLICATE_DEAL`
            or `STORE_FAILURE` error.

        Raises:
            RuntimeError: Implementations convert failures into results.
        """

    def deal_find_by_unique_id(self, deal_unique_id: str) -> Deal | None:
        """Fetch one stored deal by unique identifier.

        Args:
            deal_unique_id: External deal identifier.

        Returns:
            Deal | None: Stored deal or None.

        Raises:
            RuntimeError: Raised when the store read fails.
        """


class DealBatchIngestionPort(Protocol):
    """Port definition for delimited-text batch ingestion."""

    def job_ingest_csv(self, stream: Iterable[str]) -> DealBatchReport:
        """Ingest every row of one comma-delimited text stream.

        Args:
            stream: Text stream or iterable of lines without a header row.

        Returns:
            DealBatchReport: Fully materialized per-file outcome report.

        Raises:
            RuntimeError: Implementations report failures inside the report.
        """
